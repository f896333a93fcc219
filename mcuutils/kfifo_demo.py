"""Walk-through of the element and record FIFOs.

Each example prints what it does to a text stream and returns what it read
back, so the runs can be checked as well as watched.
"""

from __future__ import annotations

import argparse
import struct
import sys
from dataclasses import dataclass
from typing import ClassVar, Iterable, List, Optional, Sequence, TextIO, Tuple

from .kfifo import Kfifo
from .recfifo import RecordFifo

_INT = struct.Struct("<i")
_INT_SIZE = _INT.size


@dataclass(frozen=True)
class SensorData:
    """A sensor sample: an 8-bit id and a 16-bit value."""

    id: int
    value: int

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BxH")
    SIZE: ClassVar[int] = _LAYOUT.size

    def to_bytes(self) -> bytes:
        """Pack as a padded little-endian record."""
        return self._LAYOUT.pack(self.id, self.value)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "SensorData":
        """Unpack a record produced by :meth:`to_bytes`."""
        if len(raw) != cls.SIZE:
            raise ValueError(f"sensor record must be {cls.SIZE} bytes, got {len(raw)}")
        ident, value = cls._LAYOUT.unpack(raw)
        return cls(ident, value)

    def __str__(self) -> str:
        return f"{{{self.id}, {self.value}}}"


_SENSOR_INPUT = [SensorData(i, i * 10) for i in range(1, 11)]
_INT_INPUT = list(range(1, 11))


def _pack_ints(values: Iterable[int]) -> bytes:
    return b"".join(_INT.pack(v) for v in values)


def _unpack_ints(raw: bytes) -> List[int]:
    return [v for (v,) in _INT.iter_unpack(raw)]


def _pack_sensors(samples: Iterable[SensorData]) -> bytes:
    return b"".join(s.to_bytes() for s in samples)


def _unpack_sensors(raw: bytes) -> List[SensorData]:
    size = SensorData.SIZE
    return [SensorData.from_bytes(raw[i:i + size]) for i in range(0, len(raw), size)]


def _join(items: Iterable[object]) -> str:
    return " ".join(str(item) for item in items)


def _report_empty(fifo, out: TextIO) -> None:
    if fifo.is_empty():
        print("FIFO is empty.", file=out)


def _element_demo(out: TextIO, title: str, fifo: Kfifo, items: Sequence, extra) -> list:
    print(title, file=out)
    print(f"FIFO info: esize = {fifo.esize}, recsize = 0, size = {fifo.size()}", file=out)

    written = fifo.put_many(items[:7])
    print(f"in wrote: {written}", file=out)
    print(f"space left: {fifo.avail()}", file=out)
    fifo.put(extra)
    print(f"length: {len(fifo)}", file=out)
    if fifo.is_full():
        print("FIFO is full.", file=out)

    fifo.skip(3)
    fifo.skip()
    print(f"length: {len(fifo)}", file=out)

    peeked = fifo.peek_many(4)
    print(f"peek read: {len(peeked)}", file=out)
    print(f"length: {len(fifo)}", file=out)
    print(f"peek output: {_join(peeked)}", file=out)
    _report_empty(fifo, out)

    got = fifo.get_many(4)
    print(f"out read: {len(got)}", file=out)
    print(f"length: {len(fifo)}", file=out)
    print(f"out output: {_join(got)}", file=out)
    _report_empty(fifo, out)
    return got


def example_static_fifo(out: TextIO) -> List[List[int]]:
    """Integer FIFOs of fixed and rounded-up size; return what each read back."""
    fixed = Kfifo(8)
    fixed.esize = _INT_SIZE
    first = _element_demo(out, "Example 1.1: fixed FIFO of integers", fixed, _INT_INPUT, 10)

    allocated = Kfifo.allocate(8)
    allocated.esize = _INT_SIZE
    second = _element_demo(
        out, "Example 2.1: allocated FIFO of integers", allocated, _INT_INPUT, 100
    )
    allocated.free()
    return [first, second]


def example_struct_fifo(out: TextIO) -> List[List[SensorData]]:
    """FIFOs of sensor samples; return what each read back."""
    fixed = Kfifo(8)
    fixed.esize = SensorData.SIZE
    first = _element_demo(
        out, "Example 1.2: fixed FIFO of structures", fixed, _SENSOR_INPUT, _SENSOR_INPUT[9]
    )

    sized = Kfifo.from_buffer_size(8 * SensorData.SIZE, SensorData.SIZE)
    print(f"mask = {sized.mask}", file=out)
    second = _element_demo(
        out, "Example 2.2: buffer-sized FIFO of structures", sized, _SENSOR_INPUT, _SENSOR_INPUT[9]
    )
    return [first, second]


def _byte_demo(out: TextIO, title: str, fifo: Kfifo, payload: bytes, item_size: int) -> bytes:
    print(title, file=out)
    print(f"FIFO info: esize = {fifo.esize}, recsize = 0, size = {fifo.size()}", file=out)

    written = fifo.put_many(payload)
    print(f"in wrote: {written}", file=out)
    print(f"space left: {fifo.avail()}", file=out)
    print(f"length: {len(fifo)}", file=out)
    if fifo.is_full():
        print("FIFO is full.", file=out)

    fifo.skip(4 * item_size)
    print(f"length: {len(fifo)}", file=out)

    peeked = bytes(fifo.peek_many(4 * item_size))
    print(f"peek read: {len(peeked)}", file=out)
    print(f"length: {len(fifo)}", file=out)
    _report_empty(fifo, out)

    got = bytes(fifo.get_many(4 * item_size))
    print(f"out read: {len(got)}", file=out)
    print(f"length: {len(fifo)}", file=out)
    _report_empty(fifo, out)
    return got


def example_byte_fifo(out: TextIO) -> Tuple[List[int], List[SensorData]]:
    """Byte FIFOs carrying packed integers and samples; return what they read back."""
    int_fifo = Kfifo.allocate(8 * _INT_SIZE)
    raw_ints = _byte_demo(
        out, "Example 2.3: byte FIFO of integers", int_fifo, _pack_ints(_INT_INPUT[:8]), _INT_SIZE
    )
    ints = _unpack_ints(raw_ints)
    print(f"out output: {_join(ints)}", file=out)
    int_fifo.free()
    if not int_fifo.initialized:
        print("FIFO released.", file=out)

    sensor_fifo = Kfifo.from_buffer_size(8 * SensorData.SIZE, 1)
    raw_sensors = _byte_demo(
        out,
        "Example 2.4: byte FIFO of structures",
        sensor_fifo,
        _pack_sensors(_SENSOR_INPUT[:8]),
        SensorData.SIZE,
    )
    sensors = _unpack_sensors(raw_sensors)
    print(f"out output: {_join(sensors)}", file=out)
    return ints, sensors


def example_reset_fifo(out: TextIO) -> bool:
    """Fill a FIFO, reset it and report whether it ended up empty."""
    fifo = Kfifo(8)
    fifo.put_many([1, 2, 3, 4])
    fifo.reset()
    emptied = fifo.is_empty()
    if emptied:
        print("FIFO has been emptied.", file=out)
    return emptied


def example_record_mode_fifo(out: TextIO) -> List[SensorData]:
    """Store samples as records with a 1-byte header and read them back."""
    fifo = RecordFifo(64, 1)
    print(f"FIFO info: esize = 1, recsize = {fifo.recsize}, size = {fifo.size()}", file=out)

    for sample in (SensorData(1, 100), SensorData(2, 200), SensorData(3, 300)):
        fifo.put(sample.to_bytes())
    print("Data written to FIFO.", file=out)

    samples = []
    while not fifo.is_empty():
        raw = fifo.get(SensorData.SIZE)
        if raw:
            sample = SensorData.from_bytes(raw)
            samples.append(sample)
            print(f"Read record: id = {sample.id}, value = {sample.value}", file=out)
        else:
            print("Failed to read record.", file=out)
    print("FIFO is now empty.", file=out)
    return samples


def example_record_mode_variable_length(out: TextIO) -> List[List[int]]:
    """Store integer arrays of varying length as records with a 2-byte header."""
    fifo = RecordFifo(128, 2)
    print(f"FIFO info: esize = 1, recsize = {fifo.recsize}, size = {fifo.size()}", file=out)

    for array in ([1, 2, 3], [10, 20, 30, 40, 50], [100, 200]):
        fifo.put(_pack_ints(array))
    print("Data written to FIFO.", file=out)

    arrays = []
    while not fifo.is_empty():
        record_len = fifo.peek_len()
        print(f"Next record length: {record_len} bytes", file=out)
        raw = fifo.get(record_len)
        if raw:
            values = _unpack_ints(raw)
            arrays.append(values)
            print(f"Read record: {_join(values)}", file=out)
        else:
            print("Failed to read record.", file=out)
    print("FIFO is now empty.", file=out)
    return arrays


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run every example, writing to standard output."""
    parser = argparse.ArgumentParser(description="Run the FIFO examples.")
    parser.parse_args(argv)
    out = sys.stdout

    print("** Example 1/2: element FIFOs ****************", file=out)
    example_static_fifo(out)
    example_struct_fifo(out)
    example_byte_fifo(out)

    print("\nExample 3: reset FIFO", file=out)
    example_reset_fifo(out)

    print("\nExample 4: Record mode FIFO", file=out)
    example_record_mode_fifo(out)

    print("\nExample 5: Record mode with variable length arrays", file=out)
    example_record_mode_variable_length(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())