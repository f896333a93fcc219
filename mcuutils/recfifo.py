"""Ring FIFO of variable-length byte records.

Each record is stored as a little-endian length header of ``recsize`` bytes
(1 or 2), followed by the record's bytes.  The capacity is a power of two
and the read and write counters wrap as unsigned 32-bit values.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from .kfifo import FifoError, rounddown_pow_of_two, roundup_pow_of_two

_U32 = 0xFFFFFFFF


def max_record_len(length: int, recsize: int) -> int:
    """Clamp ``length`` to the largest value a ``recsize``-byte header can hold."""
    limit = (1 << (recsize << 3)) - 1
    return limit if length > limit else length


def _is_power_of_2(n: int) -> bool:
    return n > 0 and rounddown_pow_of_two(n) == n


class RecordFifo:
    """A byte ring buffer that keeps records whole.

    ``RecordFifo(size, recsize)`` requires ``size`` to be a power of two of
    at least 2 and ``recsize`` to be 1 or 2.  :meth:`allocate` rounds the
    size up to a power of two instead.
    """

    def __init__(self, size: int, recsize: int = 1) -> None:
        if recsize not in (1, 2):
            raise FifoError(f"record header size must be 1 or 2, got {recsize}")
        if size < 2 or not _is_power_of_2(size):
            raise FifoError(f"fifo size must be a power of two >= 2, got {size}")
        self.recsize = recsize
        self.mask = size - 1
        self._data = bytearray(size)
        self._in = 0
        self._out = 0

    @classmethod
    def allocate(cls, size: int, recsize: int = 1) -> "RecordFifo":
        """Create a record FIFO of ``size`` bytes, rounded up to a power of two."""
        if size < 0:
            raise FifoError(f"fifo size must not be negative, got {size}")
        rounded = roundup_pow_of_two(size)
        if rounded < 2:
            raise FifoError(f"fifo size too small: {size}")
        return cls(rounded, recsize)

    @property
    def initialized(self) -> bool:
        """True while the FIFO has a usable buffer."""
        return self.mask != 0

    def size(self) -> int:
        """Capacity in bytes, headers included."""
        return self.mask + 1

    def used(self) -> int:
        """Number of bytes currently stored, headers included."""
        return (self._in - self._out) & _U32

    def _unused(self) -> int:
        return self.size() - self.used()

    def avail(self) -> int:
        """Largest record that can still be written."""
        free = (self.size() - self.used()) & _U32
        if free <= self.recsize:
            return 0
        return max_record_len(free - self.recsize, self.recsize)

    def is_empty(self) -> bool:
        return self._in == self._out

    def is_full(self) -> bool:
        return self.used() > self.mask

    def reset(self) -> None:
        """Discard all content."""
        self._in = 0
        self._out = 0

    def reset_out(self) -> None:
        """Discard all content by moving the read position to the write position."""
        self._out = self._in

    def _copy_in(self, data: bytes, offset: int) -> None:
        start = offset & self.mask
        first = min(len(data), self.size() - start)
        self._data[start:start + first] = data[:first]
        self._data[0:len(data) - first] = data[first:]

    def _copy_out(self, count: int, offset: int) -> bytes:
        start = offset & self.mask
        first = min(count, self.size() - start)
        return bytes(self._data[start:start + first] + self._data[0:count - first])

    def _header(self) -> int:
        length = self._data[self._out & self.mask]
        if self.recsize > 1:
            length |= self._data[(self._out + 1) & self.mask] << 8
        return length

    def put(self, data: bytes) -> int:
        """Append ``data`` as one record; return its length, or 0 if it does not fit."""
        payload = bytes(data)
        length = len(payload)
        if length > max_record_len(length, self.recsize):
            raise FifoError(
                f"record of {length} bytes exceeds a {self.recsize}-byte length header"
            )
        if length + self.recsize > self._unused():
            return 0
        header = length.to_bytes(self.recsize, "little")
        self._copy_in(header, self._in)
        self._copy_in(payload, self._in + self.recsize)
        self._in = (self._in + length + self.recsize) & _U32
        return length

    def _read(self, maxlen: Optional[int]) -> Tuple[bytes, int]:
        if maxlen is not None and maxlen < 0:
            raise ValueError(f"maxlen must not be negative, got {maxlen}")
        length = self._header()
        count = length if maxlen is None else min(maxlen, length)
        return self._copy_out(count, self._out + self.recsize), length

    def get(self, maxlen: Optional[int] = None) -> bytes:
        """Remove the next record and return up to ``maxlen`` of its bytes.

        The whole record is consumed even when it is cut short.  An empty
        FIFO gives ``b""``.
        """
        if self.is_empty():
            return b""
        data, length = self._read(maxlen)
        self._out = (self._out + length + self.recsize) & _U32
        return data

    def peek(self, maxlen: Optional[int] = None) -> bytes:
        """Return up to ``maxlen`` bytes of the next record without removing it."""
        if self.is_empty():
            return b""
        data, _ = self._read(maxlen)
        return data

    def peek_len(self) -> int:
        """Length of the next record in bytes, 0 when empty."""
        if self.is_empty():
            return 0
        return self._header()

    def skip(self) -> None:
        """Drop the next record; raise IndexError if the FIFO is empty."""
        if self.is_empty():
            raise IndexError("skip on an empty fifo")
        self._out = (self._out + self._header() + self.recsize) & _U32

    def out_linear(self, n: int) -> Tuple[int, int]:
        """Return ``(tail, count)``: the buffer offset of the next record's data
        and its length capped at ``n``; ``count`` is 0 when empty."""
        tail = (self._out + self.recsize) & self.mask
        if self.is_empty():
            return tail, 0
        return tail, min(n, self._header())

    def __iter__(self) -> Iterator[bytes]:
        """Consume and yield records until the FIFO is empty."""
        while not self.is_empty():
            yield self.get()