"""Fixed-capacity ring FIFO of elements with wrapping indices.

The capacity is always a power of two, so the read and write counters can
run freely and be masked into the buffer.  Counters are unsigned 32-bit
values, as the sizes and lengths derived from them are.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Iterable, List, Optional, Tuple

_U32 = 0xFFFFFFFF

EINVAL = 1
"""Error code for an invalid argument."""

ENOMEM = 2
"""Error code for a failed allocation."""


class FifoError(ValueError):
    """Raised when a FIFO cannot be set up or used."""

    def __init__(self, message: str, code: int = EINVAL) -> None:
        super().__init__(message)
        self.code = code


def _fls(n: int) -> int:
    return n.bit_length()


def roundup_pow_of_two(n: int) -> int:
    """Return the smallest power of two not below ``n`` (1 for 0)."""
    if n == 0:
        return 1
    return 1 << _fls(n - 1)


def rounddown_pow_of_two(n: int) -> int:
    """Return the largest power of two not above ``n`` (0 for 0)."""
    if n == 0:
        return 0
    return 1 << (_fls(n) - 1)


def _is_power_of_2(n: int) -> bool:
    return n != 0 and (n & (n - 1)) == 0


class Kfifo:
    """A ring FIFO holding arbitrary elements.

    ``Kfifo(size)`` requires ``size`` to be a power of two of at least 2.
    Use :meth:`allocate` to round a size up, or :meth:`from_buffer_size`
    to derive the capacity from a byte count and an element size.
    """

    def __init__(self, size: int) -> None:
        if size < 2 or not _is_power_of_2(size):
            raise FifoError(f"fifo size must be a power of two >= 2, got {size}")
        self._setup(size, 1)

    def _setup(self, size: int, esize: int) -> None:
        self._in = 0
        self._out = 0
        self.esize = esize
        self.mask = size - 1
        self._data: Optional[List[Any]] = [None] * size

    @classmethod
    def allocate(cls, size: int) -> "Kfifo":
        """Create a FIFO for ``size`` elements, rounded up to a power of two."""
        if size < 0:
            raise FifoError(f"fifo size must not be negative, got {size}")
        rounded = roundup_pow_of_two(size)
        if rounded < 2:
            raise FifoError(f"fifo size too small: {size}")
        return cls(rounded)

    @classmethod
    def from_buffer_size(cls, buffer_size: int, esize: int) -> "Kfifo":
        """Create a FIFO over a buffer of ``buffer_size`` bytes of ``esize``-byte elements.

        The element count is rounded down to a power of two.
        """
        if esize <= 0:
            raise FifoError(f"element size must be positive, got {esize}")
        if buffer_size < 0:
            raise FifoError(f"buffer size must not be negative, got {buffer_size}")
        count = buffer_size // esize
        if not _is_power_of_2(count):
            count = rounddown_pow_of_two(count)
        if count < 2:
            raise FifoError(f"buffer of {buffer_size} bytes holds too few elements")
        fifo = cls(count)
        fifo.esize = esize
        return fifo

    @property
    def initialized(self) -> bool:
        """True while the FIFO has a usable buffer."""
        return self.mask != 0

    def _buffer(self) -> List[Any]:
        if self._data is None:
            raise FifoError("fifo has been freed")
        return self._data

    def size(self) -> int:
        """Capacity in elements."""
        return self.mask + 1

    def __len__(self) -> int:
        return (self._in - self._out) & _U32

    def _unused(self) -> int:
        return (self.mask + 1) - len(self)

    def avail(self) -> int:
        """Number of elements that can still be written."""
        return (self.size() - len(self)) & _U32

    def is_empty(self) -> bool:
        return self._in == self._out

    def is_full(self) -> bool:
        return len(self) > self.mask

    def reset(self) -> None:
        """Discard all content."""
        self._in = 0
        self._out = 0

    def reset_out(self) -> None:
        """Discard all content by moving the read position to the write position."""
        self._out = self._in

    def put(self, value: Any) -> bool:
        """Append one element; return False if the FIFO was full."""
        data = self._buffer()
        if self.is_full():
            return False
        data[self._in & self.mask] = value
        self._in = (self._in + 1) & _U32
        return True

    def get(self) -> Any:
        """Remove and return the oldest element; raise IndexError if empty."""
        value = self.peek()
        self._out = (self._out + 1) & _U32
        return value

    def peek(self) -> Any:
        """Return the oldest element without removing it; raise IndexError if empty."""
        data = self._buffer()
        if self.is_empty():
            raise IndexError("peek from an empty fifo")
        return data[self._out & self.mask]

    def put_many(self, values: Iterable[Any]) -> int:
        """Append as many of ``values`` as fit; return the number written."""
        data = self._buffer()
        chunk = list(islice(values, max(self._unused(), 0)))
        count = len(chunk)
        size = self.size()
        start = self._in & self.mask
        first = min(count, size - start)
        data[start:start + first] = chunk[:first]
        data[0:count - first] = chunk[first:]
        self._in = (self._in + count) & _U32
        return count

    def _copy_out(self, n: int) -> List[Any]:
        if n < 0:
            raise ValueError(f"count must not be negative, got {n}")
        data = self._buffer()
        count = min(n, len(self))
        size = self.size()
        start = self._out & self.mask
        first = min(count, size - start)
        return data[start:start + first] + data[0:count - first]

    def peek_many(self, n: int) -> List[Any]:
        """Return up to ``n`` of the oldest elements without removing them."""
        return self._copy_out(n)

    def get_many(self, n: int) -> List[Any]:
        """Remove and return up to ``n`` of the oldest elements."""
        items = self._copy_out(n)
        self._out = (self._out + len(items)) & _U32
        return items

    def skip(self, count: int = 1) -> None:
        """Advance the read position by ``count`` elements without bounds checking."""
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        self._out = (self._out + count) & _U32

    def out_linear(self, n: int) -> Tuple[int, int]:
        """Return ``(tail, count)``: the read offset and how many elements lie
        contiguously from it, at most ``n``."""
        size = self.size()
        tail = self._out & self.mask
        return tail, min(n, len(self), size - tail)

    def out_linear_view(self, n: int) -> List[Any]:
        """Return the contiguous run of readable elements from the read offset."""
        data = self._buffer()
        tail, count = self.out_linear(n)
        return data[tail:tail + count]

    def free(self) -> None:
        """Release the buffer; the FIFO is unusable afterwards."""
        self._in = 0
        self._out = 0
        self.esize = 0
        self.mask = 0
        self._data = None