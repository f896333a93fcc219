# mcuutils

Small utilities in the style of microcontroller firmware helpers. It has no
dependencies outside the standard library.

- `mcuutils.errors`: coded error reports with a replaceable handler.
- `mcuutils.log`: levelled log messages with optional ANSI colour and a pluggable output function.
- `mcuutils.kfifo`: a power-of-two ring FIFO of elements (`Kfifo`).
- `mcuutils.recfifo`: a ring FIFO of variable-length byte records with a 1- or 2-byte length header (`RecordFifo`).
- `mcuutils.kfifo_demo`: a walkthrough of both FIFO kinds, also available as a command.

## Install

```
pip install .
```

## Errors

```python
from mcuutils.errors import ErrorCode, error_handle, error_check, set_error_handler

error_handle(ErrorCode.OPERATION_FAILED, "Something failed: %s", "details")
error_check(1 != 1, ErrorCode.INVALID_ARGUMENT, "Values are equal: %d and %d", 1, 1)

collected = []
previous = set_error_handler(collected.append)   # receives ErrorInfo objects
set_error_handler(None)                          # back to the default handler
```

`error_handle` always reports an error. `error_check` reports one only when its
first argument is false. Both take a printf-style format and arguments. Both
record the calling file, function and line in an `ErrorInfo`. They pass it to the
installed handler and return it. `error_check` returns `None` when the check
passes. Messages are cut to 255 characters.

The default handler, `default_error_handler`, ignores code 0 (`ErrorCode.NONE`).
It writes any other error to standard error as
`[Error <code>]: <message> at "<file>":[<line>] in function [<function>]`.
`format_error` returns that same text.

## Logging

```python
from mcuutils.log import LogLevel, log_printf, set_log_output, set_log_level, set_log_color

set_log_color(False)
set_log_output(print)
set_log_level(LogLevel.INFO)
log_printf(LogLevel.WARN, "temperature %d\n", 42)
```

The output function receives a line such as
`[ WARN] [Fun:<caller> Line:<n>] temperature 42`.

- Messages below the configured level are dropped, and `log_printf` then returns `None`.
- Otherwise it returns the emitted line.
- The defaults are level `DEBUG`, colour on, and output to standard output.
- With colour on, each line is wrapped in an ANSI colour for its level.
- `log_message(level, function, line, fmt, *args)` takes the location explicitly.
- `format_log` builds a line without emitting it.
- Lines are cut to 255 characters.

## Element FIFO

```python
from mcuutils.kfifo import Kfifo

fifo = Kfifo(8)                 # size must be a power of two, at least 2
fifo.put_many(range(7))         # returns the number stored
fifo.put(10)                    # False if the FIFO was full
fifo.skip(4)
print(fifo.peek_many(4))        # [4, 5, 6, 10]
print(fifo.get_many(4))
print(fifo.is_empty())          # True
```

Creating FIFOs:

- `Kfifo.allocate(n)` rounds `n` up to a power of two.
- `Kfifo.from_buffer_size(nbytes, esize)` gives a FIFO of `nbytes // esize` elements, rounded down to a power of two.
- A size that ends up below 2 raises `FifoError`.

Reading and inspecting:

- `get()` and `peek()` raise `IndexError` on an empty FIFO.
- `avail()` gives the free space.
- `out_linear(n)` returns `(tail, count)` for the contiguous readable run.
- `out_linear_view(n)` returns that run itself.

Other operations:

- `reset()` and `reset_out()` discard the contents.
- After `free()` the buffer is gone and further puts and reads raise `FifoError`.

## Record FIFO

```python
from mcuutils.recfifo import RecordFifo

rf = RecordFifo(32, recsize=1)
rf.put(b"\x01\x02\x03")         # returns 3, or 0 if the record does not fit
rf.put(b"\x0a\x0b\x0c\x0d\x0e")
print(rf.peek_len())            # 3
for record in rf:               # consumes records until empty
    print(record)
```

Sizes and headers:

- `RecordFifo.allocate(size, recsize)` rounds the size up to a power of two.
- A record longer than its header can hold (255 bytes for `recsize=1`, 65535 for `recsize=2`) raises `FifoError`.
- `max_record_len` clamps a length to that limit.

Reading:

- `get(maxlen)` always consumes the whole record, but returns only `maxlen` bytes of it.
- `peek(maxlen)` returns the same bytes without consuming the record.
- Both return `b""` when the FIFO is empty.
- `skip()` drops one record and raises `IndexError` when empty.
- `avail()` gives the largest record that still fits.

## Demo

The walkthrough of every FIFO mode prints to standard output:

```
mcuutils-kfifo-demo
```

Each example function in `mcuutils.kfifo_demo` takes a text stream to print to.
Each also returns the data it read back, for example
`example_record_mode_fifo(sys.stdout)`.

## Not included

The package works on in-memory data only. It does not redirect standard input,
output or error to a serial port or any other device. The FIFOs have no locking.
Share one between threads only under your own lock.

## Tests

```
pip install .[test]
pytest
```