"""Error reporting, levelled logging, element and record ring FIFOs, and a FIFO demo."""

__version__ = "1.0.0"
__all__ = ["errors", "log", "kfifo", "recfifo", "kfifo_demo"]