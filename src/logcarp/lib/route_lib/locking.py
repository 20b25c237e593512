"""
Per-write advisory locking.

Each physical write happens inside locked(sink). For a writable regular
file this takes an exclusive flock() and seeks to end of file first,
so appends from other processes made since our last write are not
overwritten. Everything else (terminals, pipes, in-memory buffers)
is written without a lock.
"""

from contextlib import contextmanager

from .sinks import fcntl


@contextmanager
def locked(sink):
    """Hold an exclusive lock on sink for the duration of the block.

    Lock acquisition blocks until granted. The lock is released on
    every exit path.
    """
    if not sink.lockable():
        yield sink
        return

    fd = sink.fileno()
    fcntl.flock(fd, fcntl.LOCK_EX)
    try:
        sink.seek_end()
        yield sink
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)


def locked_write(sink, text: str) -> None:
    """Append text to sink under its lock."""
    with locked(sink):
        sink.write(text)
