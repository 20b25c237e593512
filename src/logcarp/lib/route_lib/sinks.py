"""
Sink abstraction: a writable text stream the router can append to.

A Sink wraps a stream and records whether the router owns it. Owned
sinks (opened from a path, or duplicated from a raw descriptor) are
closed by the router; borrowed sinks (streams handed in by the caller,
sys.stderr, sys.stdout) never are.

Accepted sink references for resolve_sink():
    Sink            used as-is after validation
    file object     anything with write(); borrowed
    int             a file descriptor; duplicated, owned
    str / PathLike  a filesystem path; opened for append, owned
"""

import io
import os
import stat
import sys
from typing import Optional

from .errors import InvalidSinkError

if sys.platform != 'win32':
    import fcntl
else:
    fcntl = None


class Sink:
    """A writable output target bound to one or more channels.

    Every write is flushed immediately (the channel is unbuffered from
    the caller's point of view).
    """

    def __init__(self, stream, name: Optional[str] = None, owned: bool = False):
        self.stream = stream
        self.name = name or getattr(stream, 'name', None) or repr(stream)
        self.owned = owned

    def __repr__(self):
        kind = 'owned' if self.owned else 'borrowed'
        return f"Sink({self.name!r}, {kind})"

    @classmethod
    def open(cls, path, encoding: str = 'utf-8') -> 'Sink':
        """Open a path for appending. Raises InvalidSinkError on failure."""
        try:
            stream = open(path, 'a', encoding=encoding)
        except OSError as e:
            raise InvalidSinkError(path, e.strerror or str(e)) from e
        return cls(stream, name=os.fspath(path), owned=True)

    @classmethod
    def from_fd(cls, fd: int, encoding: str = 'utf-8') -> 'Sink':
        """Duplicate an open, writable descriptor and wrap the copy."""
        try:
            os.fstat(fd)
        except OSError as e:
            raise InvalidSinkError(fd, e.strerror or str(e)) from e
        if fcntl is not None:
            flags = fcntl.fcntl(fd, fcntl.F_GETFL)
            if flags & os.O_ACCMODE == os.O_RDONLY:
                raise InvalidSinkError(fd, "descriptor is open read-only")
        dup = os.dup(fd)
        stream = open(dup, 'w', encoding=encoding, closefd=True)
        return cls(stream, name=f"fd{fd}", owned=True)

    def fileno(self) -> Optional[int]:
        """The underlying descriptor, or None for in-memory streams."""
        try:
            return self.stream.fileno()
        except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
            return None

    @property
    def closed(self) -> bool:
        return bool(getattr(self.stream, 'closed', False))

    def writable(self) -> bool:
        if self.closed or not hasattr(self.stream, 'write'):
            return False
        check = getattr(self.stream, 'writable', None)
        if check is None:
            return True
        try:
            return bool(check())
        except ValueError:
            return False

    def lockable(self) -> bool:
        """True when the sink is a writable regular file we can flock()."""
        if fcntl is None or not self.writable():
            return False
        fd = self.fileno()
        if fd is None:
            return False
        try:
            return stat.S_ISREG(os.fstat(fd).st_mode)
        except OSError:
            return False

    def seek_end(self) -> None:
        self.stream.seek(0, os.SEEK_END)

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def close(self) -> None:
        """Close the stream if the router opened it."""
        if self.owned and not self.closed:
            self.stream.close()


def resolve_sink(ref) -> Sink:
    """Turn a sink reference into a validated, writable Sink.

    Raises:
        InvalidSinkError: If no open, writable sink can be obtained.
    """
    if isinstance(ref, Sink):
        sink = ref
    elif isinstance(ref, bool):
        raise InvalidSinkError(ref, "not a stream, descriptor or path")
    elif isinstance(ref, int):
        return Sink.from_fd(ref)
    elif isinstance(ref, (str, os.PathLike)):
        return Sink.open(ref)
    elif hasattr(ref, 'write'):
        sink = Sink(ref)
    else:
        raise InvalidSinkError(ref, "not a stream, descriptor or path")

    if not sink.writable():
        raise InvalidSinkError(ref, "stream is closed or not writable")
    return sink


def as_sink(ref) -> Sink:
    """Wrap a reference for comparison only (no writability checks).

    Used by the is_*_sink() queries, which must not open files or
    duplicate descriptors.
    """
    if isinstance(ref, Sink):
        return ref
    if isinstance(ref, int) and not isinstance(ref, bool):
        return Sink(_DescriptorRef(ref), name=f"fd{ref}")
    return Sink(ref)


class _DescriptorRef:
    """Minimal stream stand-in exposing only fileno()."""

    def __init__(self, fd: int):
        self.fd = fd

    def fileno(self) -> int:
        return self.fd
