"""
Sink identity: decide whether two sinks are the same physical target.

Two sinks are identical when both resolve to the same (device, inode)
pair. Sinks with no stat-able descriptor (in-memory buffers, test
doubles, closed streams) fall back to handle equality, so they only
ever alias with themselves.
"""

import os
from typing import Optional, Tuple


def sink_identity(sink) -> Optional[Tuple[int, int]]:
    """Return (st_dev, st_ino) for a sink, or None if it cannot be stat'ed."""
    fd = sink.fileno()
    if fd is None:
        return None
    try:
        st = os.fstat(fd)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def identical(a, b) -> bool:
    """True when sinks a and b currently point at the same place."""
    if a is None or b is None:
        return False
    if a is b:
        return True
    id_a = sink_identity(a)
    id_b = sink_identity(b)
    if id_a is not None and id_b is not None:
        return id_a == id_b
    return a.stream is b.stream
