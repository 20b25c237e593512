"""
Message stamping.

Every output line carries a fixed prefix:

    [Mon Sep 15 09:04:55 1997]  4242 test.py ERR: I'm confused at test.py line 3.

i.e. ``[<ctime>]<pid, 6 wide> <program> <TAG>: ``. A message that does
not already end in a newline gets `` at FILE line LINE.`` appended.
Multi-line messages get the stamp on every line.
"""

import os
import re
import sys
import time
from typing import Iterable, Optional, Tuple

# Event tags (the debug channel carries both BUG and TRC)
ERR = 'ERR'
LOG = 'LOG'
BUG = 'BUG'
TRC = 'TRC'

Location = Tuple[str, int]

# Start of each line, but not the empty position after a final newline
_LINE_START = re.compile(r'^(?!\Z)', re.MULTILINE)


def default_program() -> str:
    """Basename of the running script, as given in sys.argv[0]."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else 'python'
    return os.path.basename(argv0) or argv0


def stamp(tag: str, program: str, pid: Optional[int] = None,
          when: Optional[float] = None) -> str:
    """Build the line prefix for one event.

    Args:
        tag: Event tag (ERR, LOG, BUG, TRC)
        program: Program identity shown after the pid
        pid: Process id (default: os.getpid())
        when: Epoch seconds (default: now), rendered in local time
    """
    if pid is None:
        pid = os.getpid()
    return f"[{time.ctime(when)}]{pid:6d} {program} {tag}: "


def caller_frame(stacklevel: int = 1):
    """Return a frame up the stack.

    stacklevel=1 is the caller of the function that calls this. Stops
    at the outermost frame if the stack is shorter.
    """
    frame = sys._getframe(1)
    for _ in range(stacklevel):
        if frame.f_back is None:
            break
        frame = frame.f_back
    return frame


def caller_location(stacklevel: int = 1) -> Location:
    """Return (filename, lineno) for caller_frame(stacklevel)."""
    frame = caller_frame(stacklevel + 1)
    return (frame.f_code.co_filename, frame.f_lineno)


def join_parts(parts: Iterable) -> str:
    return "".join(str(p) for p in parts)


def terminate(text: str, location: Optional[Location] = None) -> str:
    """Make sure text ends in a newline, adding the location if it didn't."""
    if text.endswith("\n"):
        return text
    if location is not None:
        filename, lineno = location
        text += f" at {filename} line {lineno}."
    return text + "\n"


def format_message(parts: Iterable, tag: str, program: str,
                   location: Optional[Location] = None,
                   pid: Optional[int] = None,
                   when: Optional[float] = None) -> str:
    """Join, terminate and stamp a message.

    The location suffix is only added when the joined text does not
    already end in a newline. Without a location such text just gets
    the newline.
    """
    text = terminate(join_parts(parts), location)
    prefix = stamp(tag, program, pid=pid, when=when)
    return _LINE_START.sub(lambda _m: prefix, text)
