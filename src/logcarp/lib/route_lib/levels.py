"""
Verbosity levels and the debug/log gate.

Two independent integer thresholds control output:

    debug_level   0 = off, 1 = debug(), 2 = debug() + trace()
    log_level     0 = off, 1 = log_message()

Symbolic values are accepted case-insensitively:

    no, false, off     ->  0
    yes, true, on      ->  1
    trace, tracing     ->  2   (debug level only)

Anything numeric (scientific notation included) passes through as its
numeric value; any other word is 0. Turning debugging on also turns
logging on.
"""

import re
from typing import Union

# Named levels (informational; the gate stores raw numbers)
OFF = 0
ON = 1
DEBUG = 1
TRACE = 2

NO_WORDS = frozenset({'no', 'false', 'off'})
YES_WORDS = frozenset({'yes', 'true', 'on'})
TRACE_WORDS = frozenset({'trace', 'tracing'})

# Leading numeric prefix, the way a string numifies ("3.0e0", " 2x", ".5")
_NUMERIC_PREFIX = re.compile(
    r'\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
)

Level = Union[int, float]


def _as_number(value: float) -> Level:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def coerce_level(value, allow_trace: bool = True) -> Level:
    """Translate a user-supplied verbosity value to a number.

    Args:
        value: int, float, bool or string token
        allow_trace: Whether TRACE/TRACING map to 2 (debug level only)

    Returns:
        The numeric level. Integral values come back as int.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return _as_number(value)

    token = str(value).strip()
    word = token.lower()
    if word in NO_WORDS:
        return OFF
    if word in YES_WORDS:
        return ON
    if allow_trace and word in TRACE_WORDS:
        return TRACE

    match = _NUMERIC_PREFIX.match(token)
    if match is None:
        return OFF
    return _as_number(float(match.group(1)))


class VerbosityGate:
    """Holds debug and log verbosity for one router.

    Both levels start at 0: log, debug and trace output is suppressed,
    warnings and fatal errors still reach the Error channel.
    """

    def __init__(self, debug_level=OFF, log_level=OFF):
        self.debug_level: Level = OFF
        self.log_level: Level = OFF
        self.set_log_level(log_level)
        self.set_debug_level(debug_level)

    def set_debug_level(self, value=None) -> Level:
        """Set (when value is given) and return the debug level.

        A non-zero debug level switches logging on if it was off.
        """
        if value is not None:
            self.debug_level = coerce_level(value, allow_trace=True)
            if self.debug_level and not self.log_level:
                self.log_level = ON
        return self.debug_level

    def set_log_level(self, value=None) -> Level:
        """Set (when value is given) and return the log level."""
        if value is not None:
            self.log_level = coerce_level(value, allow_trace=False)
        return self.log_level

    @property
    def debugging(self) -> bool:
        return self.debug_level > 0

    @property
    def tracing(self) -> bool:
        return self.debug_level > 1

    @property
    def logging(self) -> bool:
        return self.log_level > 0
