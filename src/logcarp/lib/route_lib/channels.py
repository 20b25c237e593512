"""
Channel registry for the diagnostic router.

Channels are the logical diagnostic streams. Each is bound to a sink,
and several channels may share one physical sink:

    error       ERR   warnings and fatal errors (default: stderr)
    log         LOG   operational log (default: the error sink)
    debug       BUG   debug and trace output (default: stdout)
    raw_error   ERR   the original stderr, kept after error is redirected

raw_error is fixed when the registry is built and cannot be rebound,
so the process's real error destination stays reachable. It is bound to
sys.stderr even when error starts out somewhere else.
"""

import sys
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import InvalidSinkError
from .identity import identical
from .sinks import Sink, as_sink, resolve_sink


ERROR = 'error'
LOG = 'log'
DEBUG = 'debug'
RAW_ERROR = 'raw_error'

KNOWN_CHANNELS = (ERROR, LOG, DEBUG, RAW_ERROR)

CHANNEL_TAGS = {
    ERROR:     'ERR',
    LOG:       'LOG',
    DEBUG:     'BUG',
    RAW_ERROR: 'ERR',
}

CHANNEL_DESCRIPTIONS = {
    ERROR:     'Warnings and fatal errors',
    LOG:       'Operational log messages',
    DEBUG:     'Debug and trace output',
    RAW_ERROR: 'Original error stream (never redirected)',
}

# Channels that refuse rebind()
FIXED_CHANNELS = {RAW_ERROR}


@dataclass
class Channel:
    """A named diagnostic stream and the sink it currently writes to."""
    name: str
    sink: Sink
    tag: str


class ChannelRegistry:
    """Holds the four channels and their current sinks.

    Usage::

        reg = ChannelRegistry()             # stderr / stdout defaults
        reg.rebind('log', '/var/log/app.log')
        reg.aliased('log', 'error')         # False now
    """

    def __init__(self, error=None, log=None, debug=None, output=None,
                 raw_error=None):
        if output is None:
            output = sys.stdout
        raw_sink = resolve_sink(raw_error if raw_error is not None else sys.stderr)
        err_sink = resolve_sink(error) if error is not None else raw_sink
        self.default_output: Sink = as_sink(output)
        self._channels: Dict[str, Channel] = {}
        self._bind(ERROR, err_sink)
        self._bind(RAW_ERROR, raw_sink)
        self._bind(LOG, resolve_sink(log) if log is not None else err_sink)
        self._bind(DEBUG, resolve_sink(debug if debug is not None else output))

    def _bind(self, name: str, sink: Sink) -> None:
        self._channels[name] = Channel(name=name, sink=sink,
                                       tag=CHANNEL_TAGS[name])

    def __getitem__(self, name: str) -> Channel:
        try:
            return self._channels[name]
        except KeyError:
            raise KeyError(f"Unknown channel '{name}'") from None

    def sink(self, name: str) -> Sink:
        """Current sink for a channel."""
        return self[name].sink

    def rebind(self, name: str, ref) -> Sink:
        """Point a channel at a new sink.

        The previous binding is untouched if ref cannot be resolved. An
        owned sink that no channel uses any more is closed.

        Raises:
            InvalidSinkError: ref is not an open, writable sink, or the
                channel cannot be rebound.
        """
        if name in FIXED_CHANNELS:
            raise InvalidSinkError(ref, f"channel '{name}' cannot be redirected")
        self[name]  # unknown names fail before any file is opened
        sink = resolve_sink(ref)
        old = self.sink(name)
        self._bind(name, sink)
        if not any(c.sink is old for c in self._channels.values()):
            old.close()
        return sink

    def aliased(self, a: str, b: str) -> bool:
        """True when channels a and b write to the same physical sink."""
        return identical(self.sink(a), self.sink(b))

    def is_sink(self, name: str, ref) -> bool:
        """True when ref is the same physical target as channel `name`."""
        return identical(as_sink(ref), self.sink(name))

    def is_default_output(self, ref) -> bool:
        return identical(as_sink(ref), self.default_output)

    def close(self) -> None:
        """Close every owned sink once. Borrowed sinks stay open."""
        seen = set()
        for channel in self._channels.values():
            if id(channel.sink) in seen:
                continue
            seen.add(id(channel.sink))
            channel.sink.close()


def format_channel_list(registry: Optional[ChannelRegistry] = None) -> str:
    """Format the channel list for display.

    With a registry, each line also shows where the channel points.
    """
    lines = ["Available channels:"]
    max_name = max(len(name) for name in KNOWN_CHANNELS)
    for name in KNOWN_CHANNELS:
        desc = CHANNEL_DESCRIPTIONS.get(name, '')
        line = f"  {name:<{max_name}}  {CHANNEL_TAGS[name]}  {desc}"
        if registry is not None:
            line += f" -> {registry.sink(name).name}"
        lines.append(line)
    return "\n".join(lines)
