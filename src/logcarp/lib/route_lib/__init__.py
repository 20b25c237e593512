"""
route_lib — error, log and debug channels with sink-level dedup.

A reusable diagnostic router providing:
- Four channels (error, log, debug, raw_error), each bound to a sink
- Debug/log verbosity gate with symbolic level names
- Fixed-format line stamps (time, pid, program, tag)
- One write per physical sink, however many channels point at it
- Advisory flock() around each append to a shared file

Public API:
    DiagnosticRouter   — dispatch engine
    init_router        — singleton initialization
    get_router         — access singleton
    ChannelRegistry    — channel to sink bindings
    Sink               — writable output target
    resolve_sink       — validate a sink reference
    identical          — same (device, inode) test
    VerbosityGate      — debug/log levels
    coerce_level       — symbolic level translation
    format_message     — stamp a message
    locked             — per-write lock context manager
    install_as_default_handler / uninstall_default_handler
    InvalidSinkError, FatalDiagnostic
    traced             — function tracing decorator
"""

from .manager import DiagnosticRouter, init_router, get_router
from .channels import (
    ChannelRegistry, Channel, KNOWN_CHANNELS, CHANNEL_TAGS,
    CHANNEL_DESCRIPTIONS, ERROR, LOG, DEBUG, RAW_ERROR, format_channel_list,
)
from .sinks import Sink, resolve_sink
from .identity import identical, sink_identity
from .levels import VerbosityGate, coerce_level
from .formatter import format_message, stamp
from .locking import locked
from .hooks import install_as_default_handler, uninstall_default_handler
from .errors import InvalidSinkError, FatalDiagnostic
from .trace import traced

__all__ = [
    'DiagnosticRouter', 'init_router', 'get_router',
    'ChannelRegistry', 'Channel', 'KNOWN_CHANNELS', 'CHANNEL_TAGS',
    'CHANNEL_DESCRIPTIONS', 'ERROR', 'LOG', 'DEBUG', 'RAW_ERROR',
    'format_channel_list',
    'Sink', 'resolve_sink', 'identical', 'sink_identity',
    'VerbosityGate', 'coerce_level', 'format_message', 'stamp', 'locked',
    'install_as_default_handler', 'uninstall_default_handler',
    'InvalidSinkError', 'FatalDiagnostic',
    'traced',
]
