"""
DiagnosticRouter — the dispatch engine.

Decides which channels receive a stamped message, writing at most once
per physical sink. Routing per event:

    warn / fatal   debug  unless debug is the error sink
                   log    unless log is the error sink or the debug sink
                   error  always (fatal then raises FatalDiagnostic)
    log_message    debug  unless debug is the log sink
                   log    always attempted
    debug          debug  (only when debug_level > 0)
    trace          debug  (only when debug_level > 1)

Independently of routing, writes to the debug channel need
debug_level > 0 and writes to the log channel need log_level > 0.
The error channels are never gated.

Every physical write is done under locked() (see locking.py).
"""

import traceback
from typing import List, Optional

from . import channels as ch
from .channels import ChannelRegistry
from .errors import FatalDiagnostic
from .formatter import (
    BUG, ERR, LOG, TRC, Location, caller_frame, caller_location,
    default_program, format_message, join_parts, terminate,
)
from .levels import VerbosityGate
from .locking import locked_write
from .sinks import resolve_sink


class DiagnosticRouter:
    """Routes warn/fatal/log/debug/trace events to their channels.

    Usage::

        router = DiagnosticRouter(program='backup.py')
        router.set_debug_level('on')
        router.redirect(ch.LOG, '/var/log/backup.log')
        router.log_message("started")
        router.warn("disk nearly full")
    """

    def __init__(
        self,
        channels: ChannelRegistry = None,
        program: Optional[str] = None,
        debug_level=0,
        log_level=0,
    ):
        self.channels = channels if channels is not None else ChannelRegistry()
        self.program = program or default_program()
        self.gate = VerbosityGate(debug_level=debug_level, log_level=log_level)

    # -- verbosity --------------------------------------------------------

    def set_debug_level(self, value=None):
        return self.gate.set_debug_level(value)

    def set_log_level(self, value=None):
        return self.gate.set_log_level(value)

    @property
    def debug_level(self):
        return self.gate.debug_level

    @property
    def log_level(self):
        return self.gate.log_level

    # -- channel bindings -------------------------------------------------

    def redirect(self, channel: str, ref):
        """Rebind a channel; raises InvalidSinkError and keeps the old sink."""
        sink = self.channels.rebind(channel, ref)
        self.trace(f"{channel} channel redirected to {sink.name}", stacklevel=2)
        return sink

    def is_sink(self, channel: str, ref) -> bool:
        return self.channels.is_sink(channel, ref)

    # -- events -----------------------------------------------------------

    def warn(self, *parts, stacklevel: int = 1) -> None:
        """Non-fatal warning on the error channel (and debug/log if distinct)."""
        location = caller_location(stacklevel)
        self._route_error(self._format(parts, ERR, location))

    def fatal(self, *parts, stacklevel: int = 1) -> None:
        """Route like warn(), then raise FatalDiagnostic."""
        location = caller_location(stacklevel)
        self._die(self._format(parts, ERR, location))

    def confess(self, *parts, stacklevel: int = 1) -> None:
        """fatal() with a listing of the calling stack appended."""
        location = caller_location(stacklevel)
        text = terminate(join_parts(parts), location)
        text += "".join(traceback.format_stack(caller_frame(stacklevel)))
        self._die(self._format([text], ERR, None))

    def log_message(self, *parts, stacklevel: int = 1) -> None:
        """Operational log entry, copied to debug when that is elsewhere."""
        location = caller_location(stacklevel)
        message = self._format(parts, LOG, location)
        targets = []
        if not self.channels.aliased(ch.DEBUG, ch.LOG):
            targets.append(ch.DEBUG)
        self._deliver(message, targets, ch.LOG)

    def debug(self, *parts, stacklevel: int = 1) -> None:
        if not self.gate.debugging:
            return
        location = caller_location(stacklevel)
        self._deliver(self._format(parts, BUG, location), [], ch.DEBUG)

    def trace(self, *parts, stacklevel: int = 1) -> None:
        if not self.gate.tracing:
            return
        location = caller_location(stacklevel)
        self._deliver(self._format(parts, TRC, location), [], ch.DEBUG)

    def server_warn(self, *parts, stacklevel: int = 1) -> None:
        """Warning written only to the original error stream."""
        location = caller_location(stacklevel)
        self._deliver(self._format(parts, ERR, location), [], ch.RAW_ERROR)

    # -- hook entry points ------------------------------------------------

    def warning_event(self, text: str, location: Optional[Location],
                      file=None) -> None:
        """A warning raised elsewhere, with its own source location.

        With file given the stamped message goes only there, the way
        warnings.showwarning(..., file=f) writes to f.
        """
        message = self._format([text], ERR, location)
        if file is not None:
            locked_write(resolve_sink(file), message)
            return
        self._route_error(message)

    def uncaught_event(self, text: str) -> None:
        """Route a fatal error whose process is already terminating."""
        self._route_error(self._format([text], ERR, None))

    # -- internals --------------------------------------------------------

    def _format(self, parts, tag: str, location: Optional[Location]) -> str:
        return format_message(parts, tag, self.program, location)

    def _error_targets(self) -> List[str]:
        targets = []
        if not self.channels.aliased(ch.DEBUG, ch.ERROR):
            targets.append(ch.DEBUG)
        if not (self.channels.aliased(ch.LOG, ch.ERROR)
                or self.channels.aliased(ch.LOG, ch.DEBUG)):
            targets.append(ch.LOG)
        return targets

    def _route_error(self, message: str) -> None:
        self._deliver(message, self._error_targets(), ch.ERROR)

    def _die(self, message: str) -> None:
        try:
            self._route_error(message)
        except OSError as e:
            raise FatalDiagnostic(message) from e
        raise FatalDiagnostic(message)

    def _deliver(self, message: str, optional: List[str], final: str) -> None:
        """Write to each optional channel, then the final one.

        A failing optional channel does not stop the rest; its error is
        re-raised once the final channel has been written.
        """
        failure = None
        for name in optional:
            try:
                self._write(name, message)
            except OSError as e:
                if failure is None:
                    failure = e
        self._write(final, message)
        if failure is not None:
            raise failure

    def _write(self, name: str, message: str) -> None:
        if name == ch.DEBUG and not self.gate.debugging:
            return
        if name == ch.LOG and not self.gate.logging:
            return
        locked_write(self.channels.sink(name), message)


# =============================================================================
# Module-level singleton
# =============================================================================

_router: Optional[DiagnosticRouter] = None


def init_router(program: Optional[str] = None, debug_level=0, log_level=0,
                error=None, log=None, debug=None,
                raw_error=None) -> DiagnosticRouter:
    """Initialize the process-wide DiagnosticRouter.

    Call once at program startup. Channel arguments accept any sink
    reference (stream, descriptor or path); omitted channels get the
    stderr/stdout defaults. raw_error stands in for the real stderr
    (server_warn output) and is normally left alone.

    Returns:
        The initialized DiagnosticRouter instance
    """
    global _router
    registry = ChannelRegistry(error=error, log=log, debug=debug,
                               raw_error=raw_error)
    _router = DiagnosticRouter(
        channels=registry,
        program=program,
        debug_level=debug_level,
        log_level=log_level,
    )
    return _router


def get_router() -> DiagnosticRouter:
    """Get the process-wide DiagnosticRouter, creating a default if needed."""
    global _router
    if _router is None:
        _router = DiagnosticRouter()
    return _router
