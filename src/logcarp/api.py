"""Process-wide diagnostic calls.

Thin wrappers over the DiagnosticRouter singleton, so application code
can just ``from logcarp import warn, log_message, debug``. Locations in
the stamped output point at the code calling these functions, not at
this module.

Also re-exports the route_lib public API for convenience imports.
"""

from logcarp.config import resolve_config

# Re-export route_lib public API — one-stop import
from logcarp.lib.route_lib import (                  # noqa: F401
    DiagnosticRouter, init_router, get_router,
    Sink, InvalidSinkError, FatalDiagnostic,
    install_as_default_handler, uninstall_default_handler,
    traced,
)
from logcarp.lib.route_lib import channels as ch


def configure(environ=None, **explicit):
    """Initialize the process-wide router from arguments and environment.

    Keyword arguments match config.ENV_VARS keys (debug_level,
    log_level, program, error, log, debug) and win over LOGCARP_*
    variables.
    """
    cfg = resolve_config(explicit, environ=environ)
    return init_router(
        program=cfg["program"],
        debug_level=cfg["debug_level"] or 0,
        log_level=cfg["log_level"] or 0,
        error=cfg["error"],
        log=cfg["log"],
        debug=cfg["debug"],
    )


# ---------------------------------------------------------------------------
# Verbosity
# ---------------------------------------------------------------------------
def set_debug_level(value=None):
    """Set and/or return the debug level (0 off, 1 debug, 2 trace)."""
    return get_router().set_debug_level(value)


def get_debug_level():
    return get_router().debug_level


def set_log_level(value=None):
    """Set and/or return the log level (0 off, 1 on)."""
    return get_router().set_log_level(value)


def get_log_level():
    return get_router().log_level


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
def warn(*parts):
    """Warning on the error channel, copied to distinct debug/log sinks."""
    get_router().warn(*parts, stacklevel=2)


def fatal(*parts):
    """Like warn(), then raise FatalDiagnostic (exit status 255)."""
    get_router().fatal(*parts, stacklevel=2)


def carp(*parts):
    """warn() reported from the perspective of the caller's caller."""
    get_router().warn(*parts, stacklevel=3)


def croak(*parts):
    """fatal() reported from the perspective of the caller's caller."""
    get_router().fatal(*parts, stacklevel=3)


def confess(*parts):
    """fatal() with a stack listing."""
    get_router().confess(*parts, stacklevel=2)


def server_warn(*parts):
    """Warning on the original stderr only, whatever error points at."""
    get_router().server_warn(*parts, stacklevel=2)


def log_message(*parts):
    get_router().log_message(*parts, stacklevel=2)


def debug(*parts):
    get_router().debug(*parts, stacklevel=2)


def trace(*parts):
    get_router().trace(*parts, stacklevel=2)


# ---------------------------------------------------------------------------
# Redirection
# ---------------------------------------------------------------------------
def redirect_error(ref):
    """Send the error channel to ref (stream, descriptor or path)."""
    return get_router().redirect(ch.ERROR, ref)


def redirect_log(ref):
    return get_router().redirect(ch.LOG, ref)


def redirect_debug(ref):
    return get_router().redirect(ch.DEBUG, ref)


# ---------------------------------------------------------------------------
# Identity queries
# ---------------------------------------------------------------------------
def is_error_sink(ref):
    return get_router().is_sink(ch.ERROR, ref)


def is_log_sink(ref):
    return get_router().is_sink(ch.LOG, ref)


def is_debug_sink(ref):
    return get_router().is_sink(ch.DEBUG, ref)


def is_default_output_sink(ref):
    """True when ref is the process's standard output."""
    return get_router().channels.is_default_output(ref)
