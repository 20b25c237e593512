"""logcarp — error, log and debug channels, httpd error-log style.

Every diagnostic line is stamped with time, pid, program and channel
tag. Each channel can point somewhere different; messages are written
once per physical destination.
"""

from logcarp._version import __version__, __app_name__
from logcarp.api import (
    configure,
    set_debug_level, get_debug_level, set_log_level, get_log_level,
    warn, fatal, carp, croak, confess, server_warn,
    log_message, debug, trace,
    redirect_error, redirect_log, redirect_debug,
    is_error_sink, is_log_sink, is_debug_sink, is_default_output_sink,
    install_as_default_handler, uninstall_default_handler,
    init_router, get_router, traced,
    InvalidSinkError, FatalDiagnostic,
)

__all__ = [
    "__version__", "__app_name__",
    "configure",
    "set_debug_level", "get_debug_level", "set_log_level", "get_log_level",
    "warn", "fatal", "carp", "croak", "confess", "server_warn",
    "log_message", "debug", "trace",
    "redirect_error", "redirect_log", "redirect_debug",
    "is_error_sink", "is_log_sink", "is_debug_sink", "is_default_output_sink",
    "install_as_default_handler", "uninstall_default_handler",
    "init_router", "get_router", "traced",
    "InvalidSinkError", "FatalDiagnostic",
]
