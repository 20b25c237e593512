"""
Install the router as the process's default warning and fatal handler.

Two standard diagnostic paths are taken over:

    warnings.showwarning   every emitted warning becomes a warn event,
                           stamped with the warning's own file and line
    sys.excepthook         an uncaught exception is routed like a fatal
                           event (traceback included) before exit

Nothing happens at import time; call install_as_default_handler()
explicitly (tests can simply not call it).
"""

import sys
import traceback
import warnings
from typing import Optional

from .errors import FatalDiagnostic
from .manager import DiagnosticRouter, get_router

_saved_showwarning = None
_saved_excepthook = None


def _resolve(router: Optional[DiagnosticRouter]) -> DiagnosticRouter:
    return router if router is not None else get_router()


def make_showwarning(router: Optional[DiagnosticRouter] = None):
    """Build a warnings.showwarning replacement bound to router.

    With router=None the process-wide router is looked up per call, so
    a later init_router() is honoured. An explicit file= gets the
    stamped warning instead of the channels.
    """
    def showwarning(message, category, filename, lineno, file=None, line=None):
        text = f"{category.__name__}: {message}"
        _resolve(router).warning_event(text, (filename, lineno), file=file)
    return showwarning


def make_excepthook(router: Optional[DiagnosticRouter] = None, fallback=None):
    """Build a sys.excepthook replacement bound to router.

    KeyboardInterrupt goes to fallback (the previous hook) unchanged.
    A FatalDiagnostic that escaped was already routed and is not
    repeated.
    """
    fallback = fallback or sys.__excepthook__

    def excepthook(exc_type, exc, tb):
        if issubclass(exc_type, KeyboardInterrupt):
            fallback(exc_type, exc, tb)
            return
        if issubclass(exc_type, FatalDiagnostic):
            return
        text = "".join(traceback.format_exception(exc_type, exc, tb))
        _resolve(router).uncaught_event(text)
    return excepthook


def install_as_default_handler(router: Optional[DiagnosticRouter] = None) -> None:
    """Route warnings and uncaught exceptions through router.

    Calling it again rebinds to the new router; the handlers saved
    on the first call are the ones uninstall restores.
    """
    global _saved_showwarning, _saved_excepthook
    if _saved_showwarning is None:
        _saved_showwarning = warnings.showwarning
        _saved_excepthook = sys.excepthook
    warnings.showwarning = make_showwarning(router)
    sys.excepthook = make_excepthook(router, fallback=_saved_excepthook)


def uninstall_default_handler() -> None:
    """Restore the handlers that were active before installation."""
    global _saved_showwarning, _saved_excepthook
    if _saved_showwarning is None:
        return
    warnings.showwarning = _saved_showwarning
    sys.excepthook = _saved_excepthook
    _saved_showwarning = None
    _saved_excepthook = None


def is_installed() -> bool:
    return _saved_showwarning is not None
