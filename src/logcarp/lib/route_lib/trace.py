"""
Function tracing decorator.

Routes entry/exit lines through the process-wide router's trace event,
so they only appear at debug level 2 (TRACE) and go wherever the debug
channel points.
"""

import functools
import inspect
from pathlib import Path


def _short_repr(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def traced(func):
    """Decorator emitting TRC lines on function entry, exit and raise.

    Argument formatting is skipped entirely below TRACE level.
    """
    module = inspect.getmodule(func)
    module_name = module.__name__ if module else "unknown"
    qualname = f"{module_name}.{func.__qualname__}"

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_router

        router = get_router()
        if not router.gate.tracing:
            return func(*args, **kwargs)

        args_repr = [_short_repr(a) for a in args]
        args_repr += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        router.trace(f">> {qualname}({', '.join(args_repr)})", stacklevel=2)

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            router.trace(f"!! {qualname} raised: {type(e).__name__}: {e}",
                         stacklevel=2)
            raise

        if result is not None:
            router.trace(f"<< {qualname} returned: {_short_repr(result)}",
                         stacklevel=2)
        else:
            router.trace(f"<< {qualname}", stacklevel=2)
        return result

    return wrapper
