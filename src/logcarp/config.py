"""Configuration for logcarp.

There are no config files. Settings come from environment switches,
resolved with two-layer precedence (highest priority wins):
  1. Explicit values — function arguments or CLI flags
  2. Environment — LOGCARP_* variables

Anything left unset falls back to the router defaults (levels 0,
error to stderr, log to the error sink, debug to stdout).
"""

import os


# ---------------------------------------------------------------------------
# Environment switches
# ---------------------------------------------------------------------------
ENV_VARS = {
    "debug_level": "LOGCARP_DEBUGLEVEL",
    "log_level":   "LOGCARP_LOGLEVEL",
    "program":     "LOGCARP_PROGRAM",
    "error":       "LOGCARP_ERRFILE",
    "log":         "LOGCARP_LOGFILE",
    "debug":       "LOGCARP_DEBUGFILE",
}


def load_env_config(environ=None):
    """Read LOGCARP_* variables into a dict keyed like ENV_VARS.

    Empty variables count as unset. Level values are left as strings;
    the verbosity gate does the coercion.
    """
    environ = os.environ if environ is None else environ
    config = {}
    for key, var in ENV_VARS.items():
        value = environ.get(var)
        if value is not None and value.strip():
            config[key] = value.strip()
    return config


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_config(args=None, keys=None, environ=None):
    """Resolve router settings using explicit > environment precedence.

    Args:
        args: argparse namespace or dict of explicit values (may be None)
        keys: Keys to resolve (default: all of ENV_VARS)
        environ: Mapping to read instead of os.environ

    Returns:
        Dict with a value (or None) for every key.
    """
    if keys is None:
        keys = list(ENV_VARS)
    if args is None:
        explicit = {}
    elif isinstance(args, dict):
        explicit = args
    else:
        explicit = vars(args)
    env_cfg = load_env_config(environ)

    resolved = {}
    for key in keys:
        # Layer 1: explicit
        value = explicit.get(key)
        if value is not None:
            resolved[key] = value
            continue

        # Layer 2: environment
        resolved[key] = env_cfg.get(key)

    return resolved
