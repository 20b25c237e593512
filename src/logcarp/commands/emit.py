"""The message-emitting subcommands: warn, die, log, debug, trace.

Each takes the message words on the command line, or reads the whole
of stdin when none are given:

    logcarp --program backup.sh warn "disk nearly full"
    rsync ... 2>&1 | logcarp --log /var/log/backup.log log

Messages from the command line never get an "at FILE line N." suffix;
the location would only ever point inside logcarp itself.
"""

import argparse
import sys

from logcarp.lib.route_lib import get_router

# subcommand -> (router method, help)
EVENTS = {
    "warn":        ("warn",        "Write a warning (ERR) to the error channel"),
    "die":         ("fatal",       "Write a fatal error (ERR) and exit 255"),
    "log":         ("log_message", "Write a log entry (LOG) when logging is on"),
    "debug":       ("debug",       "Write a debug line (BUG) at debug level 1+"),
    "trace":       ("trace",       "Write a trace line (TRC) at debug level 2"),
    "server-warn": ("server_warn", "Write a warning to the original stderr only"),
}


def register(subparsers, parents):
    """Register one subcommand per event kind."""
    for name, (method, help_text) in EVENTS.items():
        p = subparsers.add_parser(
            name,
            parents=parents,
            help=help_text,
            description=help_text + ".",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        p.add_argument("message", nargs="*",
                       help="Message words (default: read stdin)")
        p.set_defaults(func=run, event=method)


def read_message(args, stdin=None):
    """Join the message words, or read stdin when there are none."""
    if args.message:
        return " ".join(args.message) + "\n"
    text = (stdin or sys.stdin).read()
    if text and not text.endswith("\n"):
        text += "\n"
    return text


def run(args):
    """Execute an event subcommand. Fatal events raise FatalDiagnostic."""
    text = read_message(args)
    if not text:
        return 0
    emit = getattr(get_router(), args.event)
    emit(text)
    return 0
