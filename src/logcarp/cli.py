"""Main CLI entry point for logcarp.

Lets shell scripts emit stamped diagnostics through the same channels
a Python program would use. Two-pass argument parser:
  1. First pass: extract global flags (levels, sinks, program name)
  2. Second pass: dispatch to the event subcommand

Global flags can appear before OR after the subcommand:
  logcarp --debug-level on debug "x=42"
  logcarp debug "x=42" --debug-level on

Unset flags fall back to the LOGCARP_* environment variables.
"""

import argparse
import sys

from logcarp._version import VERSION


# ---------------------------------------------------------------------------
# Global flags (can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--debug-level": {"metavar": "LEVEL", "default": None,
                      "help": "Debug level: 0/off, 1/on, 2/trace "
                              "(env LOGCARP_DEBUGLEVEL)"},
    "--log-level": {"metavar": "LEVEL", "default": None,
                    "help": "Log level: 0/off, 1/on (env LOGCARP_LOGLEVEL)"},
    "--errors": {"metavar": "PATH", "dest": "error", "default": None,
                 "help": "Append the error channel to PATH (env LOGCARP_ERRFILE)"},
    "--log": {"metavar": "PATH", "dest": "log", "default": None,
              "help": "Append the log channel to PATH (env LOGCARP_LOGFILE)"},
    "--debug": {"metavar": "PATH", "dest": "debug", "default": None,
                "help": "Append the debug channel to PATH (env LOGCARP_DEBUGFILE)"},
    "--program": {"metavar": "NAME", "default": None,
                  "help": "Program name shown in the stamp (env LOGCARP_PROGRAM)"},
    "--channels": {"action": "store_true", "default": False,
                   "help": "List channels and where they point, then exit"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        global_parser.add_argument(flag, **kwargs)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in logcarp.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command
    """
    from logcarp.commands import emit
    return [emit]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="logcarp",
        description="logcarp — stamped error, log and debug messages",
        epilog=(
            "Run 'logcarp <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags can appear before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"logcarp {VERSION}",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        parser.add_argument(flag, **kwargs)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[])

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None, environ=None):
    """Main entry point for the logcarp CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].
        environ: Environment mapping. None means os.environ.

    Returns:
        Exit code (0 = success, 2 = bad sink, 255 = die).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    from logcarp.api import configure
    from logcarp.lib.route_lib import (
        FatalDiagnostic, InvalidSinkError, format_channel_list,
    )
    try:
        router = configure(
            environ=environ,
            debug_level=global_args.debug_level,
            log_level=global_args.log_level,
            program=global_args.program,
            error=global_args.error,
            log=global_args.log,
            debug=global_args.debug,
        )
    except InvalidSinkError as e:
        print(f"logcarp: {e}", file=sys.stderr)
        return 2

    try:
        if global_args.channels:
            print(format_channel_list(router.channels))
            return 0

        # Pass 2: parse subcommand
        parser = _build_parser(_discover_commands())
        if not remaining:
            parser.print_help()
            return 0

        args = parser.parse_args(remaining)
        if not hasattr(args, "func"):
            parser.print_help()
            return 0

        return args.func(args) or 0
    except FatalDiagnostic as e:
        return e.code
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    finally:
        router.channels.close()


if __name__ == "__main__":
    sys.exit(main())
