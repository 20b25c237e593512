"""
Exception types raised by the diagnostic router.

Only two things can fail: resolving a sink for a redirect, and the
physical write itself. Write failures surface as plain OSError from
the I/O layer; the classes here cover the rest.
"""


class InvalidSinkError(ValueError):
    """A redirect was given something that is not an open, writable sink."""

    def __init__(self, ref, reason: str = "not an open, writable sink"):
        self.ref = ref
        self.reason = reason
        super().__init__(f"Invalid sink {ref!r}: {reason}")


class FatalDiagnostic(SystemExit):
    """Raised by fatal-kind events once the message has been routed.

    Subclasses SystemExit so an uncaught fatal terminates the process
    quietly (the message was already written) with exit status 255.

    Attributes:
        message: The stamped text that was routed to the Error channel.
    """

    EXIT_CODE = 255

    def __init__(self, message: str, code: int = EXIT_CODE):
        super().__init__(code)
        self.message = message

    def __str__(self):
        return self.message
