"""Exception hierarchy for cli-helpers errors.

A single base exception with two specialised kinds: a wrapped fault from
logger setup, and an invalid timestamp carrying the offending input. Callers
distinguish them by type, e.g. to choose an exit code.
"""


class CliHelpersError(Exception):
    """Base exception for all cli-helpers errors."""


class LoggerInitError(CliHelpersError):
    """Error raised when the terminal logger cannot be initialised.

    Carry the lower-level fault unchanged so callers can inspect it.

    Args:
        cause: The exception raised by the logging setup.

    """

    def __init__(self, cause: Exception) -> None:
        """Initialize logger initialisation error.

        Args:
            cause: The exception raised by the logging setup.

        """
        super().__init__("Logger initialization error")
        self.cause = cause


class InvalidTimestampError(CliHelpersError, ValueError):
    """Error raised when a string matches none of the timestamp formats.

    Args:
        value: The original input, exactly as supplied.

    """

    def __init__(self, value: str) -> None:
        """Initialize invalid timestamp error.

        Args:
            value: The original input, exactly as supplied.

        """
        super().__init__(f"Invalid timestamp format: {value!r}")
        self.value = value
