"""Shared helpers for the cli-helpers demo commands.

Hold the exit codes, the output formats, and the logging setup used by
every command module.
"""

import typer

from cli_helpers.core.exceptions import LoggerInitError
from cli_helpers.core.timestamps import Timestamp
from cli_helpers.core.verbosity import Verbosity

EXIT_LOGGER_INIT = 1
EXIT_INVALID_TIMESTAMP = 2

OUTPUT_FORMATS = ("iso", "seconds", "millis")


def validate_output(value: str) -> str:
    """Validate that the output format is one of the known formats.

    Raise ``typer.BadParameter`` if the format is not recognised.
    """
    if value not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"Must be one of: {', '.join(OUTPUT_FORMATS)}")
    return value


def format_timestamp(timestamp: Timestamp, output: str) -> str:
    """Render a timestamp as ISO 8601, epoch seconds or epoch milliseconds."""
    if output == "seconds":
        return str(timestamp.epoch_seconds)
    if output == "millis":
        return str(timestamp.epoch_millis)
    return str(timestamp)


def configure_logging(verbose: int) -> None:
    """Initialise the terminal logger, exiting with an error if that fails."""
    try:
        Verbosity(verbose).init_logging()
    except LoggerInitError as exc:
        typer.echo(f"Error: {exc}: {exc.cause}", err=True)
        raise typer.Exit(code=EXIT_LOGGER_INIT) from exc
