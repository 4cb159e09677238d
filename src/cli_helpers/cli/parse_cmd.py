"""CLI command for normalising timestamps.

Parse each positional value and print it as ISO 8601, epoch seconds or
epoch milliseconds. Negative epoch values must follow ``--``.
"""

import logging
from typing import Annotated

import typer

from cli_helpers.cli._helpers import (
    EXIT_INVALID_TIMESTAMP,
    configure_logging,
    format_timestamp,
    validate_output,
)
from cli_helpers.core.exceptions import InvalidTimestampError
from cli_helpers.core.timestamps import parse_timestamp
from cli_helpers.options import VerboseOption

logger = logging.getLogger(__name__)


def parse(
    values: Annotated[
        list[str],
        typer.Argument(help="Epoch seconds, epoch milliseconds or `date` output"),
    ],
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="iso, seconds or millis", callback=validate_output),
    ] = "iso",
    verbose: VerboseOption = 0,
) -> None:
    """Parse timestamps and print them in a normalised form."""
    configure_logging(verbose)
    logger.info("Parsing %d timestamp(s)", len(values))

    for value in values:
        try:
            timestamp = parse_timestamp(value)
        except InvalidTimestampError as exc:
            logger.error("Rejected %r", exc.value)
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=EXIT_INVALID_TIMESTAMP) from exc
        typer.echo(format_timestamp(timestamp, output))
