"""CLI command for measuring the time between two timestamps."""

import logging
from typing import Annotated

import typer

from cli_helpers.cli._helpers import configure_logging
from cli_helpers.core.timestamps import NANOS_PER_SECOND, Timestamp
from cli_helpers.options import VerboseOption, timestamp_option

logger = logging.getLogger(__name__)


def diff(
    start: Annotated[Timestamp, timestamp_option("--start", help="Start of the interval")],
    end: Annotated[Timestamp, timestamp_option("--end", help="End of the interval")],
    verbose: VerboseOption = 0,
) -> None:
    """Print the signed number of seconds from START to END."""
    configure_logging(verbose)
    delta = end.nanos - start.nanos
    logger.info("From %s to %s is %d ns", start, end, delta)
    typer.echo(f"{delta / NANOS_PER_SECOND:.3f}")
