"""Opinionated helpers for consistent command-line interfaces.

Re-export the pieces a command needs: the ``Timestamp`` argument type, the
``-v`` verbosity option with its terminal logger, and the error types.

Example::

    from typing import Annotated

    import typer

    from cli_helpers import Timestamp, VerboseOption, Verbosity, timestamp_option


    def main(
        since: Annotated[Timestamp, timestamp_option("--since")],
        verbose: VerboseOption = 0,
    ) -> None:
        Verbosity(verbose).init_logging()


    typer.run(main)
"""

from cli_helpers.core.exceptions import CliHelpersError, InvalidTimestampError, LoggerInitError
from cli_helpers.core.timestamps import Timestamp, parse_timestamp
from cli_helpers.core.verbosity import Verbosity
from cli_helpers.options import VerboseOption, parse_timestamp_option, timestamp_option

__version__ = "0.1.0"

__all__ = [
    "CliHelpersError",
    "InvalidTimestampError",
    "LoggerInitError",
    "Timestamp",
    "VerboseOption",
    "Verbosity",
    "parse_timestamp",
    "parse_timestamp_option",
    "timestamp_option",
]
