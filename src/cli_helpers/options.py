"""Typer option types shared by command-line applications.

Provide a ``-v/--verbose`` counting option and a factory for options whose
value is parsed into a ``Timestamp``, so commands declare both in one line.
"""

from typing import Annotated, Any

import typer

from cli_helpers.core.exceptions import InvalidTimestampError
from cli_helpers.core.timestamps import Timestamp, parse_timestamp

VerboseOption = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="Level of verbosity"),
]


def parse_timestamp_option(value: str | Timestamp) -> Timestamp:
    """Parse a CLI value into a ``Timestamp``.

    Raise ``typer.BadParameter`` if the value matches no timestamp format.
    """
    if isinstance(value, Timestamp):
        return value
    try:
        return parse_timestamp(value)
    except InvalidTimestampError as exc:
        raise typer.BadParameter(
            f"{value!r} is neither an epoch timestamp nor `date` output "
            "like 'Fri Aug 25 08:47:09 AM CEST 2023'"
        ) from exc


def timestamp_option(*param_decls: str, **kwargs: Any) -> Any:
    """Build a ``typer.Option`` that parses its value into a ``Timestamp``.

    Args:
        param_decls: Option names, e.g. ``"--start"``.
        kwargs: Extra ``typer.Option`` keyword arguments such as ``help``.

    Returns:
        The option info to use in an ``Annotated[Timestamp, ...]`` parameter.

    """
    kwargs.setdefault("metavar", "TIMESTAMP")
    return typer.Option(*param_decls, parser=parse_timestamp_option, **kwargs)
