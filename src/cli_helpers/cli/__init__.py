"""CLI subpackage for the cli-helpers demo application.

Create the Typer application and register all command modules.
"""

import typer

from cli_helpers.cli.diff_cmd import diff
from cli_helpers.cli.parse_cmd import parse

app = typer.Typer(help="Parse and compare timestamps given as CLI arguments")

app.command()(parse)
app.command()(diff)

__all__ = ["app"]
