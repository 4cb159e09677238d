"""CLI entry point for the cli-helpers demo application.

All command logic lives in the cli subpackage.
"""

from cli_helpers.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the cli-helpers application."""
    app()


if __name__ == "__main__":
    main()
