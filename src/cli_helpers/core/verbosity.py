"""Verbosity levels and terminal logger initialisation.

Map the number of ``-v`` flags given on the command line to a standard
``logging`` level and install a single terminal handler on the root logger.
The handler can be installed once per process, like a global logger.
"""

import logging
from dataclasses import dataclass

from cli_helpers.core.config import ConfigError, get_logging_settings
from cli_helpers.core.exceptions import LoggerInitError
from cli_helpers.core.levels import LOG_OFF, TRACE

# Indexed by verbosity count; anything past the end is TRACE.
_LEVELS: tuple[int, ...] = (
    LOG_OFF,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)

_HANDLER_NAME = "cli_helpers.terminal"


def select_log_level(verbosity: int) -> int:
    """Return the ``logging`` level for a ``-v`` count.

    0 disables logging, 1 is ERROR, 2 WARNING, 3 INFO, 4 DEBUG and
    5 or more is TRACE. Negative counts are treated as 0.
    """
    if verbosity >= len(_LEVELS):
        return TRACE
    return _LEVELS[max(verbosity, 0)]


def _installed_handler() -> logging.Handler | None:
    for handler in logging.getLogger().handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    return None


def init_logging(verbosity: int) -> None:
    """Install the terminal log handler at the level for ``verbosity``.

    The handler is built from ``get_logging_settings()`` and writes to the
    stream bound in ``sys`` at the time of the call.

    Args:
        verbosity: Number of ``-v`` flags.

    Raises:
        LoggerInitError: If the handler is already installed or cannot be
            built from the settings. The underlying fault is kept in
            ``cause``.

    """
    if _installed_handler() is not None:
        raise LoggerInitError(RuntimeError("Terminal logger is already initialised"))

    try:
        handler = get_logging_settings().build_handler()
    except (ConfigError, OSError) as exc:
        raise LoggerInitError(exc) from exc

    handler.set_name(_HANDLER_NAME)
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(select_log_level(verbosity))


def reset_logging() -> None:
    """Remove the terminal handler installed by ``init_logging``, if any."""
    handler = _installed_handler()
    if handler is None:
        return
    root = logging.getLogger()
    root.removeHandler(handler)
    root.setLevel(logging.WARNING)
    handler.close()


@dataclass(frozen=True)
class Verbosity:
    """Level of verbosity, as counted from repeated ``-v`` flags."""

    verbose: int = 0

    @property
    def level(self) -> int:
        """The ``logging`` level selected by this verbosity."""
        return select_log_level(self.verbose)

    def init_logging(self) -> None:
        """Initialise a terminal logger at this verbosity. See ``init_logging``."""
        init_logging(self.verbose)
