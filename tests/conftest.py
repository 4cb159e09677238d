"""Shared test configuration and fixtures."""

from collections.abc import Iterator

import pytest

import cli_helpers.core.config as config_module
from cli_helpers.core.verbosity import reset_logging


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Start every test without a terminal logger or cached logging settings.

    ``init_logging`` may run only once per process and
    ``get_logging_settings`` caches its result, so both are cleared around
    each test.
    """
    config_module._settings = None
    yield
    reset_logging()
    config_module._settings = None
