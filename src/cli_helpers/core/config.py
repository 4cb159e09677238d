"""Terminal logger settings read from YAML and the environment.

``settings.yaml`` in the package ``config`` directory holds the defaults and
an optional ``settings.local.yaml`` beside it overrides individual keys of
the ``logging`` section. ``${VAR}`` and ``${VAR:default}`` references are
expanded after loading any ``.env`` file. The result is a validated
``LoggingSettings`` so bad values are reported before a handler is built.
"""

import logging
import os
import re
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TextIO, cast

import yaml
from dotenv import load_dotenv

from cli_helpers.core.exceptions import CliHelpersError

LOG_STREAMS = ("stderr", "stdout")

_DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "config"
_SETTINGS_FILES = ("settings.yaml", "settings.local.yaml")
_ENV_REF_RE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<default>[^}]*))?\}")


class ConfigError(CliHelpersError):
    """Raise when configuration loading or validation fails."""


@dataclass(frozen=True)
class LoggingSettings:
    """Validated settings for the terminal log handler.

    Attributes:
        format: ``%``-style record format passed to ``logging.Formatter``.
        datefmt: ``strftime`` format for ``%(asctime)s``, or ``None`` for
            the ``logging`` default.
        stream: Name of the stream to write to, ``stderr`` or ``stdout``.

    """

    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str | None = "%H:%M:%S"
    stream: str = "stderr"

    def __post_init__(self) -> None:
        """Check the stream name and the format strings.

        Raises:
            ConfigError: If the stream is unknown or ``logging.Formatter``
                rejects the format.

        """
        if not isinstance(self.format, str) or not isinstance(self.datefmt, str | None):
            msg = "logging.format and logging.datefmt must be strings"
            raise ConfigError(msg)
        if self.stream not in LOG_STREAMS:
            msg = f"logging.stream must be one of {', '.join(LOG_STREAMS)}, got {self.stream!r}"
            raise ConfigError(msg)
        try:
            logging.Formatter(self.format, self.datefmt)
        except (TypeError, ValueError) as exc:
            msg = f"Invalid logging.format {self.format!r}: {exc}"
            raise ConfigError(msg) from exc

    def resolve_stream(self) -> TextIO:
        """Return the configured stream as currently bound in ``sys``."""
        return sys.stdout if self.stream == "stdout" else sys.stderr

    def build_handler(self) -> logging.Handler:
        """Build a stream handler with these settings."""
        handler = logging.StreamHandler(self.resolve_stream())
        handler.setFormatter(logging.Formatter(self.format, self.datefmt))
        return handler


def _read_logging_section(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open() as f:
        document: Any = yaml.safe_load(f) or {}
    if not isinstance(document, dict):
        raise ConfigError(f"{path.name} must contain a mapping")
    section: Any = cast("dict[str, Any]", document).get("logging") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"logging section in {path.name} must be a mapping")
    return cast("dict[str, Any]", section)


def _expand_env_vars(key: str, value: Any) -> Any:
    """Expand ``${VAR}`` / ``${VAR:default}`` references in a string value.

    Raises:
        ConfigError: If a referenced variable is unset and has no default.

    """
    if not isinstance(value, str):
        return value

    def _lookup(match: re.Match[str]) -> str:
        resolved = os.getenv(match["name"], match["default"])
        if resolved is None:
            msg = f"logging.{key} needs environment variable ${{{match['name']}}}, which is not set"
            raise ConfigError(msg)
        return resolved

    return _ENV_REF_RE.sub(_lookup, value)


def load_logging_settings(config_dir: Path | None = None) -> LoggingSettings:
    """Load and validate the ``logging`` section of the settings files.

    Args:
        config_dir: Directory containing the settings files. Defaults to
            src/cli_helpers/config.

    Returns:
        The merged, expanded and validated settings. Keys missing from every
        file keep the ``LoggingSettings`` defaults.

    Raises:
        ConfigError: If a file is malformed, a key is unknown, an
            environment reference cannot be resolved, or a value is invalid.

    """
    load_dotenv()
    directory = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR

    merged: dict[str, Any] = {}
    for name in _SETTINGS_FILES:
        merged.update(_read_logging_section(directory / name))

    known = {f.name for f in fields(LoggingSettings)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigError(f"Unknown logging settings: {', '.join(unknown)}")

    return LoggingSettings(**{key: _expand_env_vars(key, value) for key, value in merged.items()})


_settings: LoggingSettings | None = None


def get_logging_settings() -> LoggingSettings:
    """Return the process-wide ``LoggingSettings``, loading them on first use.

    Lazy initialisation avoids side effects (file I/O, ``load_dotenv``)
    at import time and makes testing easier.
    """
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_logging_settings()
    return _settings
