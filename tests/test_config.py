"""Tests for the terminal logger settings."""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

import cli_helpers.core.config as config_module
from cli_helpers.core.config import (
    ConfigError,
    LoggingSettings,
    get_logging_settings,
    load_logging_settings,
)
from cli_helpers.core.exceptions import CliHelpersError

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _write(directory: Path, body: str, name: str = "settings.yaml") -> Path:
    path = directory / name
    path.write_text(body)
    return path


class TestLoggingSettings:
    """Test suite for the LoggingSettings value."""

    def test_defaults(self) -> None:
        """Default to timestamped records on stderr."""
        settings = LoggingSettings()
        assert settings.format == _DEFAULT_FORMAT
        assert settings.datefmt == "%H:%M:%S"
        assert settings.stream == "stderr"

    def test_unknown_stream_rejected(self) -> None:
        """Reject stream names other than stderr and stdout."""
        with pytest.raises(ConfigError, match="logging.stream must be one of stderr, stdout"):
            LoggingSettings(stream="syslog")

    def test_format_without_fields_rejected(self) -> None:
        """Reject a format that logging.Formatter refuses."""
        with pytest.raises(ConfigError, match="Invalid logging.format") as exc_info:
            LoggingSettings(format="no fields here")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_non_string_format_rejected(self) -> None:
        """Reject YAML scalars that are not strings."""
        with pytest.raises(ConfigError, match="must be strings"):
            LoggingSettings(format=42)  # type: ignore[arg-type]

    def test_build_handler_uses_current_stream(self) -> None:
        """Bind the handler to the stream in sys at build time."""
        handler = LoggingSettings(stream="stdout").build_handler()
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout

    def test_build_handler_formats_records(self) -> None:
        """Format records with the configured format string."""
        handler = LoggingSettings(format="%(levelname)s|%(message)s").build_handler()
        record = logging.LogRecord("cli_helpers.test", logging.INFO, __file__, 1, "hi", None, None)
        assert handler.format(record) == "INFO|hi"

    def test_config_error_is_cli_helpers_error(self) -> None:
        """Keep ConfigError in the package exception hierarchy."""
        assert issubclass(ConfigError, CliHelpersError)


class TestLoadLoggingSettings:
    """Test suite for load_logging_settings()."""

    def test_packaged_settings(self) -> None:
        """Load the settings shipped with the package."""
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("CLI_HELPERS_LOG_STREAM", None)
            settings = load_logging_settings()
        assert settings == LoggingSettings()

    def test_packaged_stream_reads_environment(self) -> None:
        """Select the stream through CLI_HELPERS_LOG_STREAM."""
        with patch.dict(os.environ, {"CLI_HELPERS_LOG_STREAM": "stdout"}):
            assert load_logging_settings().stream == "stdout"

    def test_packaged_stream_rejects_bad_environment(self) -> None:
        """Validate the stream after environment expansion."""
        with (
            patch.dict(os.environ, {"CLI_HELPERS_LOG_STREAM": "stdlog"}),
            pytest.raises(ConfigError, match="'stdlog'"),
        ):
            load_logging_settings()

    def test_missing_directory_gives_defaults(self, tmp_path: Path) -> None:
        """Fall back to the defaults when no settings file exists."""
        assert load_logging_settings(tmp_path / "missing") == LoggingSettings()

    def test_missing_keys_keep_defaults(self, tmp_path: Path) -> None:
        """Override only the keys present in the file."""
        _write(tmp_path, "logging:\n  stream: stdout\n")
        settings = load_logging_settings(tmp_path)
        assert settings.stream == "stdout"
        assert settings.format == _DEFAULT_FORMAT

    def test_file_without_logging_section(self, tmp_path: Path) -> None:
        """Ignore other top-level sections."""
        _write(tmp_path, "environment: test\n")
        assert load_logging_settings(tmp_path) == LoggingSettings()

    def test_null_datefmt(self, tmp_path: Path) -> None:
        """Allow datefmt to be cleared so logging uses its ISO default."""
        _write(tmp_path, "logging:\n  datefmt: null\n")
        assert load_logging_settings(tmp_path).datefmt is None

    def test_local_file_overrides_per_key(self, tmp_path: Path) -> None:
        """Let settings.local.yaml replace individual keys."""
        _write(tmp_path, "logging:\n  format: '%(levelname)s %(message)s'\n  datefmt: '%H:%M'\n")
        _write(tmp_path, "logging:\n  format: '%(message)s'\n", "settings.local.yaml")
        settings = load_logging_settings(tmp_path)
        assert settings.format == "%(message)s"
        assert settings.datefmt == "%H:%M"

    def test_env_default_used_when_unset(self, tmp_path: Path) -> None:
        """Use the inline default of an unset variable."""
        _write(tmp_path, "logging:\n  stream: ${NONEXISTENT_CLI_HELPERS_STREAM:stdout}\n")
        assert load_logging_settings(tmp_path).stream == "stdout"

    def test_env_reference_inside_format(self, tmp_path: Path) -> None:
        """Expand references embedded in a longer value."""
        _write(tmp_path, "logging:\n  format: '${TEST_LOG_PREFIX}: %(message)s'\n")
        with patch.dict(os.environ, {"TEST_LOG_PREFIX": "app"}):
            assert load_logging_settings(tmp_path).format == "app: %(message)s"

    def test_unset_env_reference_raises(self, tmp_path: Path) -> None:
        """Name the key and variable when a reference cannot be resolved."""
        _write(tmp_path, "logging:\n  format: '%(message)s ${NONEXISTENT_CLI_HELPERS_VAR}'\n")
        with pytest.raises(ConfigError, match=r"logging.format needs .*NONEXISTENT_CLI_HELPERS_VAR"):
            load_logging_settings(tmp_path)

    def test_unknown_key_raises(self, tmp_path: Path) -> None:
        """Report misspelt keys instead of ignoring them."""
        _write(tmp_path, "logging:\n  formatt: '%(message)s'\n  level: debug\n")
        with pytest.raises(ConfigError, match="Unknown logging settings: formatt, level"):
            load_logging_settings(tmp_path)

    def test_scalar_logging_section_raises(self, tmp_path: Path) -> None:
        """Require the logging section to be a mapping."""
        _write(tmp_path, "logging: verbose\n")
        with pytest.raises(ConfigError, match="logging section in settings.yaml"):
            load_logging_settings(tmp_path)

    def test_non_mapping_document_raises(self, tmp_path: Path) -> None:
        """Require the settings document to be a mapping."""
        _write(tmp_path, "- stderr\n- stdout\n", "settings.local.yaml")
        with pytest.raises(ConfigError, match="settings.local.yaml must contain a mapping"):
            load_logging_settings(tmp_path)


class TestGetLoggingSettings:
    """Test suite for the lazy singleton get_logging_settings()."""

    def test_loads_on_first_call(self) -> None:
        """Load the packaged settings on first use."""
        assert config_module._settings is None
        assert isinstance(get_logging_settings(), LoggingSettings)

    def test_returns_same_instance(self) -> None:
        """Return the cached settings on later calls."""
        first = get_logging_settings()
        assert get_logging_settings() is first
