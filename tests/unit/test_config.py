"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from loop_chat.config.loader import load_config, substitute_env_vars
from loop_chat.config.schema import (
    ActionsConfig,
    AppConfig,
    FileLoggingConfig,
    LoggingConfig,
    StoreConfig,
)


class TestSubstituteEnvVars:
    """Test environment variable substitution."""

    def test_substitute_single_var(self, monkeypatch: pytest.MonkeyPatch):
        """Test substituting a single environment variable."""
        monkeypatch.setenv("TEST_VAR", "test_value")
        result = substitute_env_vars("Value is ${TEST_VAR}")
        assert result == "Value is test_value"

    def test_substitute_multiple_vars(self, monkeypatch: pytest.MonkeyPatch):
        """Test substituting multiple environment variables."""
        monkeypatch.setenv("VAR1", "value1")
        monkeypatch.setenv("VAR2", "value2")
        result = substitute_env_vars("${VAR1} and ${VAR2}")
        assert result == "value1 and value2"

    def test_missing_env_var_raises(self, monkeypatch: pytest.MonkeyPatch):
        """Test that missing environment variables raise ValueError."""
        monkeypatch.delenv("MISSING", raising=False)
        with pytest.raises(ValueError, match="Environment variable MISSING not found"):
            substitute_env_vars("Value is ${MISSING}")

    def test_no_substitution_needed(self):
        """Test text without environment variables passes through unchanged."""
        result = substitute_env_vars("plain text without vars")
        assert result == "plain text without vars"


class TestSchemaDefaults:
    """Test configuration defaults."""

    def test_store_defaults(self):
        """Test that chat-enabled is edge-triggered by default."""
        assert StoreConfig().reemit_chat_enabled is False
        assert StoreConfig().room_name_from_context is False

    def test_actions_defaults(self):
        """Test that name values are dropped rather than rejected by default."""
        assert ActionsConfig().reject_name_field is False

    def test_logging_defaults(self):
        """Test default logging settings."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "console"
        assert config.file == FileLoggingConfig()
        assert config.file.enabled is False

    def test_invalid_log_level_rejected(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")

    def test_invalid_log_format_rejected(self):
        """Test that unknown log formats are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")


class TestEnvironmentSettings:
    """Test LOOP_CHAT_* environment variables."""

    def test_nested_env_var(self, monkeypatch: pytest.MonkeyPatch):
        """Test setting a nested option from the environment."""
        monkeypatch.setenv("LOOP_CHAT_STORE__REEMIT_CHAT_ENABLED", "true")

        config = AppConfig()

        assert config.store.reemit_chat_enabled is True

    def test_env_var_applies_without_file(self, monkeypatch: pytest.MonkeyPatch):
        """Test that load_config() without a path reads the environment."""
        monkeypatch.setenv("LOOP_CHAT_LOGGING__LEVEL", "DEBUG")

        config = load_config()

        assert config.logging.level == "DEBUG"


class TestLoadConfig:
    """Test loading configuration files."""

    def test_load_defaults(self):
        """Test loading with no file."""
        config = load_config()

        assert isinstance(config, AppConfig)
        assert config.store.reemit_chat_enabled is False

    def test_load_valid_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test loading a valid configuration file."""
        monkeypatch.setenv("TEST_LOG_PATH", str(tmp_path / "chat.log"))
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
store:
  reemit_chat_enabled: true
actions:
  reject_name_field: true
logging:
  level: WARNING
  format: json
  file:
    enabled: true
    path: ${TEST_LOG_PATH}
"""
        )

        config = load_config(config_file)

        assert config.store.reemit_chat_enabled is True
        assert config.actions.reject_name_field is True
        assert config.logging.level == "WARNING"
        assert config.logging.format == "json"
        assert config.logging.file.enabled is True
        assert config.logging.file.path == tmp_path / "chat.log"

    def test_load_empty_file(self, tmp_path: Path):
        """Test that an empty file gives the defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = load_config(config_file)

        assert config.actions.reject_name_field is False

    def test_load_config_missing_file(self):
        """Test that loading non-existent file raises error."""
        with pytest.raises(FileNotFoundError):
            load_config(Path("/nonexistent/config.yaml"))

    def test_load_config_missing_env_var(self, tmp_path: Path):
        """Test that missing environment variable raises error."""
        os.environ.pop("MISSING_VAR", None)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  level: ${MISSING_VAR}\n")

        with pytest.raises(ValueError, match="MISSING_VAR"):
            load_config(config_file)

    def test_load_config_not_a_mapping(self, tmp_path: Path):
        """Test that a top-level list is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- store\n- actions\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(config_file)

    def test_load_config_invalid_values(self, tmp_path: Path):
        """Test that schema violations raise ValidationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  format: xml\n")

        with pytest.raises(ValidationError):
            load_config(config_file)
