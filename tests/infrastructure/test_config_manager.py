#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

import threading

import pytest

from pathmap.core.constants import ConfigKey, ErrorCode, StoreBackend
from pathmap.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    ConfigValue,
)


@pytest.fixture
def manager():
    """Create test config manager."""
    return ConfigManager()


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        """Test config source precedence ordering."""
        sources = [
            ConfigSource.COMPILED_DEFAULTS,
            ConfigSource.SYSTEM_CONFIG,
            ConfigSource.USER_CONFIG,
            ConfigSource.ENVIRONMENT,
            ConfigSource.CLI_ARGS,
            ConfigSource.RUNTIME,
        ]

        assert [s.value for s in sources] == [1, 2, 3, 4, 5, 6]


class TestConfigValue:
    """Tests for ConfigValue dataclass."""

    def test_config_value_creation(self):
        """Test creating a config value."""
        value = ConfigValue(value="yaml", source=ConfigSource.USER_CONFIG)
        assert value.value == "yaml"
        assert value.source == ConfigSource.USER_CONFIG
        assert value.timestamp > 0


class TestConfigError:
    """Tests for ConfigError exception."""

    def test_config_error_creation(self):
        """Test creating config error."""
        error = ConfigError("Test error", ErrorCode.NOT_FOUND)
        assert error.message == "Test error"
        assert error.error_code == ErrorCode.NOT_FOUND
        assert str(error) == "Test error"

    def test_config_error_default_code(self):
        """Test config error with default error code."""
        assert ConfigError("Test error").error_code == ErrorCode.INVALID_INPUT


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_manager_creation(self, manager):
        """Test creating config manager."""
        assert ConfigSource.COMPILED_DEFAULTS in manager._config
        assert isinstance(manager._lock, type(threading.RLock()))

    def test_default_config(self, manager):
        """Test default configuration values."""
        assert manager.get(ConfigKey.STORE_BACKEND) == StoreBackend.MEMORY
        assert manager.get(ConfigKey.STORE_PATH) is None
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "INFO"

    def test_defaults_are_copied(self, manager):
        """Test managers do not share the default dictionary."""
        manager._config[ConfigSource.COMPILED_DEFAULTS]["pathmap"]["logging"]["level"] = "ERROR"
        assert ConfigManager().get(ConfigKey.LOGGING_LEVEL) == "INFO"

    def test_manager_with_config_file(self, config_file):
        """Test creating manager with config file."""
        manager = ConfigManager(config_file=str(config_file))
        assert manager.get(ConfigKey.STORE_BACKEND) == "yaml"
        assert manager.get(ConfigKey.STORE_PATH) == "/tmp/pathmap-store.yaml"
        assert manager.get_value(ConfigKey.LOGGING_LEVEL).source == ConfigSource.USER_CONFIG

    def test_load_file_not_found(self, manager):
        """Test loading non-existent file."""
        with pytest.raises(ConfigError, match="not found") as exc_info:
            manager.load_file("/nonexistent/config.yaml")
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_load_file_invalid_yaml(self, manager, temp_dir):
        """Test loading invalid YAML file."""
        path = temp_dir / "bad.yaml"
        path.write_text("invalid: yaml: content: {]")

        with pytest.raises(ConfigError, match="YAML parse error"):
            manager.load_file(str(path))

    def test_load_file_not_dict(self, manager, temp_dir):
        """Test loading YAML file that's not a dictionary."""
        path = temp_dir / "list.yaml"
        path.write_text("- item1\n- item2\n")

        with pytest.raises(ConfigError, match="Invalid config format"):
            manager.load_file(str(path))

    def test_load_dict(self, manager):
        """Test loading configuration from dictionary."""
        manager.load_dict({"pathmap": {"store": {"backend": "yaml"}}}, ConfigSource.RUNTIME)
        assert manager.get(ConfigKey.STORE_BACKEND) == "yaml"
        # Other keys still come from the defaults
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "INFO"

    def test_load_environment(self, monkeypatch):
        """Test loading configuration from environment variables."""
        monkeypatch.setenv("PATHMAP_STORE_BACKEND", "yaml")
        monkeypatch.setenv("PATHMAP_STORE_PATH", "/srv/store.yaml")
        monkeypatch.setenv("PATHMAP_LOGGING_LEVEL", "ERROR")
        manager = ConfigManager()

        assert manager.get(ConfigKey.STORE_BACKEND) == "yaml"
        assert manager.get(ConfigKey.STORE_PATH) == "/srv/store.yaml"
        assert manager.get_value(ConfigKey.LOGGING_LEVEL).source == ConfigSource.ENVIRONMENT

    def test_environment_overrides_file(self, monkeypatch, config_file):
        """Test environment variables take precedence over config files."""
        monkeypatch.setenv("PATHMAP_STORE_BACKEND", "memory")
        manager = ConfigManager(config_file=str(config_file))
        assert manager.get(ConfigKey.STORE_BACKEND) == "memory"

    def test_environment_can_be_skipped(self, monkeypatch):
        """Test load_environment=False ignores PATHMAP_* variables."""
        monkeypatch.setenv("PATHMAP_STORE_BACKEND", "yaml")
        manager = ConfigManager(load_environment=False)
        assert manager.get(ConfigKey.STORE_BACKEND) == StoreBackend.MEMORY

    def test_parse_env_value(self, manager):
        """Test parsing environment values."""
        assert manager._parse_env_value("true") is True
        assert manager._parse_env_value("Yes") is True
        assert manager._parse_env_value("false") is False
        assert manager._parse_env_value("NO") is False
        assert manager._parse_env_value("42") == 42
        assert manager._parse_env_value("-2.5") == -2.5
        assert manager._parse_env_value("/srv/store.yaml") == "/srv/store.yaml"

    def test_get_with_default(self, manager):
        """Test getting value with default."""
        assert manager.get("nonexistent.key", default="default_value") == "default_value"
        assert manager.get_value("nonexistent.key") is None

    def test_get_nested_non_dict(self, manager):
        """Test getting nested value when intermediate is not dict."""
        assert manager._get_nested({"key": "string_value"}, "key.nested") is None

    def test_set_with_source(self, manager):
        """Test setting value with specific source."""
        manager.set("test.key", "cli_value", source=ConfigSource.CLI_ARGS)
        manager.set("test.key", "runtime_value", source=ConfigSource.RUNTIME)

        assert manager.get("test.key") == "runtime_value"

        manager.clear(ConfigSource.RUNTIME)
        assert manager.get("test.key") == "cli_value"

    def test_get_all(self, manager):
        """Test getting merged configuration."""
        manager.set(ConfigKey.STORE_BACKEND, "yaml")
        all_config = manager.get_all()

        assert all_config["pathmap"]["store"]["backend"] == "yaml"
        assert all_config["pathmap"]["logging"]["level"] == "INFO"

    def test_deep_merge(self, manager):
        """Test deep merging of configurations."""
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        override = {"a": {"c": 20, "e": 4}, "f": 5}

        assert manager._deep_merge(base, override) == {"a": {"b": 1, "c": 20, "e": 4}, "d": 3, "f": 5}

    def test_clear_all_keeps_defaults(self, manager):
        """Test clear() keeps compiled defaults."""
        manager.set(ConfigKey.STORE_BACKEND, "yaml")
        manager.clear()
        assert manager.get(ConfigKey.STORE_BACKEND) == StoreBackend.MEMORY

        manager.clear(ConfigSource.COMPILED_DEFAULTS)
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "INFO"


class TestConfigFiles:
    """Tests for empty files and the standard config file locations."""

    @pytest.fixture
    def standard_files(self, temp_dir, monkeypatch):
        """Point the system and user config files into the temp directory."""
        system_file = temp_dir / "etc" / "config.yaml"
        user_file = temp_dir / "home" / "config.yaml"
        monkeypatch.setattr(ConfigManager, "SYSTEM_CONFIG_FILE", str(system_file))
        monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", str(user_file))
        return system_file, user_file

    def test_empty_file_is_empty_config(self, manager, temp_dir):
        """Test an empty config file keeps every default."""
        path = temp_dir / "empty.yaml"
        path.write_text("")

        manager.load_file(str(path))

        assert manager._config[ConfigSource.USER_CONFIG] == {}
        assert manager.get(ConfigKey.STORE_BACKEND) == StoreBackend.MEMORY

    def test_no_standard_files(self, manager, standard_files):
        """Test missing standard files are skipped silently."""
        assert manager.load_standard_files() == []
        assert ConfigSource.SYSTEM_CONFIG not in manager._config

    def test_load_standard_files(self, manager, standard_files):
        """Test the user file overrides the system file."""
        system_file, user_file = standard_files
        system_file.parent.mkdir()
        system_file.write_text("pathmap:\n  store:\n    backend: yaml\n  logging:\n    level: ERROR\n")
        user_file.parent.mkdir()
        user_file.write_text("pathmap:\n  logging:\n    level: DEBUG\n")

        assert manager.load_standard_files() == [str(system_file), str(user_file)]
        assert manager.get_value(ConfigKey.STORE_BACKEND).source == ConfigSource.SYSTEM_CONFIG
        assert manager.get(ConfigKey.LOGGING_LEVEL) == "DEBUG"
        assert manager.get_value(ConfigKey.LOGGING_LEVEL).source == ConfigSource.USER_CONFIG

    def test_explicit_file_replaces_user_file(self, standard_files, config_file):
        """Test the user file is skipped once a config file was given."""
        _, user_file = standard_files
        user_file.parent.mkdir()
        user_file.write_text("pathmap:\n  store:\n    backend: memory\n")
        manager = ConfigManager(config_file=str(config_file))

        assert manager.load_standard_files() == []
        assert manager.get(ConfigKey.STORE_BACKEND) == "yaml"

    def test_invalid_standard_file_raises(self, manager, standard_files):
        """Test a broken system file is reported, not ignored."""
        system_file, _ = standard_files
        system_file.parent.mkdir()
        system_file.write_text("- not\n- a mapping\n")

        with pytest.raises(ConfigError, match="Invalid config format"):
            manager.load_standard_files()
