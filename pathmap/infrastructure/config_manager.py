#!/usr/bin/env python3
"""Hierarchical configuration manager for pathmap.

This module provides configuration management with:
- 6-level precedence hierarchy
- YAML configuration files (system, user or explicit)
- Environment variable overrides (PATHMAP_*)
- Thread-safe operations
- Deep merge of nested configs

Example:
    >>> config = ConfigManager()
    >>> config.load_file("pathmap.yaml")
    >>> config.get("pathmap.store.backend", default="memory")
    'yaml'
"""

import copy
import os
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from pathmap.core.constants import DEFAULT_CONFIG, ErrorCode

ENV_PREFIX = "PATHMAP_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    CLI_ARGS = 5
    RUNTIME = 6  # Highest precedence


@dataclass
class ConfigValue:
    """Configuration value with metadata."""

    value: Any
    source: ConfigSource
    timestamp: float = field(default_factory=time.time)


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. System config (/etc/pathmap/config.yaml)
    3. User config (~/.config/pathmap/config.yaml)
    4. Environment variables (PATHMAP_*)
    5. CLI arguments
    6. Runtime updates (highest)
    """

    DEFAULT_CONFIG = DEFAULT_CONFIG

    SYSTEM_CONFIG_FILE = "/etc/pathmap/config.yaml"
    USER_CONFIG_FILE = "~/.config/pathmap/config.yaml"

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Whether to read PATHMAP_* environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        # An empty file is an empty configuration
        if config_data is None:
            config_data = {}

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        with self._lock:
            self._config[source] = config_data

    def load_standard_files(self) -> List[str]:
        """Load the system and user config files that exist.

        The user file is skipped when the user layer is already loaded,
        so an explicit config file replaces it.

        Returns:
            Paths of the files loaded
        """
        candidates = [
            (self.SYSTEM_CONFIG_FILE, ConfigSource.SYSTEM_CONFIG),
            (self.USER_CONFIG_FILE, ConfigSource.USER_CONFIG),
        ]
        loaded = []

        for file_path, source in candidates:
            with self._lock:
                if source in self._config:
                    continue

            if Path(file_path).expanduser().is_file():
                self.load_file(file_path, source)
                loaded.append(file_path)

        return loaded

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables in format: PATHMAP_SECTION_KEY=value
        Example: PATHMAP_STORE_BACKEND=yaml
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("_")

            current = env_config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {"pathmap": env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (int, float, bool, or str)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "pathmap.store.backend")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            # Search from highest to lowest precedence
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def get_value(self, key: str) -> Optional[ConfigValue]:
        """Get a configuration value together with the source that provided it.

        Args:
            key: Dot-separated key path

        Returns:
            ConfigValue or None if no source defines the key
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return ConfigValue(value=value, source=source)

            return None

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation."""
        current: Any = config

        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            if part not in current:
                return None
            current = current[part]

        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            if source not in self._config:
                self._config[source] = {}

            parts = key.split(".")
            current = self._config[source]

            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}

            # Merge from lowest to highest precedence
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])

            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                sources_to_clear = [
                    s for s in self._config.keys() if s != ConfigSource.COMPILED_DEFAULTS
                ]
                for s in sources_to_clear:
                    del self._config[s]

