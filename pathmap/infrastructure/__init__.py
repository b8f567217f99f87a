"""pathmap Infrastructure Layer.

This layer provides services used by the stores, repositories and CLI:
- ConfigManager: Hierarchical configuration (YAML files, environment)
- Logger: Structured logging system
"""

from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource, ConfigValue
from .logger import Logger, LogLevel, configure_logging, get_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
    # ConfigManager exports
    "ConfigSource",
    "ConfigValue",
    "ConfigError",
    "Config",
]
