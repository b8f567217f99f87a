"""
pathmap Core: Constants and Type Definitions

This module provides system-wide constants, error codes, and type definitions
shared by the stores, resources and repositories.
"""
from enum import IntEnum
from typing import Optional, TypeAlias

# Version information
PATHMAP_VERSION = "1.0.0"

# The only query language understood by repositories
GLOB_LANGUAGE = "glob"

# Root of every repository namespace
ROOT_PATH = "/"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for pathmap operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, query or configuration
    NOT_FOUND = 2  # Resource or store key doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    CONFLICT = 4  # Resource conflict
    UNSUPPORTED = 5  # Unsupported query language or resource type
    INTERNAL_ERROR = 6  # Bug in pathmap


# Type aliases for clarity
VirtualPath: TypeAlias = str
RealPath: TypeAlias = str
Glob: TypeAlias = str

# Store value: a filesystem locator, or None for a virtual directory
Locator: TypeAlias = Optional[str]


class Limits:
    """System limits and default values."""

    # Path limits
    MAX_PATH_LENGTH = 4096
    MAX_FILENAME_LENGTH = 255

    # Log file rotation
    LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT = 5


class StoreBackend:
    """Names of the store backends understood by the factory."""

    MEMORY = "memory"
    YAML = "yaml"


class ConfigKey:
    """Configuration key constants (dot-separated, below the ``pathmap`` root)."""

    ROOT = "pathmap"

    STORE_BACKEND = "pathmap.store.backend"
    STORE_PATH = "pathmap.store.path"

    LOGGING_LEVEL = "pathmap.logging.level"
    LOGGING_FILE = "pathmap.logging.file"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        "store": {
            "backend": StoreBackend.MEMORY,
            "path": None,
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }
}
