"""Build stores and repositories from configuration.

Example:
    >>> config = ConfigManager()
    >>> config.set("pathmap.store.backend", "yaml")
    >>> config.set("pathmap.store.path", "~/.local/share/pathmap/store.yaml")
    >>> repo = create_repository(config)
"""

from typing import Optional

from pathmap.core.constants import ConfigKey, ErrorCode, StoreBackend
from pathmap.core.validators import ValidationError, validate_store_backend
from pathmap.infrastructure.config_manager import ConfigError, ConfigManager
from pathmap.infrastructure.logger import Logger
from pathmap.repository import PathMappingRepository
from pathmap.store import KeyValueStore, MemoryStore, YamlFileStore


def create_store(config: ConfigManager, logger: Optional[Logger] = None) -> KeyValueStore:
    """
    Create the store selected by ``pathmap.store.backend``.

    Args:
        config: Configuration manager
        logger: Logger handed to the store

    Returns:
        MemoryStore or YamlFileStore

    Raises:
        ConfigError: If the backend is unknown or the YAML backend has no path
    """
    backend = config.get(ConfigKey.STORE_BACKEND, StoreBackend.MEMORY)

    try:
        validate_store_backend(backend)
    except ValidationError as e:
        raise ConfigError(str(e), ErrorCode.INVALID_INPUT)

    if backend == StoreBackend.YAML:
        path = config.get(ConfigKey.STORE_PATH)
        if not path:
            raise ConfigError(
                f"The {StoreBackend.YAML} store backend requires {ConfigKey.STORE_PATH}",
                ErrorCode.INVALID_INPUT,
            )
        return YamlFileStore(path, logger=logger)

    return MemoryStore(logger=logger)


def create_repository(
    config: Optional[ConfigManager] = None, logger: Optional[Logger] = None
) -> PathMappingRepository:
    """
    Create a repository on top of the configured store.

    Args:
        config: Configuration manager (defaults only if None)
        logger: Logger shared by the store and the repository

    Returns:
        Repository instance
    """
    if config is None:
        config = ConfigManager(load_environment=False)

    return PathMappingRepository(create_store(config, logger), logger=logger)
