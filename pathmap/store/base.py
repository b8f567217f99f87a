"""
pathmap Stores: Key-Value Store Interface.

Repositories keep one row per virtual path in a flat key-value store.
Keys are canonical paths; values are filesystem locators, or ``None`` for
a virtual directory without real backing. An empty string is a regular
locator and is never treated as "no locator".
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List

from pathmap.core.constants import ErrorCode, Locator

NOT_SET = object()


class StoreError(Exception):
    """Raised when a store cannot read, write or find a key."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        """Initialize StoreError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    @classmethod
    def for_missing_key(cls, key: str) -> "StoreError":
        return cls(f"The key {key!r} does not exist.", ErrorCode.NOT_FOUND)


class KeyValueStore(ABC):
    """
    Abstract base class for the stores backing a repository.

    Implementations must provide point reads and writes, full key
    enumeration and bulk reads. Key order is the order rows were written
    in; repositories rely on this to keep listings sorted.

    ``batch()`` groups several writes. The default implementation gives no
    guarantee beyond running the block; stores that can commit or roll back
    several rows at once override it.
    """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a key is present."""

    @abstractmethod
    def get(self, key: str, default: Any = NOT_SET) -> Locator:
        """
        Read the value of a key.

        Args:
            key: Key to read
            default: Value returned for a missing key. Without it, a
                     missing key raises StoreError.

        Returns:
            Stored value (None for a virtual directory)

        Raises:
            StoreError: If the key is missing and no default was given
        """

    @abstractmethod
    def set(self, key: str, value: Locator) -> None:
        """Write a value, replacing any previous value of the key."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return all keys, in store order."""

    def get_multiple(self, keys: Iterable[str]) -> Dict[str, Locator]:
        """
        Read several keys at once.

        Args:
            keys: Keys to read

        Returns:
            Mapping of key to value, in the order requested. Missing keys
            are omitted.
        """
        values: Dict[str, Locator] = {}
        for key in keys:
            value = self.get(key, NOT_SET)
            if value is not NOT_SET:
                values[key] = value
        return values

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Group several writes (no transactional guarantee by default)."""
        yield
