"""
pathmap Stores: In-Memory Store.

A dict-backed store that keeps keys in write order. Batches are
transactional: if the block raises, every row written inside it is rolled
back.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pathmap.core.constants import ErrorCode, Locator
from pathmap.infrastructure.logger import Logger, get_logger
from pathmap.store.base import NOT_SET, KeyValueStore, StoreError


class MemoryStore(KeyValueStore):
    """Key-value store held in a Python dict.

    Supports ``len()``, which repositories use to count rows without
    listing every key.
    """

    def __init__(self, data: Optional[Dict[str, Locator]] = None, logger: Optional[Logger] = None):
        """Initialize the store.

        Args:
            data: Optional initial rows
            logger: Logger to use (a "pathmap.store" logger by default)
        """
        self.logger = logger or get_logger("store")
        self._data: Dict[str, Locator] = {}
        self._batch_depth = 0
        self._snapshot: Optional[Dict[str, Locator]] = None

        for key, value in (data or {}).items():
            self._check_row(key, value)
            self._data[key] = value

    def _check_row(self, key: Any, value: Any) -> None:
        """Reject keys and values outside the store's domain."""
        if not isinstance(key, str):
            raise StoreError(f"Store keys must be strings, got {type(key).__name__}", ErrorCode.INVALID_INPUT)
        if value is not None and not isinstance(value, str):
            raise StoreError(
                f"Store values must be strings or None, got {type(value).__name__} for {key!r}",
                ErrorCode.INVALID_INPUT,
            )

    def exists(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str, default: Any = NOT_SET) -> Locator:
        if key in self._data:
            return self._data[key]
        if default is NOT_SET:
            raise StoreError.for_missing_key(key)
        return default

    def set(self, key: str, value: Locator) -> None:
        self._check_row(key, value)
        with self.batch():
            self._data[key] = value

    def remove(self, key: str) -> bool:
        if key not in self._data:
            return False
        with self.batch():
            del self._data[key]
        return True

    def clear(self) -> None:
        with self.batch():
            self._data.clear()

    def keys(self) -> List[str]:
        return list(self._data)

    def get_multiple(self, keys: Iterable[str]) -> Dict[str, Locator]:
        return {key: self._data[key] for key in keys if key in self._data}

    def items(self) -> List[tuple]:
        """Return all rows as (key, value) pairs, in store order."""
        return list(self._data.items())

    @property
    def in_batch(self) -> bool:
        """Check whether a batch is open."""
        return self._batch_depth > 0

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Run a block as one transaction.

        Nested batches join the outermost one, and a write outside any
        batch is a batch of its own. On success the outermost batch is
        committed once. When its block or the commit raises, the rows are
        restored to their state at its start and the exception propagates,
        so the rows never differ from what was last committed.
        """
        outermost = self._batch_depth == 0
        if outermost:
            self._snapshot = dict(self._data)
        self._batch_depth += 1

        try:
            yield
            if outermost:
                self._commit()
        except BaseException:
            if outermost:
                self._data = self._snapshot
                self.logger.debug("Rolled back batch", rows=len(self._data))
            raise
        finally:
            self._batch_depth -= 1
            if outermost:
                self._snapshot = None

    def _commit(self) -> None:
        """Persist the current rows (nothing to do in memory)."""

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rows={len(self._data)})"
