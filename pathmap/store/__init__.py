"""pathmap Store Layer.

Flat key-value stores holding one row per virtual path:
- KeyValueStore: abstract interface used by repositories
- MemoryStore: dict-backed store with transactional batches
- YamlFileStore: MemoryStore persisted to a YAML file
"""

from .base import KeyValueStore, StoreError
from .memory import MemoryStore
from .yaml_store import YamlFileStore

__all__ = [
    "KeyValueStore",
    "StoreError",
    "MemoryStore",
    "YamlFileStore",
]
