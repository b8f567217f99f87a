"""pathmap Repositories.

- ResourceRepository / EditableRepository: abstract interfaces
- PathMappingRepository: store-backed repository with pre-resolved subtrees
"""

from pathmap.exceptions import (
    RepositoryError,
    ResourceNotFoundError,
    UnsupportedLanguageError,
    UnsupportedResourceError,
)

from .base import EditableRepository, ResourceRepository
from .path_mapping import PathMappingRepository

__all__ = [
    "EditableRepository",
    "ResourceRepository",
    "PathMappingRepository",
    "RepositoryError",
    "ResourceNotFoundError",
    "UnsupportedLanguageError",
    "UnsupportedResourceError",
]
