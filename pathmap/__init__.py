"""pathmap - virtual path repository for filesystem resources.

Register real files and directories under absolute virtual paths, then
query, list and remove them without walking the filesystem again:

    >>> from pathmap import DirectoryResource, PathMappingRepository
    >>> repo = PathMappingRepository()
    >>> repo.add("/css", DirectoryResource("/srv/project/res/css"))
    >>> repo.find("/css/**").get_names()
    ['icons', 'logo.png', 'style.css']
"""

from pathmap.core.constants import PATHMAP_VERSION
from pathmap.core.validators import ValidationError
from pathmap.exceptions import (
    RepositoryError,
    ResourceNotFoundError,
    UnsupportedLanguageError,
    UnsupportedResourceError,
)
from pathmap.repository import EditableRepository, PathMappingRepository, ResourceRepository
from pathmap.resources import (
    DirectoryResource,
    FileResource,
    FilesystemResource,
    GenericResource,
    ResourceCollection,
)
from pathmap.store import KeyValueStore, MemoryStore, StoreError, YamlFileStore

__version__ = PATHMAP_VERSION

__all__ = [
    "PathMappingRepository",
    "ResourceRepository",
    "EditableRepository",
    "DirectoryResource",
    "FileResource",
    "FilesystemResource",
    "GenericResource",
    "ResourceCollection",
    "KeyValueStore",
    "MemoryStore",
    "YamlFileStore",
    "StoreError",
    "ValidationError",
    "RepositoryError",
    "ResourceNotFoundError",
    "UnsupportedLanguageError",
    "UnsupportedResourceError",
]
