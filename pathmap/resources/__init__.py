"""pathmap Resources.

Filesystem-backed values stored in repositories:
- FilesystemResource: base class with attachment lifecycle
- DirectoryResource, FileResource, GenericResource: the resource variants
- ResourceCollection: ordered collection returned by queries
- create_resource: rebuilds a resource from a stored locator
"""

from .base import Attachment, FilesystemResource, ResourceKind
from .collection import ResourceCollection
from .directory import DirectoryResource
from .file import FileResource
from .generic import GenericResource
from .locator import create_resource, serialize_resource

__all__ = [
    "Attachment",
    "FilesystemResource",
    "ResourceKind",
    "ResourceCollection",
    "DirectoryResource",
    "FileResource",
    "GenericResource",
    "create_resource",
    "serialize_resource",
]
