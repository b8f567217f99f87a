"""
pathmap Resources: Locator Serialization.

Repositories store a resource as its filesystem locator and rebuild the
resource from the locator when it is read again. The variant is decided
by the live filesystem at read time, not by what was stored.
"""

from pathmap.core.constants import Locator
from pathmap.resources.base import FilesystemResource, ResourceKind
from pathmap.resources.directory import DirectoryResource
from pathmap.resources.file import FileResource
from pathmap.resources.generic import GenericResource


def serialize_resource(resource: FilesystemResource) -> Locator:
    """Return the store value for a resource."""
    return resource.filesystem_path


def create_resource(locator: Locator) -> FilesystemResource:
    """
    Rebuild a detached resource from a store value.

    Args:
        locator: Stored filesystem locator, or None for a virtual directory

    Returns:
        DirectoryResource or FileResource if the locator points to one,
        GenericResource otherwise
    """
    kind = ResourceKind.for_locator(locator)

    if kind == ResourceKind.DIRECTORY:
        return DirectoryResource(locator)
    elif kind == ResourceKind.FILE:
        return FileResource(locator)
    else:
        return GenericResource(locator)
