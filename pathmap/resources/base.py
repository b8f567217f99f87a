"""
pathmap Resources: Base Classes and Data Structures.

This module provides the foundation for the resource model:
- ResourceKind: the closed set of resource variants
- Attachment: immutable record of which repository owns a resource, and where
- FilesystemResource: abstract base class for all resources

A resource describes a real filesystem location (or none at all, for a
virtual directory). Once attached to a repository it also has a virtual
path, and child queries are answered by that repository instead of the
real filesystem.
"""

import copy
import os
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pathmap.core import path_utils
from pathmap.core.constants import Locator
from pathmap.exceptions import ResourceNotFoundError

if TYPE_CHECKING:
    from pathmap.repository.base import ResourceRepository
    from pathmap.resources.collection import ResourceCollection


class ResourceKind(Enum):
    """Resource variants."""

    DIRECTORY = "directory"  # Backed by a real directory
    FILE = "file"  # Backed by a real file
    GENERIC = "generic"  # No real backing (virtual directory)

    @classmethod
    def for_locator(cls, locator: Locator) -> "ResourceKind":
        """Determine the variant for a stored locator.

        The live filesystem is inspected, so a locator whose target has
        disappeared is reported as GENERIC.
        """
        if locator is None:
            return cls.GENERIC
        elif os.path.isdir(locator):
            return cls.DIRECTORY
        elif os.path.isfile(locator):
            return cls.FILE
        else:
            return cls.GENERIC


@dataclass(frozen=True)
class Attachment:
    """
    Ownership record of an attached resource.

    Attributes:
        repository: Repository the resource belongs to
        path: Canonical virtual path of the resource in that repository
    """

    repository: "ResourceRepository"
    path: str


class FilesystemResource(ABC):
    """
    Abstract base class for filesystem resources.

    A resource is attached to at most one repository at a time. Adding an
    attached resource to a repository stores a detached ``copy()`` instead,
    so the caller's object keeps its identity.
    """

    kind: ResourceKind = ResourceKind.GENERIC

    def __init__(self, filesystem_path: Optional[str] = None):
        """
        Initialize the resource.

        Args:
            filesystem_path: Real location backing the resource, if any
        """
        self._filesystem_path = filesystem_path
        self._attachment: Optional[Attachment] = None

    @property
    def filesystem_path(self) -> Optional[str]:
        """Real location backing the resource, or None."""
        return self._filesystem_path

    @property
    def attachment(self) -> Optional[Attachment]:
        return self._attachment

    @property
    def path(self) -> Optional[str]:
        """Virtual path, or None while the resource is detached."""
        return self._attachment.path if self._attachment else None

    @property
    def repository(self) -> Optional["ResourceRepository"]:
        return self._attachment.repository if self._attachment else None

    @property
    def name(self) -> Optional[str]:
        """
        Last segment of the virtual path.

        Detached resources are named after their real location.
        """
        if self._attachment:
            return path_utils.get_filename(self._attachment.path)
        if self._filesystem_path:
            return os.path.basename(self._filesystem_path.rstrip(os.sep)) or None
        return None

    @property
    def is_attached(self) -> bool:
        return self._attachment is not None

    def attach_to(self, repository: "ResourceRepository", path: str) -> None:
        """
        Attach the resource to a repository, replacing any previous attachment.

        Args:
            repository: Owning repository
            path: Canonical virtual path
        """
        self._attachment = Attachment(repository=repository, path=path)

    def detach(self, repository: Optional["ResourceRepository"] = None) -> None:
        """
        Detach the resource.

        Args:
            repository: If given, only detach when attached to this repository
        """
        if self._attachment is None:
            return
        if repository is not None and self._attachment.repository is not repository:
            return
        self._attachment = None

    def copy(self) -> "FilesystemResource":
        """Return a detached copy of the resource."""
        duplicate = copy.copy(self)
        duplicate._attachment = None
        return duplicate

    def list_children(self) -> "ResourceCollection":
        """
        List the immediate children of the resource.

        Attached resources list the children stored in their repository;
        detached ones list their real filesystem children.
        """
        if self._attachment:
            return self._attachment.repository.list_children(self._attachment.path)
        return self._list_native_children()

    def has_children(self) -> bool:
        if self._attachment:
            return self._attachment.repository.has_children(self._attachment.path)
        return len(self._list_native_children()) > 0

    def get_child(self, name: str) -> "FilesystemResource":
        """
        Return the child with the given name.

        Raises:
            ResourceNotFoundError: If there is no such child
        """
        if self._attachment:
            return self._attachment.repository.get(path_utils.join(self._attachment.path, name))

        for child in self._list_native_children():
            if child.name == name:
                return child

        raise ResourceNotFoundError.for_path(os.path.join(self._filesystem_path or "", name))

    def has_child(self, name: str) -> bool:
        if self._attachment:
            # Child names may contain wildcard characters, so no glob query
            try:
                self.get_child(name)
            except ResourceNotFoundError:
                return False
            return True
        return any(child.name == name for child in self._list_native_children())

    def _list_native_children(self) -> "ResourceCollection":
        """Children of the real location (none by default)."""
        from pathmap.resources.collection import ResourceCollection

        return ResourceCollection()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(path={self.path!r}, "
            f"filesystem_path={self._filesystem_path!r})"
        )
