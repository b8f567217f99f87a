"""
pathmap Repositories: Abstract Interfaces.

A repository maps absolute virtual paths (a tree rooted at ``/``) to
filesystem resources. Queries use the glob language; a query without
wildcards addresses a single path.
"""

from abc import ABC, abstractmethod
from typing import Any

from pathmap.core.constants import GLOB_LANGUAGE
from pathmap.resources import FilesystemResource, ResourceCollection


class ResourceRepository(ABC):
    """
    Read access to a resource repository.

    Implementations must provide:
    - get(): the resource at an exact path
    - find(): all resources matching a query
    - contains(): whether a query matches anything
    - list_children() / has_children(): immediate children of a path
    """

    @abstractmethod
    def get(self, path: str) -> FilesystemResource:
        """
        Return the resource at a path, attached to this repository.

        Raises:
            ValidationError: If the path is empty or relative
            ResourceNotFoundError: If nothing exists at the path
        """

    @abstractmethod
    def find(self, query: str, language: str = GLOB_LANGUAGE) -> ResourceCollection:
        """
        Return all resources matching a query (possibly none).

        Raises:
            UnsupportedLanguageError: If the language is not "glob"
            ValidationError: If the query is empty or relative
        """

    @abstractmethod
    def contains(self, query: str, language: str = GLOB_LANGUAGE) -> bool:
        """Check whether a query matches at least one resource."""

    @abstractmethod
    def list_children(self, path: str) -> ResourceCollection:
        """
        Return the immediate children of a path.

        Raises:
            ResourceNotFoundError: If nothing exists at the path
        """

    @abstractmethod
    def has_children(self, path: str) -> bool:
        """Check whether a path has at least one immediate child."""


class EditableRepository(ResourceRepository):
    """A repository that resources can be added to and removed from."""

    @abstractmethod
    def add(self, path: str, resource: Any) -> None:
        """
        Add a resource, or a collection of resources, at a path.

        Raises:
            ValidationError: If the path is empty or relative
            UnsupportedResourceError: If the value is not a resource or collection
        """

    @abstractmethod
    def remove(self, query: str, language: str = GLOB_LANGUAGE) -> int:
        """
        Remove every resource matching a query, with its descendants.

        Returns:
            Number of removed paths
        """

    @abstractmethod
    def clear(self) -> int:
        """
        Remove everything but the root.

        Returns:
            Number of removed paths
        """
