"""
pathmap Resources: Resource Collections.

An ordered, list-backed collection of filesystem resources, as returned by
repository queries and accepted by ``add()``.
"""

from typing import Iterable, Iterator, List, Optional, Union

from pathmap.exceptions import UnsupportedResourceError
from pathmap.resources.base import FilesystemResource


class ResourceCollection:
    """Ordered collection of FilesystemResource objects.

    Only filesystem resources are accepted; anything else raises
    UnsupportedResourceError before the collection is modified.
    """

    def __init__(self, resources: Optional[Iterable[FilesystemResource]] = None):
        self._resources: List[FilesystemResource] = []
        if resources is not None:
            self.merge(resources)

    @staticmethod
    def _check(resource: object) -> FilesystemResource:
        if not isinstance(resource, FilesystemResource):
            raise UnsupportedResourceError.for_value(resource, "a FilesystemResource")
        return resource

    def add(self, resource: FilesystemResource) -> None:
        """Append a resource."""
        self._resources.append(self._check(resource))

    def merge(self, resources: Iterable[FilesystemResource]) -> None:
        """Append several resources (all or none)."""
        checked = [self._check(resource) for resource in resources]
        self._resources.extend(checked)

    def replace(self, resources: Iterable[FilesystemResource]) -> None:
        """Replace the whole content of the collection."""
        checked = [self._check(resource) for resource in resources]
        self._resources = checked

    def get(self, index: int) -> FilesystemResource:
        """
        Return the resource at an index.

        Raises:
            IndexError: If the index is out of range
        """
        return self._resources[index]

    def has(self, index: int) -> bool:
        return -len(self._resources) <= index < len(self._resources)

    def remove(self, index: int) -> None:
        del self._resources[index]

    def clear(self) -> None:
        self._resources.clear()

    def get_paths(self) -> List[Optional[str]]:
        """Virtual paths of the resources, in collection order."""
        return [resource.path for resource in self._resources]

    def get_names(self) -> List[Optional[str]]:
        """Names of the resources, in collection order."""
        return [resource.name for resource in self._resources]

    def to_list(self) -> List[FilesystemResource]:
        return list(self._resources)

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return ResourceCollection(self._resources[index])
        return self._resources[index]

    def __iter__(self) -> Iterator[FilesystemResource]:
        return iter(list(self._resources))

    def __len__(self) -> int:
        return len(self._resources)

    def __bool__(self) -> bool:
        return bool(self._resources)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.get_paths()!r})"
