#!/usr/bin/env python3
"""Path mapping repository backed by a flat key-value store.

When a resource is added, its whole subtree is resolved once and written
as one row per path, so later reads never walk the real filesystem:

    >>> repo = PathMappingRepository()
    >>> repo.add("/css", DirectoryResource("/path/to/project/res/css"))
    >>> repo.get("/css/style.css").filesystem_path
    '/path/to/project/res/css/style.css'
    >>> repo.find("/css/*.css").get_paths()
    ['/css/style.css']

Store invariants maintained here:
- the root ``/`` always has a row
- every row's ancestors have rows (virtual directories have no locator)
- after each ``add()`` the rows are sorted by key, so listings come out
  parents first and alphabetically
"""

from collections.abc import Sized
from typing import Any, Optional

from pathmap.core import path_utils
from pathmap.core.constants import GLOB_LANGUAGE, ROOT_PATH
from pathmap.core.validators import (
    ValidationError,
    validate_absolute_path,
    validate_resource_name,
)
from pathmap.exceptions import (
    ResourceNotFoundError,
    UnsupportedLanguageError,
    UnsupportedResourceError,
)
from pathmap.infrastructure.logger import Logger, get_logger
from pathmap.query import QueryEngine, is_dynamic
from pathmap.repository.base import EditableRepository
from pathmap.resources import (
    FilesystemResource,
    ResourceCollection,
    create_resource,
    serialize_resource,
)
from pathmap.store import KeyValueStore, MemoryStore


class PathMappingRepository(EditableRepository):
    """
    Repository mapping virtual paths to filesystem resources.

    Only FilesystemResource objects (and collections of them) can be
    added. Every mutation runs inside ``store.batch()``, so stores with
    transactional batches commit or roll back a whole call at once.

    Attributes:
        store: Key-value store holding one row per virtual path
        query: Query engine evaluating child and glob queries on the store
    """

    def __init__(self, store: Optional[KeyValueStore] = None, logger: Optional[Logger] = None):
        """
        Initialize the repository.

        Args:
            store: Store of all the paths (a new MemoryStore if None)
            logger: Logger to use (a "pathmap.repository" logger by default)
        """
        self.store = store if store is not None else MemoryStore()
        self.logger = logger or get_logger("repository")
        self.query = QueryEngine(self.store)

        self._create_root()

    def get(self, path: str) -> FilesystemResource:
        validate_absolute_path(path, "path")
        path = path_utils.canonicalize(path)

        if not self.store.exists(path):
            raise ResourceNotFoundError.for_path(path)

        resource = create_resource(self.store.get(path))
        resource.attach_to(self, path)

        return resource

    def find(self, query: str, language: str = GLOB_LANGUAGE) -> ResourceCollection:
        query = self._prepare_query(query, language)

        if is_dynamic(query):
            return self.query.resolve(self.query.glob_paths(query), self)

        if self.store.exists(query):
            return self.query.resolve([query], self)

        return ResourceCollection()

    def contains(self, query: str, language: str = GLOB_LANGUAGE) -> bool:
        query = self._prepare_query(query, language)

        if is_dynamic(query):
            return bool(self.query.glob_paths(query))

        return self.store.exists(query)

    def add(self, path: str, resource: Any) -> None:
        validate_absolute_path(path, "path")
        path = path_utils.canonicalize(path)

        if isinstance(resource, (list, tuple)):
            resource = ResourceCollection(resource)

        rows_before = self._count_store()

        if isinstance(resource, ResourceCollection):
            for child in resource:
                validate_resource_name(child.name)

            with self.store.batch():
                self._ensure_directory_exists(path)
                for child in resource:
                    self._add_resource(path_utils.join(path, child.name), child)
                self._sort_store()

        elif isinstance(resource, FilesystemResource):
            with self.store.batch():
                self._ensure_directory_exists(path_utils.get_directory(path))
                self._add_resource(path, resource)
                self._sort_store()

        else:
            raise UnsupportedResourceError.for_value(
                resource, "a FilesystemResource or a ResourceCollection"
            )

        self.logger.debug(
            "Added resource", path=path, new_rows=self._count_store() - rows_before
        )

    def remove(self, query: str, language: str = GLOB_LANGUAGE) -> int:
        # Matches are collected before anything is removed
        resources = self.find(query, language)
        rows_before = self._count_store()

        # Checked after find(), so an invalid query or language is reported first
        if path_utils.is_root(query):
            raise ValidationError("The root directory cannot be removed.")

        with self.store.batch():
            for resource in resources:
                self._remove_resource(resource)

        removed = rows_before - self._count_store()
        self.logger.debug("Removed resources", query=query, removed=removed)

        return removed

    def clear(self) -> int:
        # The root is recreated, so it does not count
        removed = self._count_store() - 1

        with self.store.batch():
            self.store.clear()
            self._create_root()

        self.logger.debug("Cleared repository", removed=removed)

        return removed

    def list_children(self, path: str) -> ResourceCollection:
        resource = self.get(path)
        return self.query.resolve(self.query.child_paths(resource.path), self)

    def has_children(self, path: str) -> bool:
        resource = self.get(path)
        return bool(self.query.child_paths(resource.path))

    def _prepare_query(self, query: str, language: str) -> str:
        """Validate a query and return its canonical form."""
        if language != GLOB_LANGUAGE:
            raise UnsupportedLanguageError.for_language(language)

        validate_absolute_path(query, "glob")

        return path_utils.canonicalize(query)

    def _add_resource(self, path: str, resource: FilesystemResource) -> None:
        """Write a resource and, recursively, its native children."""
        # Don't modify resources attached to other repositories
        if resource.is_attached:
            resource = resource.copy()

        # Read children before attaching, afterwards they would come from this repository
        children = resource.list_children()

        resource.attach_to(self, path)

        # Parent row first, so every intermediate state has its ancestors
        self.store.set(path, serialize_resource(resource))

        for child in children:
            # Filesystem names may hold characters that cannot appear in a path segment
            try:
                validate_resource_name(child.name)
            except ValidationError as e:
                self.logger.warning("Skipped child", path=path, name=repr(child.name), reason=str(e))
                continue

            self._add_resource(path_utils.join(path, child.name), child)

    def _remove_resource(self, resource: FilesystemResource) -> None:
        """Remove a resource's row after the rows of all its descendants."""
        path = resource.path

        # Already removed together with an ancestor
        if not self.store.exists(path):
            return

        for child in self.query.resolve(self.query.child_paths(path), self):
            self._remove_resource(child)

        self.store.remove(path)

        resource.detach(self)

    def _ensure_directory_exists(self, path: str) -> None:
        """Create virtual directory rows for a path and its missing ancestors."""
        if self.store.exists(path):
            return

        if path != ROOT_PATH:
            self._ensure_directory_exists(path_utils.get_directory(path))

        self.store.set(path, None)

    def _create_root(self) -> None:
        if self.store.exists(ROOT_PATH):
            return

        self.store.set(ROOT_PATH, None)

    def _count_store(self) -> int:
        if isinstance(self.store, Sized):
            return len(self.store)

        return len(self.store.keys())

    def _sort_store(self) -> None:
        """Rewrite all rows ordered by key."""
        keys = self.store.keys()
        sorted_keys = sorted(keys)

        if keys == sorted_keys:
            return

        rows = self.store.get_multiple(sorted_keys)

        self.store.clear()
        for path, locator in rows.items():
            self.store.set(path, locator)

    def __len__(self) -> int:
        return self._count_store()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(store={self.store!r})"
