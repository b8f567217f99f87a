#!/usr/bin/env python3
"""Query evaluation over the flat key space of a path store.

The engine never walks the real filesystem: every query is answered by
filtering the store's keys and bulk-loading the matching rows.
"""

import re
from typing import TYPE_CHECKING, Iterable

from pathmap.query.glob import GlobFilterIterator, RegexFilterIterator
from pathmap.resources import ResourceCollection, create_resource
from pathmap.store.base import KeyValueStore

if TYPE_CHECKING:
    from pathmap.repository.base import ResourceRepository


class QueryEngine:
    """Evaluates child and glob queries against a key-value store.

    Iterators are built over a copy of the store's key list taken when the
    query starts, so rows written or removed afterwards do not affect an
    iterator that already exists.
    """

    def __init__(self, store: KeyValueStore):
        """
        Initialize the engine.

        Args:
            store: Store whose keys are canonical virtual paths
        """
        self.store = store

    def child_paths(self, path: str) -> RegexFilterIterator:
        """
        Iterate over the paths exactly one segment below ``path``.

        Args:
            path: Canonical path of the parent

        Returns:
            Lazy iterator of child paths in store key order
        """
        static_prefix = path.rstrip("/") + "/"
        regex = "^" + re.escape(static_prefix) + "[^/]+$"

        return RegexFilterIterator(regex, static_prefix, self.store.keys())

    def glob_paths(self, glob: str) -> GlobFilterIterator:
        """
        Iterate over the paths matching a glob.

        Args:
            glob: Canonical glob pattern

        Returns:
            Lazy iterator of matching paths in store key order
        """
        return GlobFilterIterator(glob, self.store.keys())

    def resolve(
        self, paths: Iterable[str], repository: "ResourceRepository"
    ) -> ResourceCollection:
        """
        Turn matched paths into resources attached to ``repository``.

        All rows are fetched with a single bulk read. Paths that vanished
        from the store in the meantime are skipped.

        Args:
            paths: Matched paths
            repository: Repository the resources are attached to

        Returns:
            Collection of attached resources, in the order of ``paths``
        """
        locators = self.store.get_multiple(list(paths))
        resources = ResourceCollection()

        for path, locator in locators.items():
            resource = create_resource(locator)
            resource.attach_to(repository, path)
            resources.add(resource)

        return resources
