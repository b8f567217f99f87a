"""pathmap Query Layer.

Glob matching and query evaluation over the keys of a path store:
- glob: wildcard detection, glob to regex conversion, filter iterators
- QueryEngine: child and glob queries, bulk resolution to resources
"""

from .engine import QueryEngine
from .glob import (
    GlobFilterIterator,
    RegexFilterIterator,
    compile_glob,
    get_static_prefix,
    is_dynamic,
    matches,
    to_regex,
)

__all__ = [
    "QueryEngine",
    "GlobFilterIterator",
    "RegexFilterIterator",
    "compile_glob",
    "get_static_prefix",
    "is_dynamic",
    "matches",
    "to_regex",
]
