#!/usr/bin/env python3
r"""Glob matching for virtual repository paths.

This module provides the glob engine used by repository queries:
- Dynamic glob detection (does a query contain wildcards at all)
- Static prefix extraction for cheap ``startswith`` pre-filtering
- Glob to regex conversion (``*``, ``?``, ``**``, ``[...]``, ``{a,b}``)
- Lazy, restartable filter iterators over a snapshot of paths

Wildcards never cross a ``/`` except ``**``:
- ``/css/*`` matches ``/css/style.css`` but not ``/css/icons/logo.png``
- ``/css/**`` matches every descendant of ``/css`` (not ``/css`` itself)
- ``/css/**/*.png`` matches ``/css/logo.png`` and ``/css/icons/logo.png``

Example:
    >>> is_dynamic("/css/*.css")
    True
    >>> list(GlobFilterIterator("/css/*.css", ["/css", "/css/a.css", "/js/b.js"]))
    ['/css/a.css']
"""

import re
from typing import Iterable, Iterator, List, Pattern, Union

from pathmap.core.validators import ValidationError

METACHARACTERS = "*?[{"

# Characters escaped inside a character class to keep ``re`` from reading
# them as set operations or nested sets
_CLASS_ESCAPES = {"\\": "\\\\", "[": "\\[", "&": "\\&", "~": "\\~", "|": "\\|"}


def is_dynamic(glob: str) -> bool:
    """Check whether a glob contains unescaped wildcard characters.

    Args:
        glob: Glob pattern

    Returns:
        True if the glob needs pattern matching, False for literal paths
    """
    escaped = False
    for char in glob:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char in METACHARACTERS:
            return True
    return False


def get_static_prefix(glob: str) -> str:
    """Return the literal part of a glob before its first wildcard.

    Args:
        glob: Glob pattern

    Returns:
        Unescaped literal prefix (the whole glob if it is not dynamic)
    """
    prefix = []
    i = 0
    while i < len(glob):
        char = glob[i]
        if char == "\\" and i + 1 < len(glob):
            prefix.append(glob[i + 1])
            i += 2
            continue
        if char in METACHARACTERS:
            break
        prefix.append(char)
        i += 1
    return "".join(prefix)


def to_regex(glob: str) -> str:
    """Convert a glob into an anchored regular expression.

    Args:
        glob: Glob pattern

    Returns:
        Regex source matching exactly the paths the glob matches

    Raises:
        ValidationError: If the glob has an unclosed ``{`` group
    """
    parts: List[str] = []
    brace_depth = 0
    length = len(glob)
    i = 0

    while i < length:
        char = glob[i]

        if char == "\\" and i + 1 < length:
            parts.append(re.escape(glob[i + 1]))
            i += 2
            continue

        if char == "*":
            if glob.startswith("**", i):
                after_slash = i == 0 or glob[i - 1] == "/"
                if after_slash and glob.startswith("/", i + 2):
                    # /**/ matches zero or more whole segments
                    parts.append("(?:.*/)?")
                    i += 3
                elif after_slash and i > 0 and i + 2 == length:
                    # Trailing /** matches every descendant
                    parts.append(".+")
                    i += 2
                else:
                    parts.append(".*")
                    i += 2
                continue
            parts.append("[^/]*")
            i += 1
            continue

        if char == "?":
            parts.append("[^/]")
            i += 1
            continue

        if char == "[":
            end = _find_class_end(glob, i)
            if end < 0:
                parts.append(re.escape(char))
                i += 1
                continue
            parts.append(_convert_class(glob[i + 1:end]))
            i = end + 1
            continue

        if char == "{":
            brace_depth += 1
            parts.append("(?:")
            i += 1
            continue

        if char == "," and brace_depth:
            parts.append("|")
            i += 1
            continue

        if char == "}" and brace_depth:
            brace_depth -= 1
            parts.append(")")
            i += 1
            continue

        parts.append(re.escape(char))
        i += 1

    if brace_depth:
        raise ValidationError(f"Invalid glob {glob!r}: unclosed '{{'")

    return "^" + "".join(parts) + "$"


def _find_class_end(glob: str, start: int) -> int:
    """Find the index of the ``]`` closing the class opened at ``start``.

    A ``]`` directly after ``[``, ``[!`` or ``[^`` is a literal member.
    Returns -1 if the class is not closed.
    """
    i = start + 1
    if i < len(glob) and glob[i] in "!^":
        i += 1
    if i < len(glob) and glob[i] == "]":
        i += 1
    while i < len(glob):
        if glob[i] == "\\":
            i += 2
            continue
        if glob[i] == "]":
            return i
        i += 1
    return -1


def _convert_class(content: str) -> str:
    """Convert the inside of a glob character class to a regex class."""
    negated = bool(content) and content[0] in "!^"
    if negated:
        content = content[1:]

    members = []
    i = 0
    while i < len(content):
        char = content[i]
        if char == "\\" and i + 1 < len(content):
            members.append(re.escape(content[i + 1]))
            i += 2
            continue
        if char == "]":
            members.append("\\]")
        else:
            members.append(_CLASS_ESCAPES.get(char, char))
        i += 1

    if negated:
        # A class never matches the segment separator
        return "[^/" + "".join(members) + "]"
    return "(?!/)[" + "".join(members) + "]"


def compile_glob(glob: str) -> Pattern[str]:
    """Compile a glob into a regex pattern object."""
    return re.compile(to_regex(glob))


def matches(path: str, glob: str) -> bool:
    """Check whether a path matches a glob.

    Args:
        path: Canonical path
        glob: Glob pattern

    Returns:
        True if the path matches
    """
    if not path.startswith(get_static_prefix(glob)):
        return False
    return bool(compile_glob(glob).match(path))


class RegexFilterIterator:
    """Filter a snapshot of paths by static prefix and regular expression.

    The path sequence is materialized when the iterator is created, so
    later changes to the source are not observed. Iterating again starts
    over from the first path.
    """

    def __init__(
        self,
        regex: Union[str, Pattern[str]],
        static_prefix: str,
        paths: Iterable[str],
    ):
        """Initialize the filter.

        Args:
            regex: Regex (source or compiled) a path must match
            static_prefix: Literal prefix every matching path starts with
            paths: Paths to filter
        """
        self.regex = re.compile(regex) if isinstance(regex, str) else regex
        self.static_prefix = static_prefix
        self._paths = list(paths)

    def __iter__(self) -> Iterator[str]:
        for path in self._paths:
            if path.startswith(self.static_prefix) and self.regex.match(path):
                yield path

    def first(self) -> Union[str, None]:
        """Return the first matching path, or None when nothing matches."""
        return next(iter(self), None)

    def __bool__(self) -> bool:
        return self.first() is not None


class GlobFilterIterator(RegexFilterIterator):
    """Filter a snapshot of paths by a glob pattern."""

    def __init__(self, glob: str, paths: Iterable[str]):
        """Initialize the filter.

        Args:
            glob: Glob pattern
            paths: Paths to filter
        """
        self.glob = glob
        super().__init__(compile_glob(glob), get_static_prefix(glob), paths)
