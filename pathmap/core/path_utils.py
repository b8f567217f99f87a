"""
pathmap Core: Virtual Path Utilities.

Helpers for the ``/``-separated virtual paths used as repository keys.
All functions are purely lexical and never touch the filesystem.

Example:
    >>> canonicalize("/css/../js//app.js/")
    '/js/app.js'
    >>> get_directory("/js/app.js")
    '/js'
"""
from typing import List

from pathmap.core.constants import ROOT_PATH


def canonicalize(path: str) -> str:
    """Return the canonical form of a path.

    Backslashes become slashes, duplicate slashes and ``.`` segments are
    removed, ``..`` segments are resolved and trailing slashes are stripped
    (except for the root). A ``..`` that would climb above the root of an
    absolute path is dropped.

    Args:
        path: Path to canonicalize

    Returns:
        Canonical path, or an empty string for an empty input
    """
    if not path:
        return ""

    path = path.replace("\\", "/")
    absolute = path.startswith("/")

    parts: List[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue

        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not absolute:
                parts.append(segment)
            continue

        parts.append(segment)

    if absolute:
        return ROOT_PATH + "/".join(parts)

    return "/".join(parts) or "."


def is_absolute(path: str) -> bool:
    """Check whether a path starts at the root."""
    return bool(path) and path.replace("\\", "/").startswith("/")


def is_root(path: str) -> bool:
    """Check whether a path designates the root directory."""
    return canonicalize(path) == ROOT_PATH


def get_directory(path: str) -> str:
    """Return the parent directory of a canonical path.

    Args:
        path: Canonical absolute path

    Returns:
        Parent path; the parent of ``/`` is ``/`` itself
    """
    path = canonicalize(path)

    if path == ROOT_PATH:
        return ROOT_PATH

    position = path.rfind("/")
    if position == 0:
        return ROOT_PATH
    if position < 0:
        return ""

    return path[:position]


def get_filename(path: str) -> str:
    """Return the last segment of a path (empty for the root)."""
    path = canonicalize(path)
    return path[path.rfind("/") + 1:]


def join(base: str, name: str) -> str:
    """Join a directory path and a child name without doubling the slash.

    Args:
        base: Canonical directory path
        name: Child name (a single segment)

    Returns:
        Child path
    """
    if base.endswith("/"):
        return base + name
    return base + "/" + name
