"""
pathmap Resources: File Resources.
"""

import os

from pathmap.core.validators import ValidationError
from pathmap.resources.base import FilesystemResource, ResourceKind


class FileResource(FilesystemResource):
    """A resource backed by a real file. Files never have children."""

    kind = ResourceKind.FILE

    def __init__(self, filesystem_path: str):
        """
        Initialize the resource.

        Args:
            filesystem_path: Path of an existing file

        Raises:
            ValidationError: If the path is not a file
        """
        if not filesystem_path or not os.path.isfile(filesystem_path):
            raise ValidationError(f"The path {filesystem_path!r} is not a file.")

        super().__init__(os.path.abspath(filesystem_path))

    @property
    def body(self) -> bytes:
        """Content of the file."""
        with open(self._filesystem_path, "rb") as f:
            return f.read()

    @property
    def size(self) -> int:
        """Size of the file in bytes."""
        return os.stat(self._filesystem_path).st_size

    @property
    def last_modified(self) -> float:
        """Modification timestamp (seconds since epoch)."""
        return os.stat(self._filesystem_path).st_mtime

    def list_children(self):
        from pathmap.resources.collection import ResourceCollection

        return ResourceCollection()

    def has_children(self) -> bool:
        return False
