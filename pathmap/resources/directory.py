"""
pathmap Resources: Directory Resources.
"""

import os
from typing import TYPE_CHECKING

from pathmap.core.validators import ValidationError
from pathmap.resources.base import FilesystemResource, ResourceKind

if TYPE_CHECKING:
    from pathmap.resources.collection import ResourceCollection


class DirectoryResource(FilesystemResource):
    """
    A resource backed by a real directory.

    While detached, the resource lists the entries of the directory, sorted
    by name. This is what gets flattened into the repository when the
    resource is added.
    """

    kind = ResourceKind.DIRECTORY

    def __init__(self, filesystem_path: str):
        """
        Initialize the resource.

        Args:
            filesystem_path: Path of an existing directory

        Raises:
            ValidationError: If the path is not a directory
        """
        if not filesystem_path or not os.path.isdir(filesystem_path):
            raise ValidationError(f"The path {filesystem_path!r} is not a directory.")

        super().__init__(os.path.abspath(filesystem_path))

    def _list_native_children(self) -> "ResourceCollection":
        from pathmap.resources.collection import ResourceCollection
        from pathmap.resources.locator import create_resource

        children = ResourceCollection()
        for entry in sorted(os.listdir(self._filesystem_path)):
            children.add(create_resource(os.path.join(self._filesystem_path, entry)))

        return children
