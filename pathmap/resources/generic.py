"""
pathmap Resources: Generic Resources.
"""

from typing import Optional

from pathmap.resources.base import FilesystemResource, ResourceKind


class GenericResource(FilesystemResource):
    """
    A resource without a real file or directory behind it.

    Repositories return generic resources for virtual directories (rows
    without a locator) and for locators whose target no longer exists.
    Attached generic resources still have children in their repository.
    """

    kind = ResourceKind.GENERIC

    def __init__(self, filesystem_path: Optional[str] = None):
        super().__init__(filesystem_path)
