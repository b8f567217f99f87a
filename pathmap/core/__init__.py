"""pathmap Core - Shared utilities.

Import specific functions from submodules:
    from pathmap.core import constants
    from pathmap.core import path_utils
    from pathmap.core import validators
"""

from pathmap.core import constants, path_utils, validators

__all__ = [
    "constants",
    "path_utils",
    "validators",
]
