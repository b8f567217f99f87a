"""
pathmap Core: Input Validators.

This module provides the input validation used before any repository or
store mutation: virtual paths, glob queries, resource names and
configuration values.
"""
from typing import Any

from pathmap.core.constants import ErrorCode, Limits, StoreBackend


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_absolute_path(path: Any, kind: str = "path") -> bool:
    """Validate a virtual path or glob handed to a repository.

    Args:
        path: Path or glob to validate
        kind: What the value is, used in error messages ("path" or "glob")

    Returns:
        True if valid

    Raises:
        ValidationError: If the value is not a non-empty absolute string
    """
    if not isinstance(path, str):
        raise ValidationError(f"The {kind} must be a non-empty string. Got: {type(path).__name__}")

    if not path:
        raise ValidationError(f"The {kind} must be a non-empty string. Got: \"\"")

    if not path.startswith("/"):
        raise ValidationError(f"The {kind} {path!r} is not absolute.")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"The {kind} exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in path:
        raise ValidationError(f"The {kind} contains null bytes")

    return True


def validate_resource_name(name: Any) -> bool:
    """Validate the name under which a resource is added below a directory.

    Args:
        name: Resource name (a single path segment)

    Returns:
        True if valid

    Raises:
        ValidationError: If name is empty, contains a slash or is too long
    """
    if not name or not isinstance(name, str):
        raise ValidationError("Resource name cannot be empty")

    if "/" in name or "\\" in name:
        raise ValidationError(f"Resource name must be a single path segment: {name!r}")

    if name in (".", ".."):
        raise ValidationError(f"Resource name is reserved: {name!r}")

    if len(name) > Limits.MAX_FILENAME_LENGTH:
        raise ValidationError(f"Resource name exceeds maximum length ({Limits.MAX_FILENAME_LENGTH})")

    return True


def validate_store_backend(backend: Any) -> bool:
    """Validate a configured store backend name.

    Args:
        backend: Backend name

    Returns:
        True if valid

    Raises:
        ValidationError: If backend is unknown
    """
    valid_backends = {StoreBackend.MEMORY, StoreBackend.YAML}
    if backend not in valid_backends:
        raise ValidationError(
            f"Invalid store backend: {backend}. Must be one of {sorted(valid_backends)}"
        )

    return True
