"""Exceptions raised by pathmap repositories and resources.

Validation failures (empty or relative paths, removing the root) raise
``pathmap.core.validators.ValidationError`` instead.
"""
from typing import Any

from pathmap.core.constants import ErrorCode


class RepositoryError(Exception):
    """Base exception for repository errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        """Initialize RepositoryError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ResourceNotFoundError(RepositoryError):
    """Raised when no resource exists at a path."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, ErrorCode.NOT_FOUND)
        self.path = path

    @classmethod
    def for_path(cls, path: str) -> "ResourceNotFoundError":
        return cls(f"The resource {path} does not exist.", path)


class UnsupportedLanguageError(RepositoryError):
    """Raised when a query uses a language other than glob."""

    def __init__(self, message: str, language: Any = None):
        super().__init__(message, ErrorCode.UNSUPPORTED)
        self.language = language

    @classmethod
    def for_language(cls, language: Any) -> "UnsupportedLanguageError":
        return cls(f'The language "{language}" is not supported.', language)


class UnsupportedResourceError(RepositoryError):
    """Raised when a value is neither a filesystem resource nor a collection of them."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.UNSUPPORTED)

    @classmethod
    def for_value(cls, value: Any, expected: str) -> "UnsupportedResourceError":
        return cls(f"The passed resource must be {expected}. Got: {type(value).__name__}")
