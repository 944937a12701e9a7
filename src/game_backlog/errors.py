"""
Library error taxonomy.

Validation errors carry a fixed machine-readable ``code`` that the
request surface reports verbatim.
"""


class LibraryError(Exception):
    """Base exception for library operations."""

    code: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class ValidationError(LibraryError):
    """Raised when a request fails input validation."""

    code = "Invalid request"


class InvalidAppIdError(ValidationError):
    """appId is missing, non-integer or not positive."""

    code = "Invalid appId"


class MissingStatusError(ValidationError):
    """status is missing, null or empty."""

    code = "Missing status"


class InvalidStatusError(ValidationError):
    """status is not one of the canonical play statuses."""

    code = "Invalid status"


class InvalidTimestampError(LibraryError, ValueError):
    """A last-synced timestamp could not be parsed as ISO-8601."""

    code = "Invalid timestamp"


class PersistenceError(LibraryError):
    """Raised when the persistence collaborator fails a read or write."""

    code = "Persistence failure"


class UnauthenticatedError(LibraryError):
    """Raised when a request has no authenticated user."""

    code = "Unauthorized"


class SourceUnavailableError(LibraryError):
    """Raised when base catalog metadata could not be fetched."""

    code = "Catalog source unavailable"
