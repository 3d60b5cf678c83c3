"""Standard exception classes for the copy entry store.

All custom exceptions inherit from CopydeskError and include:
- message: Human-readable error message
- error_code: Machine-readable error code (e.g., "NOT_FOUND")
- details: Optional dictionary with additional context

status_code is the suggested HTTP status for adapters; the core itself
never deals with HTTP.
"""

from typing import Any, Optional


class CopydeskError(Exception):
    """Base exception for all copy entry store errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for client handling
        details: Optional dictionary with additional error context
        status_code: HTTP status code (set by subclasses)
    """

    status_code: int = 500
    default_error_code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(CopydeskError):
    """A required field is missing or blank, or a parameter is not allowed (HTTP 400)."""

    status_code = 400
    default_error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class NotFoundOrDeniedError(CopydeskError):
    """Resource does not exist or is not owned by the principal (HTTP 404).

    The two cases are deliberately one error: callers must not be able to
    tell "doesn't exist" from "exists but belongs to someone else".
    """

    status_code = 404
    default_error_code = "NOT_FOUND"
    default_message = "Resource not found"

    def __init__(self, resource: str = "Resource", error_code: Optional[str] = None):
        super().__init__(f"{resource} not found", error_code)


class ConflictError(CopydeskError):
    """Resource conflict (HTTP 409).

    Raised for duplicate emails and duplicate style preset names.
    """

    status_code = 409
    default_error_code = "CONFLICT"
    default_message = "Resource conflict"


class StorageError(CopydeskError):
    """Underlying persistence failure (HTTP 503).

    The enclosing transaction has been rolled back; retry policy is up to
    the caller.
    """

    status_code = 503
    default_error_code = "STORAGE_ERROR"
    default_message = "Storage operation failed"


class AuthenticationError(CopydeskError):
    """Credential missing, invalid or expired (HTTP 401)."""

    status_code = 401
    default_error_code = "AUTHENTICATION_FAILED"
    default_message = "Authentication required"
