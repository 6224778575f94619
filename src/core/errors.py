"""
Custom exceptions and error handling for Trailpost.

Defines application-specific exceptions with error codes for consistent
error handling across Lambda functions and API responses. Each code maps to
a client-facing message and an HTTP status.

Usage:
    from core.errors import NotFoundError, ErrorCode

    raise NotFoundError("Trip not found", code=ErrorCode.NOT_FOUND)
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Referential errors
    NOT_FOUND = "NOT_FOUND"

    # Remote asset store errors
    UPLOAD_FAILED = "UPLOAD_FAILED"
    DELETE_FAILED = "DELETE_FAILED"

    # Document store errors
    HAS_DEPENDENTS = "HAS_DEPENDENTS"
    PERSISTENCE_INVALID = "PERSISTENCE_INVALID"
    CONFLICT = "CONFLICT"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.INVALID_ID: "The identifier in the request is not valid.",
    ErrorCode.INVALID_REQUEST: "Invalid request format. Please try again.",
    ErrorCode.NOT_FOUND: "The requested record was not found.",
    ErrorCode.UPLOAD_FAILED: "Image upload failed. Please try again.",
    ErrorCode.DELETE_FAILED: "Image removal failed. Please try again.",
    ErrorCode.HAS_DEPENDENTS: "This record cannot be deleted while other records depend on it.",
    ErrorCode.PERSISTENCE_INVALID: "The record could not be saved because some fields are invalid.",
    ErrorCode.CONFLICT: "The record was changed by another request. Please reload and try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}

STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_ID: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UPLOAD_FAILED: 500,
    ErrorCode.DELETE_FAILED: 500,
    ErrorCode.HAS_DEPENDENTS: 400,
    ErrorCode.PERSISTENCE_INVALID: 400,
    ErrorCode.CONFLICT: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


class TrailpostError(Exception):
    """Base exception for all Trailpost errors.

    ``details`` holds extra keys merged into the error response body,
    e.g. ``{"required": [...]}`` or ``{"errors": [...]}``.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])

    @property
    def status_code(self) -> int:
        return STATUS_CODES.get(self.code, 500)


class ValidationError(TrailpostError):
    """Input validation or schema validation failed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR, details: dict[str, Any] | None = None):
        super().__init__(message, code=code, details=details)


class NotFoundError(TrailpostError):
    """Referenced record does not exist."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NOT_FOUND, details: dict[str, Any] | None = None):
        super().__init__(message, code=code, details=details)


class IntegrityGuardError(TrailpostError):
    """Deletion refused because dependent records exist."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.HAS_DEPENDENTS, details: dict[str, Any] | None = None):
        super().__init__(message, code=code, details=details)


class AssetStoreError(TrailpostError):
    """Upload to or delete from the remote object store failed."""

    pass


class PersistenceError(TrailpostError):
    """Document store rejected a write."""

    pass
