"""Error Hierarchy — typed, categorized exceptions for every Order API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the REST error envelope: {success, error{code, message, details?}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with OrderApiError base: one global handler catches all
    - Codes are stable strings; clients branch on code, never on message
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories for routing and log filtering."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


class OrderApiError(Exception):
    """Base exception for all Order API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error envelope."""
        return error_envelope(self.code, self.message, self.details)


def error_envelope(code: str, message: str, details: Any = None) -> dict:
    """Build the error envelope. `details` is omitted when None."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationFailedError(OrderApiError):
    """Input failed schema validation. details carries every field violation."""
    def __init__(self, details: list[dict]):
        super().__init__(
            "Invalid input data", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, 400, details,
        )


class AuthenticationError(OrderApiError):
    """Bearer token missing, malformed, tampered or expired."""
    def __init__(self, code: str = "UNAUTHORIZED", message: str = "Access token required"):
        super().__init__(message, code, ErrorCategory.AUTHENTICATION, 401)


class InvalidCredentialsError(OrderApiError):
    """Login failed. Same code whether the email or the password was wrong."""
    def __init__(self):
        super().__init__(
            "Invalid email or password", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, 401,
        )


class NotFoundError(OrderApiError):
    """Requested resource does not exist."""
    def __init__(self, code: str, message: str):
        super().__init__(message, code, ErrorCategory.RESOURCE_NOT_FOUND, 404)


class ConflictError(OrderApiError):
    """Business-rule conflict (duplicate email and friends)."""
    def __init__(self, code: str, message: str, field: str | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT, 409,
            {"field": field} if field else None,
        )
        self.field = field


class RateLimitExceededError(OrderApiError):
    """Client exhausted its request budget for the current window."""
    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "Too many requests from this IP, please try again later.",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Storage Errors ─────────────────────────────────────────────

class UniqueConstraintError(OrderApiError):
    """Unique constraint violated at the storage layer."""
    def __init__(self, field: str | None = None):
        super().__init__(
            "A record with this value already exists",
            "UNIQUE_CONSTRAINT_VIOLATION", ErrorCategory.CONFLICT, 409,
            {"field": field},
        )
        self.field = field


class RecordNotFoundError(OrderApiError):
    """Storage reported that the targeted row does not exist."""
    def __init__(self):
        super().__init__(
            "Record not found", "RECORD_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )


class DatabaseError(OrderApiError):
    """Unclassified storage failure. Message never carries driver detail."""
    def __init__(self, operation: str):
        super().__init__(
            f"Database error while {operation}", "DATABASE_ERROR",
            ErrorCategory.DATABASE, 500,
        )
        self.operation = operation
