"""Error Handlers — the single place every raised error becomes an HTTP response.

Invariants:
    - normalize_error is TOTAL: every exception lands in exactly one branch, the
      last being the catch-all
    - Every response is {success: false, error: {code, message, details?}}
    - Internal messages and stack traces only leave the process in development mode

Design Decisions:
    - Classification is a pure function (normalize_error) so it is testable without
      an app; the registered handlers only log and wrap it in a JSONResponse
    - Handlers registered per exception family because FastAPI routes Exception
      through ServerErrorMiddleware and everything else through ExceptionMiddleware
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_api.core.errors import OrderApiError, error_envelope
from order_api.core.validation import field_violations
from order_api.infrastructure.database import (
    is_unique_violation, unique_violation_field,
)

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    status.HTTP_429_TOO_MANY_REQUESTS: "RATE_LIMITED",
}


def normalize_error(exc: Exception, debug: bool = False) -> tuple[int, dict]:
    """Classify an exception into (HTTP status, error envelope)."""
    if isinstance(exc, RequestValidationError):
        return status.HTTP_400_BAD_REQUEST, error_envelope(
            "VALIDATION_ERROR", "Invalid input data",
            field_violations(exc.errors()),
        )

    if isinstance(exc, OrderApiError):
        return exc.http_status, exc.to_response()

    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return status.HTTP_409_CONFLICT, error_envelope(
            "UNIQUE_CONSTRAINT_VIOLATION",
            "A record with this value already exists",
            {"field": unique_violation_field(exc)},
        )

    if isinstance(exc, NoResultFound):
        return status.HTTP_404_NOT_FOUND, error_envelope(
            "RECORD_NOT_FOUND", "Record not found",
        )

    if isinstance(exc, SQLAlchemyError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, error_envelope(
            "DATABASE_ERROR", "Database operation failed",
        )

    if isinstance(exc, ExpiredSignatureError):
        return status.HTTP_401_UNAUTHORIZED, error_envelope(
            "TOKEN_EXPIRED", "Authentication token has expired",
        )

    if isinstance(exc, JWTError):
        return status.HTTP_401_UNAUTHORIZED, error_envelope(
            "INVALID_TOKEN", "Invalid authentication token",
        )

    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return exc.status_code, error_envelope("NOT_FOUND", "Route not found")
        code = _HTTP_STATUS_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
        return exc.status_code, error_envelope(code, str(exc.detail))

    envelope = error_envelope(
        "INTERNAL_ERROR",
        (str(exc) or "Internal server error") if debug else "Internal server error",
    )
    if debug:
        envelope["error"]["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__),
        )
    return status.HTTP_500_INTERNAL_SERVER_ERROR, envelope


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Register all global error handlers on the FastAPI app."""

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        status_code, envelope = normalize_error(exc, debug)
        extra = {
            "error_code": envelope["error"]["code"],
            "path": request.url.path,
            "method": request.method,
            "status_code": status_code,
        }
        if status_code >= 500:
            logger.error(
                f"Unhandled error on {request.url.path}: {exc}",
                extra=extra, exc_info=exc,
            )
        else:
            logger.warning(f"Request failed: {envelope['error']['message']}", extra=extra)

        headers = getattr(exc, "headers", None)
        if isinstance(exc, OrderApiError) and exc.http_status == 401:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=status_code, content=envelope, headers=headers,
        )

    for exc_class in (
        RequestValidationError,
        OrderApiError,
        SQLAlchemyError,
        JWTError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle)
