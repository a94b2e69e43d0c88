"""Result Translation — turns service failure values into typed HTTP errors."""

from typing import TypeVar

from order_api.core.errors import (
    ConflictError, InvalidCredentialsError, NotFoundError, ValidationFailedError,
)
from order_api.core.results import (
    Conflict, InvalidCredentials, NotFound, Ok, ValidationFailed,
)

T = TypeVar("T")


def unwrap(result: Ok[T] | NotFound | Conflict | InvalidCredentials | ValidationFailed) -> T:
    """Return the Ok value or raise the matching OrderApiError."""
    match result:
        case Ok(value=value):
            return value
        case NotFound(code=code, message=message):
            raise NotFoundError(code, message)
        case Conflict(code=code, message=message, field=field):
            raise ConflictError(code, message, field)
        case InvalidCredentials():
            raise InvalidCredentialsError()
        case ValidationFailed(details=details):
            raise ValidationFailedError(details)
    raise TypeError(f"Unexpected service result: {result!r}")
