"""Schema Validation — turns pydantic errors into field-level violations.

Invariants:
    - All functions are PURE: no IO, no async, no shared state
    - Every violation is reported, never just the first
    - Field paths drop the transport prefix (body/query/path/header)
"""

from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from order_api.core.results import Ok, ValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)

_TRANSPORT_PREFIXES = {"body", "query", "path", "header", "cookie"}


def field_path(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _TRANSPORT_PREFIXES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def field_violations(errors: Sequence[dict]) -> list[dict]:
    """Map pydantic/FastAPI error dicts to [{field, message}]."""
    return [
        {"field": field_path(e.get("loc", ())), "message": e.get("msg", "Invalid value")}
        for e in errors
    ]


def validate_input(
    schema: type[ModelT], raw: Any,
) -> Ok[ModelT] | ValidationFailed:
    """Validate raw input against a schema, applying defaults and coercions."""
    try:
        return Ok(schema.model_validate(raw))
    except ValidationError as e:
        return ValidationFailed(field_violations(e.errors()))
