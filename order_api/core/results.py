"""Service Results — tagged values returned by services instead of raising.

Invariants:
    - Every service call returns exactly one of: Ok, NotFound, Conflict, InvalidCredentials
    - Failure values carry a stable code; translation to HTTP happens at the API boundary
    - Results are immutable (frozen dataclasses)

Design Decisions:
    - Return values (not exceptions) for business-rule outcomes: the route decides
      the transport mapping, services stay free of HTTP concerns
    - Unexpected storage failures still raise (see infrastructure/database.storage_errors)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    code: str
    message: str


@dataclass(frozen=True)
class Conflict:
    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class InvalidCredentials:
    pass


@dataclass(frozen=True)
class ValidationFailed:
    details: list[dict]


Failure = Union[NotFound, Conflict, InvalidCredentials, ValidationFailed]
