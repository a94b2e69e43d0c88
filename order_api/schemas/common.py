"""Shared Schemas — response envelope, page wrapper and embedded summaries.

Invariants:
    - Every success response is {success: true, data, message}
    - JSON field names are camelCase; snake_case input is accepted too
    - Summaries are the shapes embedded inside another entity's response
    - EmailAddress validates syntax but never rewrites the address (no case folding)
"""

from datetime import datetime
from typing import Annotated, Generic, TypeVar
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from order_api.core.domain_types import OrderStatus
from order_api.core.pagination import Pagination

T = TypeVar("T")


def _check_email(value: str) -> str:
    """Validate the address syntax; the value is stored exactly as sent."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


class ApiModel(BaseModel):
    """Base for request/response bodies — camelCase on the wire, ORM-readable."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""
    success: bool = True
    data: T | None = None
    message: str


class Page(BaseModel, Generic[T]):
    items: list[T]
    pagination: Pagination


class DeletedResponse(ApiModel):
    id: UUID


class CustomerSummary(ApiModel):
    """Customer as embedded inside an order."""
    id: UUID
    name: str
    email: str
    phone: str | None = None
    address: str | None = None


class OrderSummary(ApiModel):
    """Order as embedded inside a customer."""
    id: UUID
    order_number: str
    status: OrderStatus
    total: float
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
