"""Customer Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CustomerCreate.name: 1-100 chars; email must be a valid address, stored as sent
    - CustomerUpdate: every field optional; only fields sent are applied (exclude_unset)
    - CustomerListParams: page >= 1 (default 1), 1 <= limit <= 100 (default 10);
      query strings coerced to int before bounds checks
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from order_api.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from order_api.schemas.common import ApiModel, EmailAddress, OrderSummary


class CustomerCreate(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailAddress
    phone: str | None = None
    address: str | None = None


class CustomerUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailAddress | None = None
    phone: str | None = None
    address: str | None = None


class CustomerListParams(ApiModel):
    page: int = Field(DEFAULT_PAGE, ge=1)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    search: str | None = None


class CustomerResponse(ApiModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    created_at: datetime
    updated_at: datetime


class CustomerWithOrders(CustomerResponse):
    orders: list[OrderSummary] = []
