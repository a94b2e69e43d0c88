"""Order Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - total must be strictly positive, at most 2 decimal places and fit
      Numeric(10, 2) (max 99999999.99); rejected at validation, never rounded
    - status is one of the five OrderStatus values; defaults to pending on create
    - OrderListParams filters (status, customerId) are independent and optional
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import Field

from order_api.core.domain_types import OrderStatus
from order_api.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from order_api.schemas.common import ApiModel, CustomerSummary


Money = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]


class OrderCreate(ApiModel):
    customer_id: UUID
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    notes: str | None = None


class OrderUpdate(ApiModel):
    total: Money | None = None
    status: OrderStatus | None = None
    notes: str | None = None


class OrderListParams(ApiModel):
    page: int = Field(DEFAULT_PAGE, ge=1)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    status: OrderStatus | None = None
    customer_id: UUID | None = None


class OrderResponse(ApiModel):
    id: UUID
    order_number: str
    total: float
    status: OrderStatus
    notes: str | None = None
    customer_id: UUID
    created_at: datetime
    updated_at: datetime
    customer: CustomerSummary
