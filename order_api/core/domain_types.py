"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CustomerId, OrderId wrap UUIDs — never mix them in domain logic
    - Order status is one of five values, encoded as an Enum — no raw string matching
    - Order numbers are ORD-<UTC date>-<8 uppercase hex chars>

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

import secrets
from datetime import datetime, timezone
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CustomerId = NewType("CustomerId", UUID)
OrderId = NewType("OrderId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# ─── Value Constructors ──────────────────────────────────────────

ORDER_NUMBER_PREFIX = "ORD"


def generate_order_number(now: datetime | None = None) -> str:
    """Human-readable order number, unique enough to back a UNIQUE column."""
    now = now or datetime.now(timezone.utc)
    return f"{ORDER_NUMBER_PREFIX}-{now:%Y%m%d}-{secrets.token_hex(4).upper()}"
