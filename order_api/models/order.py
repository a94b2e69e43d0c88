"""Order ORM — a purchase record belonging to exactly one customer.

Invariants:
    - customer_id FK is non-nullable with ON DELETE CASCADE
    - order_number is generated on insert and unique
    - total is Numeric(10, 2) and positive: validated at the API boundary and
      enforced by ck_orders_total_positive
    - status holds an OrderStatus value (pending by default)
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from order_api.core.domain_types import OrderStatus, generate_order_number
from order_api.db.base import Base, utcnow


class Order(Base):
    """Order entity — owned by a Customer."""
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("total > 0", name="ck_orders_total_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    order_number: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, default=generate_order_number,
    )
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
        default=OrderStatus.PENDING.value, server_default=OrderStatus.PENDING.value,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="orders", lazy="selectin",
    )
