"""Customer ORM — a party that places orders.

Invariants:
    - id is UUID primary key
    - email is unique (checked by CustomerService before write, enforced by the DB)
    - Deleting a customer deletes its orders (ORM cascade + FK ON DELETE CASCADE)

Design Decisions:
    - orders loaded with selectin: list/detail responses embed order summaries
      and async sessions cannot lazy-load
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from order_api.db.base import Base, utcnow


class Customer(Base):
    """Customer aggregate root — owns its orders."""
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )

    orders: Mapped[list["Order"]] = relationship(
        "Order", back_populates="customer",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Order.created_at.desc()",
    )
