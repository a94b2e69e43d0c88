"""Customer Service — CRUD over customers with email-uniqueness rules.

Invariants:
    - Email uniqueness checked before every write that sets an email
    - Update rechecks uniqueness only when the email changes (case-sensitive
      comparison), and only against OTHER customers
    - Update/Delete fetch by id first; missing -> NotFound(CUSTOMER_NOT_FOUND)
    - Lists ordered newest-first; search is a case-insensitive substring match
      on name OR email
    - Storage failures surface as typed errors via storage_errors, never raw

Design Decisions:
    - Returns tagged results (core/results.py); routes translate to HTTP
    - AsyncSession injected at construction: tests pass their own session
"""

import logging
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.core.pagination import Listing, build_pagination, offset_for
from order_api.core.results import Conflict, NotFound, Ok
from order_api.infrastructure.database import storage_errors
from order_api.models.customer import Customer
from order_api.schemas.customer import (
    CustomerCreate, CustomerListParams, CustomerUpdate,
)

logger = logging.getLogger(__name__)

CUSTOMER_NOT_FOUND = NotFound("CUSTOMER_NOT_FOUND", "Customer not found")

# Columns that accept an explicit null on update
_NULLABLE_FIELDS = {"phone", "address"}


class CustomerService:
    """Customer persistence and business rules."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: CustomerCreate) -> Ok[Customer] | Conflict:
        async with storage_errors(self.db, "creating customer"):
            if await self._email_owner(data.email) is not None:
                return Conflict(
                    "CUSTOMER_EXISTS",
                    "Customer with this email already exists",
                    "email",
                )
            customer = Customer(**data.model_dump())
            self.db.add(customer)
            await self.db.commit()
            await self.db.refresh(customer)
        return Ok(customer)

    async def list(self, params: CustomerListParams) -> Ok[Listing[Customer]]:
        async with storage_errors(self.db, "retrieving customers"):
            query = select(Customer)
            count_query = select(func.count()).select_from(Customer)
            if params.search:
                match_search = or_(
                    Customer.name.icontains(params.search, autoescape=True),
                    Customer.email.icontains(params.search, autoescape=True),
                )
                query = query.where(match_search)
                count_query = count_query.where(match_search)

            total = await self.db.scalar(count_query) or 0
            result = await self.db.execute(
                query.order_by(Customer.created_at.desc())
                .offset(offset_for(params.page, params.limit))
                .limit(params.limit),
            )
            items = list(result.scalars().all())
        return Ok(Listing(
            items=items,
            pagination=build_pagination(params.page, params.limit, total),
        ))

    async def get(self, customer_id: UUID) -> Ok[Customer] | NotFound:
        async with storage_errors(self.db, "retrieving customer"):
            customer = await self.db.get(Customer, customer_id)
        if customer is None:
            return CUSTOMER_NOT_FOUND
        return Ok(customer)

    async def update(
        self, customer_id: UUID, data: CustomerUpdate,
    ) -> Ok[Customer] | NotFound | Conflict:
        async with storage_errors(self.db, "updating customer"):
            customer = await self.db.get(Customer, customer_id)
            if customer is None:
                return CUSTOMER_NOT_FOUND

            changes = {
                k: v for k, v in data.model_dump(exclude_unset=True).items()
                if v is not None or k in _NULLABLE_FIELDS
            }
            new_email = changes.get("email")
            if new_email and new_email != customer.email:
                owner = await self._email_owner(new_email, exclude_id=customer.id)
                if owner is not None:
                    return Conflict(
                        "EMAIL_TAKEN",
                        "Email is already taken by another customer",
                        "email",
                    )

            for field, value in changes.items():
                setattr(customer, field, value)
            await self.db.commit()
            await self.db.refresh(customer)
        return Ok(customer)

    async def delete(self, customer_id: UUID) -> Ok[UUID] | NotFound:
        """Delete a customer; its orders go with it."""
        async with storage_errors(self.db, "deleting customer"):
            customer = await self.db.get(Customer, customer_id)
            if customer is None:
                return CUSTOMER_NOT_FOUND
            await self.db.delete(customer)
            await self.db.commit()
        return Ok(customer_id)

    async def _email_owner(
        self, email: str, exclude_id: UUID | None = None,
    ) -> UUID | None:
        query = select(Customer.id).where(Customer.email == email)
        if exclude_id is not None:
            query = query.where(Customer.id != exclude_id)
        return await self.db.scalar(query)
