"""Order Service — CRUD over orders, each owned by an existing customer.

Invariants:
    - Create checks the customer exists BEFORE inserting (no FK-error path)
    - Update/Delete fetch by id first; missing -> NotFound(ORDER_NOT_FOUND)
    - Lists ordered newest-first; status and customer filters are independent
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.core.pagination import Listing, build_pagination, offset_for
from order_api.core.results import NotFound, Ok
from order_api.infrastructure.database import storage_errors
from order_api.models.customer import Customer
from order_api.models.order import Order
from order_api.schemas.order import OrderCreate, OrderListParams, OrderUpdate

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = NotFound("ORDER_NOT_FOUND", "Order not found")
CUSTOMER_NOT_FOUND = NotFound("CUSTOMER_NOT_FOUND", "Customer not found")


class OrderService:
    """Order persistence and business rules."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: OrderCreate) -> Ok[Order] | NotFound:
        async with storage_errors(self.db, "creating order"):
            customer = await self.db.get(Customer, data.customer_id)
            if customer is None:
                return CUSTOMER_NOT_FOUND
            order = Order(
                customer=customer,
                total=data.total,
                status=data.status.value,
                notes=data.notes,
            )
            self.db.add(order)
            await self.db.commit()
            await self.db.refresh(order)
        return Ok(order)

    async def list(self, params: OrderListParams) -> Ok[Listing[Order]]:
        async with storage_errors(self.db, "retrieving orders"):
            query = select(Order)
            count_query = select(func.count()).select_from(Order)
            if params.status is not None:
                query = query.where(Order.status == params.status.value)
                count_query = count_query.where(Order.status == params.status.value)
            if params.customer_id is not None:
                query = query.where(Order.customer_id == params.customer_id)
                count_query = count_query.where(Order.customer_id == params.customer_id)

            total = await self.db.scalar(count_query) or 0
            result = await self.db.execute(
                query.order_by(Order.created_at.desc())
                .offset(offset_for(params.page, params.limit))
                .limit(params.limit),
            )
            items = list(result.scalars().all())
        return Ok(Listing(
            items=items,
            pagination=build_pagination(params.page, params.limit, total),
        ))

    async def get(self, order_id: UUID) -> Ok[Order] | NotFound:
        async with storage_errors(self.db, "retrieving order"):
            order = await self.db.get(Order, order_id)
        if order is None:
            return ORDER_NOT_FOUND
        return Ok(order)

    async def update(
        self, order_id: UUID, data: OrderUpdate,
    ) -> Ok[Order] | NotFound:
        async with storage_errors(self.db, "updating order"):
            order = await self.db.get(Order, order_id)
            if order is None:
                return ORDER_NOT_FOUND

            changes = data.model_dump(exclude_unset=True)
            if changes.get("total") is not None:
                order.total = changes["total"]
            if changes.get("status") is not None:
                order.status = changes["status"].value
            if "notes" in changes:
                order.notes = changes["notes"]
            await self.db.commit()
            await self.db.refresh(order)
        return Ok(order)

    async def delete(self, order_id: UUID) -> Ok[UUID] | NotFound:
        async with storage_errors(self.db, "deleting order"):
            order = await self.db.get(Order, order_id)
            if order is None:
                return ORDER_NOT_FOUND
            await self.db.delete(order)
            await self.db.commit()
        return Ok(order_id)
