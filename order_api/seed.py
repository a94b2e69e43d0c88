"""Database Seed — provisions the admin user plus sample customers and orders.

Invariants:
    - Idempotent: users and customers matched by email; sample orders only
      created for a customer that has none
    - Fixtures validated through the same schemas the API uses

Usage:
    python -m order_api.seed
"""

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.config import Settings, get_settings
from order_api.core.results import Ok
from order_api.core.validation import validate_input
from order_api.db.session import create_session_factory
from order_api.infrastructure.observability import setup_logging
from order_api.models.customer import Customer
from order_api.models.order import Order
from order_api.schemas.customer import CustomerCreate
from order_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)

SAMPLE_CUSTOMERS = [
    {
        "customer": {
            "name": "John Doe",
            "email": "john.doe@example.com",
            "phone": "+1234567890",
            "address": "123 Main St, New York, NY 10001",
        },
        "orders": [
            {"total": 99.99, "status": "pending", "notes": "First sample order"},
            {"total": 149.50, "status": "shipped", "notes": "Express delivery"},
        ],
    },
    {
        "customer": {
            "name": "Jane Smith",
            "email": "jane.smith@example.com",
            "phone": "+1987654321",
            "address": "456 Oak Ave, Los Angeles, CA 90210",
        },
        "orders": [
            {"total": 249.99, "status": "delivered", "notes": None},
        ],
    },
]


async def upsert_customer(db: AsyncSession, raw: dict) -> Customer:
    match validate_input(CustomerCreate, raw):
        case Ok(value=data):
            pass
        case failure:
            raise ValueError(f"Invalid seed customer {raw.get('email')}: {failure.details}")

    customer = await db.scalar(select(Customer).where(Customer.email == data.email))
    if customer is None:
        customer = Customer(**data.model_dump())
        db.add(customer)
        await db.flush()
    return customer


async def seed(db: AsyncSession, settings: Settings) -> None:
    admin = await AuthService(db, settings).provision_user(
        settings.admin_email, settings.admin_password, settings.admin_name,
    )
    logger.info(f"Admin user ready: {admin.email}")

    for fixture in SAMPLE_CUSTOMERS:
        customer = await upsert_customer(db, fixture["customer"])
        existing = await db.scalar(
            select(func.count()).select_from(Order)
            .where(Order.customer_id == customer.id),
        )
        if not existing:
            for order in fixture["orders"]:
                db.add(Order(customer=customer, **order))
    await db.commit()
    logger.info("Sample customers and orders seeded")


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    session_factory = create_session_factory(settings.database_url)
    async with session_factory() as db:
        await seed(db, settings)


if __name__ == "__main__":
    asyncio.run(main())
