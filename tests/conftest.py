"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Env set before order_api is imported: settings are cached on first use
    - Every test gets a fresh in-memory SQLite database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "0")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from order_api.core.security import hash_password  # noqa: E402
from order_api.db.base import Base  # noqa: E402
from order_api.models import Customer, Order, User  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def admin_user(test_db):
    """Insert the admin user with a known password."""
    user = User(
        email=ADMIN_EMAIL,
        password=hash_password(ADMIN_PASSWORD, rounds=4),
        name="Admin User",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def seed_customer(test_db):
    customer = Customer(name="John Doe", email="john@example.com", phone="+1234567890")
    test_db.add(customer)
    await test_db.commit()
    await test_db.refresh(customer)
    return customer


@pytest.fixture
async def seed_order(test_db, seed_customer):
    order = Order(customer=seed_customer, total=99.99, status="pending")
    test_db.add(order)
    await test_db.commit()
    await test_db.refresh(order)
    return order
