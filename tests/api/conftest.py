"""API test fixtures — FastAPI test client over the in-memory database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - app.state.db_manager points at the test engine (readiness probe uses it)
    - Unhandled app exceptions become 500 responses instead of propagating
"""

import pytest
from httpx import ASGITransport, AsyncClient

from order_api.core.security import create_access_token
from order_api.infrastructure.database import get_db, DatabaseSessionManager
from order_api.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = getattr(app.state, "db_manager", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
def auth_headers(admin_user):
    token = create_access_token(
        str(admin_user.id), admin_user.email, app.state.settings.jwt_secret,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_customer(client, auth_headers):
    """POST a customer and return the response data."""
    async def _create(name: str = "John Doe", email: str = "john@example.com", **extra):
        res = await client.post(
            "/api/customers",
            json={"name": name, "email": email, **extra},
            headers=auth_headers,
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create


@pytest.fixture
def create_order(client, auth_headers):
    async def _create(customer_id: str, total: float = 50.0, **extra):
        res = await client.post(
            "/api/orders",
            json={"customerId": customer_id, "total": total, **extra},
            headers=auth_headers,
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create
