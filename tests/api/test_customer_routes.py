"""Customer Routes — CRUD, uniqueness rules, pagination and search over HTTP.

Tests cover:
    - Create then get round-trips the same fields, email case included
    - CUSTOMER_EXISTS / EMAIL_TAKEN conflicts, no false conflict against self
    - Pagination bounds rejected before the service; pages == ceil(total / limit)
    - Delete cascades to the customer's orders
"""

import math
from uuid import uuid4

import pytest


async def test_create_then_get_returns_same_fields(client, auth_headers, create_customer):
    created = await create_customer(
        name="John Doe", email="john@example.com",
        phone="+1234567890", address="123 Main St",
    )
    res = await client.get(f"/api/customers/{created['id']}", headers=auth_headers)
    assert res.status_code == 200
    fetched = res.json()["data"]
    for key in ("id", "name", "email", "phone", "address", "createdAt", "updatedAt"):
        assert fetched[key] == created[key]
    assert fetched["orders"] == []


async def test_email_is_stored_exactly_as_sent(client, auth_headers, create_customer):
    created = await create_customer(email="John@Example.COM")
    assert created["email"] == "John@Example.COM"

    res = await client.get(f"/api/customers/{created['id']}", headers=auth_headers)
    assert res.json()["data"]["email"] == "John@Example.COM"

    updated = await client.put(
        f"/api/customers/{created['id']}",
        json={"email": "Jane@Example.ORG"}, headers=auth_headers,
    )
    assert updated.json()["data"]["email"] == "Jane@Example.ORG"


async def test_create_response_envelope(client, auth_headers):
    res = await client.post(
        "/api/customers", json={"name": "Ann", "email": "ann@example.com"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Customer created successfully"
    assert body["data"]["phone"] is None


async def test_duplicate_email_returns_409_and_creates_nothing(
    client, auth_headers, create_customer,
):
    await create_customer(email="john@example.com")
    res = await client.post(
        "/api/customers", json={"name": "Other John", "email": "john@example.com"},
        headers=auth_headers,
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CUSTOMER_EXISTS"

    listing = await client.get("/api/customers", headers=auth_headers)
    assert listing.json()["data"]["pagination"]["total"] == 1


async def test_create_reports_every_invalid_field(client, auth_headers):
    res = await client.post(
        "/api/customers", json={"name": "", "email": "nope"}, headers=auth_headers,
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {d["field"] for d in error["details"]} == {"name", "email"}
    assert all(d["message"] for d in error["details"])


async def test_name_longer_than_100_chars_rejected(client, auth_headers):
    res = await client.post(
        "/api/customers", json={"name": "x" * 101, "email": "long@example.com"},
        headers=auth_headers,
    )
    assert res.status_code == 400


@pytest.mark.parametrize("query", ["page=0", "limit=101", "limit=0", "page=abc"])
async def test_out_of_range_pagination_rejected(client, auth_headers, query):
    res = await client.get(f"/api/customers?{query}", headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_pagination_block_and_page_sizes(client, auth_headers, create_customer):
    for i in range(5):
        await create_customer(name=f"Customer {i}", email=f"c{i}@example.com")

    res = await client.get("/api/customers?page=1&limit=2", headers=auth_headers)
    data = res.json()["data"]
    assert len(data["items"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 5, "pages": 3}

    last = await client.get("/api/customers?page=3&limit=2", headers=auth_headers)
    last_data = last.json()["data"]
    assert len(last_data["items"]) == 1
    assert last_data["pagination"]["pages"] == math.ceil(5 / 2)


async def test_list_defaults_to_page_1_limit_10(client, auth_headers):
    res = await client.get("/api/customers", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"] == {
        "items": [],
        "pagination": {"page": 1, "limit": 10, "total": 0, "pages": 0},
    }


async def test_search_matches_name_or_email_case_insensitively(
    client, auth_headers, create_customer,
):
    await create_customer(name="John Doe", email="john@example.com")
    await create_customer(name="Jane Smith", email="jane@acme.io")
    await create_customer(name="Bob", email="bob@example.com")

    by_name = await client.get("/api/customers?search=JOHN", headers=auth_headers)
    assert [c["name"] for c in by_name.json()["data"]["items"]] == ["John Doe"]

    by_email = await client.get("/api/customers?search=ACME", headers=auth_headers)
    assert [c["name"] for c in by_email.json()["data"]["items"]] == ["Jane Smith"]

    wildcard = await client.get("/api/customers?search=%25", headers=auth_headers)
    assert wildcard.json()["data"]["pagination"]["total"] == 0


async def test_get_unknown_customer_returns_404(client, auth_headers):
    res = await client.get(f"/api/customers/{uuid4()}", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "CUSTOMER_NOT_FOUND"


async def test_malformed_customer_id_is_a_validation_error(client, auth_headers):
    res = await client.get("/api/customers/not-a-uuid", headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "customer_id"


async def test_update_with_own_email_is_not_a_conflict(client, auth_headers, create_customer):
    created = await create_customer(name="John Doe", email="john@example.com")
    res = await client.put(
        f"/api/customers/{created['id']}",
        json={"email": "john@example.com", "name": "Johnny"},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Johnny"
    assert res.json()["data"]["email"] == "john@example.com"


async def test_update_to_another_customers_email_returns_email_taken(
    client, auth_headers, create_customer,
):
    await create_customer(name="A", email="a@x.com")
    b = await create_customer(name="B", email="b@x.com")
    res = await client.put(
        f"/api/customers/{b['id']}", json={"email": "a@x.com"}, headers=auth_headers,
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "EMAIL_TAKEN"

    unchanged = await client.get(f"/api/customers/{b['id']}", headers=auth_headers)
    assert unchanged.json()["data"]["email"] == "b@x.com"


async def test_partial_update_keeps_other_fields(client, auth_headers, create_customer):
    created = await create_customer(phone="+111", address="Old Street")
    res = await client.put(
        f"/api/customers/{created['id']}", json={"address": "New Street"},
        headers=auth_headers,
    )
    data = res.json()["data"]
    assert data["address"] == "New Street"
    assert data["phone"] == "+111"
    assert data["name"] == created["name"]


async def test_update_unknown_customer_returns_404(client, auth_headers):
    res = await client.put(
        f"/api/customers/{uuid4()}", json={"name": "Nobody"}, headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "CUSTOMER_NOT_FOUND"


async def test_delete_customer(client, auth_headers, create_customer):
    created = await create_customer()
    res = await client.delete(f"/api/customers/{created['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"] == {"id": created["id"]}
    assert res.json()["message"] == "Customer deleted successfully"

    gone = await client.get(f"/api/customers/{created['id']}", headers=auth_headers)
    assert gone.status_code == 404


async def test_delete_unknown_customer_returns_404(client, auth_headers):
    res = await client.delete(f"/api/customers/{uuid4()}", headers=auth_headers)
    assert res.status_code == 404


async def test_delete_customer_cascades_to_orders(
    client, auth_headers, create_customer, create_order,
):
    customer = await create_customer()
    orders = [await create_order(customer["id"], total=t) for t in (10, 20)]

    res = await client.delete(f"/api/customers/{customer['id']}", headers=auth_headers)
    assert res.status_code == 200

    for order in orders:
        gone = await client.get(f"/api/orders/{order['id']}", headers=auth_headers)
        assert gone.status_code == 404
        assert gone.json()["error"]["code"] == "ORDER_NOT_FOUND"


async def test_customer_detail_embeds_orders(
    client, auth_headers, create_customer, create_order,
):
    customer = await create_customer()
    order = await create_order(customer["id"], total=42.5, notes="gift wrap")

    res = await client.get(f"/api/customers/{customer['id']}", headers=auth_headers)
    orders = res.json()["data"]["orders"]
    assert len(orders) == 1
    assert orders[0]["id"] == order["id"]
    assert orders[0]["orderNumber"] == order["orderNumber"]
    assert orders[0]["total"] == 42.5
    assert orders[0]["notes"] == "gift wrap"


@pytest.mark.parametrize("method, path", [
    ("post", "/api/customers"),
    ("get", "/api/customers"),
    ("get", f"/api/customers/{uuid4()}"),
    ("put", f"/api/customers/{uuid4()}"),
    ("delete", f"/api/customers/{uuid4()}"),
])
async def test_every_customer_route_requires_auth(client, method, path):
    res = await client.request(method.upper(), path, json={"name": "x", "email": "x@x.com"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
