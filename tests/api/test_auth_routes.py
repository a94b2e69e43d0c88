"""Auth Routes — login, token verification outcomes, current-user profile.

Tests cover:
    - Login returns a token that decodes to the user's id and email
    - Wrong password and unknown email are indistinguishable (same code + message)
    - Missing / expired / tampered / malformed tokens map to distinct 401 codes
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from order_api.core.security import (
    create_access_token, decode_access_token, hash_password,
)
from order_api.main import app
from order_api.models import User

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


def _secret() -> str:
    return app.state.settings.jwt_secret


# ─── login ───────────────────────────────────────────────────────

async def test_login_returns_token_and_user(client, admin_user):
    res = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["user"] == {
        "id": str(admin_user.id), "email": ADMIN_EMAIL, "name": "Admin User",
    }
    claims = decode_access_token(body["data"]["token"], _secret())
    assert claims["sub"] == str(admin_user.id)
    assert claims["email"] == ADMIN_EMAIL


async def test_login_with_mixed_case_domain(client, test_db):
    test_db.add(User(
        email="Ops@Example.COM",
        password=hash_password("ops-password", rounds=4),
        name="Ops",
    ))
    await test_db.commit()

    res = await client.post(
        "/api/auth/login", json={"email": "Ops@Example.COM", "password": "ops-password"},
    )
    assert res.status_code == 200
    assert res.json()["data"]["user"]["email"] == "Ops@Example.COM"


async def test_login_token_expires_after_24_hours(client, admin_user):
    res = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    claims = decode_access_token(res.json()["data"]["token"], _secret())
    assert claims["exp"] - claims["iat"] == 24 * 3600


async def test_wrong_password_and_unknown_email_look_identical(client, admin_user):
    wrong_pw = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"},
    )
    unknown = await client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": ADMIN_PASSWORD},
    )
    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json() == unknown.json()
    assert wrong_pw.json()["error"]["code"] == "INVALID_CREDENTIALS"


async def test_login_reports_all_validation_errors(client):
    res = await client.post("/api/auth/login", json={"email": "not-an-email", "password": ""})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {d["field"] for d in error["details"]} == {"email", "password"}


# ─── token verification ──────────────────────────────────────────

async def test_missing_authorization_header_returns_unauthorized(client):
    res = await client.get("/api/customers")
    assert res.status_code == 401
    assert res.json() == {
        "success": False,
        "error": {"code": "UNAUTHORIZED", "message": "Access token required"},
    }
    assert res.headers["www-authenticate"] == "Bearer"


async def test_non_bearer_scheme_returns_unauthorized(client):
    res = await client.get("/api/customers", headers={"Authorization": "Basic abc123"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_expired_token_returns_token_expired(client, admin_user):
    token = create_access_token(
        str(admin_user.id), admin_user.email, _secret(),
        now=datetime.now(timezone.utc) - timedelta(days=2),
    )
    res = await client.get("/api/orders", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "TOKEN_EXPIRED"


async def test_token_signed_with_other_secret_returns_invalid_token(client, admin_user):
    token = create_access_token(str(admin_user.id), admin_user.email, "someone-elses-secret")
    res = await client.get("/api/orders", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_tampered_payload_returns_invalid_token(client, admin_user):
    token = create_access_token(str(admin_user.id), admin_user.email, _secret())
    header, _, signature = token.split(".")
    forged = jwt.encode(
        {"sub": str(admin_user.id), "email": "root@example.com", "exp": 9999999999},
        "guess", algorithm="HS256",
    ).split(".")[1]
    res = await client.get(
        "/api/orders", headers={"Authorization": f"Bearer {header}.{forged}.{signature}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_garbage_token_returns_invalid_token(client):
    res = await client.get("/api/customers", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_valid_signature_with_unusable_claims_returns_unauthorized(client):
    token = create_access_token("not-a-uuid", "admin@example.com", _secret())
    res = await client.get("/api/customers", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


# ─── /me ─────────────────────────────────────────────────────────

async def test_me_returns_profile(client, admin_user, auth_headers):
    res = await client.get("/api/auth/me", headers=auth_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == str(admin_user.id)
    assert data["email"] == ADMIN_EMAIL
    assert "password" not in data
    assert "createdAt" in data


async def test_me_for_deleted_user_returns_404(client, admin_user, auth_headers, test_db):
    await test_db.delete(admin_user)
    await test_db.commit()
    res = await client.get("/api/auth/me", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"
