"""Credential Primitives — bcrypt password hashing and HS256 access tokens.

Invariants:
    - Passwords are stored only as salted bcrypt hashes
    - Tokens carry sub (user id), email, iat, exp — nothing else
    - decode_access_token raises jose errors untouched; callers classify them

Design Decisions:
    - Synchronous: bcrypt and HMAC verification never suspend the event loop on IO
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt


def hash_password(password: str, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_access_token(
    user_id: str,
    email: str,
    secret: str,
    expires_in: timedelta = timedelta(hours=24),
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> str:
    """Sign a token for the given user. `now` is injectable for tests."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": int(issued.timestamp()),
        "exp": int((issued + expires_in).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str, secret: str, algorithm: str = "HS256",
) -> dict[str, Any]:
    """Verify signature and expiry. Raises ExpiredSignatureError / JWTError."""
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"require_exp": True, "require_sub": True},
    )
