"""API Dependencies — settings, services and the bearer-token authenticator.

Invariants:
    - require_claims runs once per protected request and never touches the DB
    - Missing/malformed header -> UNAUTHORIZED; expired -> TOKEN_EXPIRED;
      bad signature or format -> INVALID_TOKEN; anything else -> UNAUTHORIZED
    - Claims are returned to the handler as an argument, never stored on the request
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.config import Settings
from order_api.core.errors import AuthenticationError
from order_api.core.security import decode_access_token
from order_api.infrastructure.database import get_db
from order_api.schemas.auth import TokenClaims
from order_api.services.auth_service import AuthService
from order_api.services.customer_service import CustomerService
from order_api.services.order_service import OrderService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> TokenClaims:
    """Verify the bearer token and return its claims."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("UNAUTHORIZED", "Access token required")

    try:
        payload = decode_access_token(
            credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
        )
    except ExpiredSignatureError:
        raise AuthenticationError("TOKEN_EXPIRED", "Token has expired")
    except JWTError as e:
        logger.warning(f"Token rejected: {e}")
        raise AuthenticationError("INVALID_TOKEN", "Invalid token")

    try:
        return TokenClaims(
            user_id=payload["sub"],
            email=payload["email"],
            issued_at=payload.get("iat"),
            expires_at=payload["exp"],
        )
    except (KeyError, ValidationError) as e:
        logger.warning(f"Token claims unusable: {e}")
        raise AuthenticationError("UNAUTHORIZED", "Token verification failed")


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_customer_service(db: AsyncSession = Depends(get_db)) -> CustomerService:
    return CustomerService(db)


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(db)
