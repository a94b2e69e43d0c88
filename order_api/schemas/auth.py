"""Auth Schemas — login request/response and decoded token claims."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from order_api.schemas.common import ApiModel, EmailAddress


class LoginRequest(ApiModel):
    email: EmailAddress
    password: str = Field(min_length=1)


class UserPublic(ApiModel):
    id: UUID
    email: str
    name: str


class UserProfile(UserPublic):
    created_at: datetime
    updated_at: datetime


class LoginResponse(ApiModel):
    token: str
    user: UserPublic


class TokenClaims(BaseModel):
    """Decoded bearer token. Lives for one request, passed explicitly to handlers."""
    model_config = {"frozen": True}

    user_id: UUID
    email: str
    issued_at: int | None = None
    expires_at: int
