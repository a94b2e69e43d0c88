"""Auth Service — credential check, token issuance and user provisioning.

Invariants:
    - Unknown email and wrong password yield the SAME result (InvalidCredentials)
    - A bcrypt comparison runs even when the email is unknown
    - Issued tokens embed user id + email and expire after jwt_expires_hours
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from order_api.config import Settings
from order_api.core.results import InvalidCredentials, NotFound, Ok
from order_api.core.security import (
    create_access_token, hash_password, verify_password,
)
from order_api.infrastructure.database import storage_errors
from order_api.models.user import User

logger = logging.getLogger(__name__)

USER_NOT_FOUND = NotFound("USER_NOT_FOUND", "User not found")


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


@lru_cache
def _placeholder_hash(rounds: int) -> str:
    return hash_password("placeholder-password", rounds)


class AuthService:
    """User lookup and token issuance."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def login(
        self, email: str, password: str,
    ) -> Ok[LoginResult] | InvalidCredentials:
        async with storage_errors(self.db, "finding user"):
            user = await self.find_by_email(email)

        stored_hash = user.password if user else _placeholder_hash(self.settings.bcrypt_rounds)
        if not verify_password(password, stored_hash) or user is None:
            return InvalidCredentials()

        token = create_access_token(
            str(user.id),
            user.email,
            self.settings.jwt_secret,
            expires_in=timedelta(hours=self.settings.jwt_expires_hours),
            algorithm=self.settings.jwt_algorithm,
        )
        return Ok(LoginResult(token=token, user=user))

    async def get_profile(self, user_id: UUID) -> Ok[User] | NotFound:
        async with storage_errors(self.db, "finding user"):
            user = await self.db.get(User, user_id)
        if user is None:
            return USER_NOT_FOUND
        return Ok(user)

    async def find_by_email(self, email: str) -> User | None:
        return await self.db.scalar(select(User).where(User.email == email))

    async def provision_user(self, email: str, password: str, name: str) -> User:
        """Create the user if missing; an existing user is left untouched."""
        async with storage_errors(self.db, "creating user"):
            user = await self.find_by_email(email)
            if user is not None:
                return user
            user = User(
                email=email,
                password=hash_password(password, self.settings.bcrypt_rounds),
                name=name,
            )
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        logger.info(f"User provisioned: {email}")
        return user
