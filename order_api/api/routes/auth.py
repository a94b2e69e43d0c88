"""Auth Routes — login (the only unauthenticated API route) and current-user profile."""

import logging

from fastapi import APIRouter, Depends

from order_api.api.dependencies import get_auth_service, require_claims
from order_api.api.results import unwrap
from order_api.schemas.auth import (
    LoginRequest, LoginResponse, TokenClaims, UserProfile, UserPublic,
)
from order_api.schemas.common import ApiResponse
from order_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    body: LoginRequest, service: AuthService = Depends(get_auth_service),
):
    """Exchange email + password for a bearer token."""
    result = unwrap(await service.login(body.email, body.password))
    logger.info(
        f"User login successful: {result.user.email}",
        extra={"user_id": str(result.user.id)},
    )
    return ApiResponse(
        data=LoginResponse(
            token=result.token, user=UserPublic.model_validate(result.user),
        ),
        message="Login successful",
    )


@router.get("/me", response_model=ApiResponse[UserProfile])
async def current_user(
    claims: TokenClaims = Depends(require_claims),
    service: AuthService = Depends(get_auth_service),
):
    user = unwrap(await service.get_profile(claims.user_id))
    return ApiResponse(
        data=UserProfile.model_validate(user),
        message="User retrieved successfully",
    )
