"""Order Routes — CRUD endpoints; every route requires a bearer token."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from order_api.api.dependencies import get_order_service, require_claims
from order_api.api.results import unwrap
from order_api.schemas.auth import TokenClaims
from order_api.schemas.common import ApiResponse, DeletedResponse, Page
from order_api.schemas.order import (
    OrderCreate, OrderListParams, OrderResponse, OrderUpdate,
)
from order_api.services.order_service import OrderService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post(
    "", response_model=ApiResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: OrderCreate,
    claims: TokenClaims = Depends(require_claims),
    service: OrderService = Depends(get_order_service),
):
    order = unwrap(await service.create(body))
    logger.info(
        f"Order created: {order.id}",
        extra={"user_id": str(claims.user_id), "order_id": str(order.id)},
    )
    return ApiResponse(
        data=OrderResponse.model_validate(order),
        message="Order created successfully",
    )


@router.get("", response_model=ApiResponse[Page[OrderResponse]])
async def list_orders(
    params: Annotated[OrderListParams, Query()],
    claims: TokenClaims = Depends(require_claims),
    service: OrderService = Depends(get_order_service),
):
    """List orders newest-first, optionally filtered by status and/or customer."""
    listing = unwrap(await service.list(params))
    return ApiResponse(
        data=Page[OrderResponse](
            items=[OrderResponse.model_validate(o) for o in listing.items],
            pagination=listing.pagination,
        ),
        message="Orders retrieved successfully",
    )


@router.get("/{order_id}", response_model=ApiResponse[OrderResponse])
async def get_order(
    order_id: UUID,
    claims: TokenClaims = Depends(require_claims),
    service: OrderService = Depends(get_order_service),
):
    order = unwrap(await service.get(order_id))
    return ApiResponse(
        data=OrderResponse.model_validate(order),
        message="Order retrieved successfully",
    )


@router.put("/{order_id}", response_model=ApiResponse[OrderResponse])
async def update_order(
    order_id: UUID,
    body: OrderUpdate,
    claims: TokenClaims = Depends(require_claims),
    service: OrderService = Depends(get_order_service),
):
    order = unwrap(await service.update(order_id, body))
    logger.info(
        f"Order updated: {order_id}",
        extra={"user_id": str(claims.user_id), "order_id": str(order_id)},
    )
    return ApiResponse(
        data=OrderResponse.model_validate(order),
        message="Order updated successfully",
    )


@router.delete("/{order_id}", response_model=ApiResponse[DeletedResponse])
async def delete_order(
    order_id: UUID,
    claims: TokenClaims = Depends(require_claims),
    service: OrderService = Depends(get_order_service),
):
    deleted_id = unwrap(await service.delete(order_id))
    logger.info(
        f"Order deleted: {order_id}",
        extra={"user_id": str(claims.user_id), "order_id": str(order_id)},
    )
    return ApiResponse(
        data=DeletedResponse(id=deleted_id),
        message="Order deleted successfully",
    )
