"""Customer Routes — CRUD endpoints; every route requires a bearer token.

Invariants:
    - Handlers hold no business logic: validate (FastAPI/pydantic), call the
      service, unwrap the result, wrap it in the success envelope
    - Mutations are logged with the acting user id from the token claims
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from order_api.api.dependencies import get_customer_service, require_claims
from order_api.api.results import unwrap
from order_api.schemas.auth import TokenClaims
from order_api.schemas.common import ApiResponse, DeletedResponse, Page
from order_api.schemas.customer import (
    CustomerCreate,
    CustomerListParams,
    CustomerResponse,
    CustomerUpdate,
    CustomerWithOrders,
)
from order_api.services.customer_service import CustomerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.post(
    "", response_model=ApiResponse[CustomerResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    body: CustomerCreate,
    claims: TokenClaims = Depends(require_claims),
    service: CustomerService = Depends(get_customer_service),
):
    customer = unwrap(await service.create(body))
    logger.info(
        f"Customer created: {customer.id}",
        extra={"user_id": str(claims.user_id), "customer_id": str(customer.id)},
    )
    return ApiResponse(
        data=CustomerResponse.model_validate(customer),
        message="Customer created successfully",
    )


@router.get("", response_model=ApiResponse[Page[CustomerWithOrders]])
async def list_customers(
    params: Annotated[CustomerListParams, Query()],
    claims: TokenClaims = Depends(require_claims),
    service: CustomerService = Depends(get_customer_service),
):
    """List customers newest-first, optionally filtered by a name/email search."""
    listing = unwrap(await service.list(params))
    return ApiResponse(
        data=Page[CustomerWithOrders](
            items=[CustomerWithOrders.model_validate(c) for c in listing.items],
            pagination=listing.pagination,
        ),
        message="Customers retrieved successfully",
    )


@router.get("/{customer_id}", response_model=ApiResponse[CustomerWithOrders])
async def get_customer(
    customer_id: UUID,
    claims: TokenClaims = Depends(require_claims),
    service: CustomerService = Depends(get_customer_service),
):
    customer = unwrap(await service.get(customer_id))
    return ApiResponse(
        data=CustomerWithOrders.model_validate(customer),
        message="Customer retrieved successfully",
    )


@router.put("/{customer_id}", response_model=ApiResponse[CustomerResponse])
async def update_customer(
    customer_id: UUID,
    body: CustomerUpdate,
    claims: TokenClaims = Depends(require_claims),
    service: CustomerService = Depends(get_customer_service),
):
    customer = unwrap(await service.update(customer_id, body))
    logger.info(
        f"Customer updated: {customer_id}",
        extra={"user_id": str(claims.user_id), "customer_id": str(customer_id)},
    )
    return ApiResponse(
        data=CustomerResponse.model_validate(customer),
        message="Customer updated successfully",
    )


@router.delete("/{customer_id}", response_model=ApiResponse[DeletedResponse])
async def delete_customer(
    customer_id: UUID,
    claims: TokenClaims = Depends(require_claims),
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer together with all of its orders."""
    deleted_id = unwrap(await service.delete(customer_id))
    logger.info(
        f"Customer deleted: {customer_id}",
        extra={"user_id": str(claims.user_id), "customer_id": str(customer_id)},
    )
    return ApiResponse(
        data=DeletedResponse(id=deleted_id),
        message="Customer deleted successfully",
    )
