"""
API routes for inventory management.

This module provides endpoints for:
- Reading the available quantity of a product
- Reading a product as the product catalog exposes it
- Setting the available quantity (upsert)
- Buying a product
"""

import logging

from fastapi import APIRouter, Depends, Path

from inventory_service.dependencies import get_inventory_service
from inventory_service.schemas.inventory import (
    MAX_INT32,
    BuyRequest,
    ErrorEnvelope,
    PurchaseReceipt,
    UpdateQuantityRequest,
)
from inventory_service.schemas.product import ProductSnapshot
from inventory_service.services.inventory_service import InventoryService

router = APIRouter(prefix="/api/v1/inventory", tags=["inventory"])

logger = logging.getLogger(__name__)

NOT_FOUND = {404: {"model": ErrorEnvelope, "description": "Product or inventory not found"}}
BAD_REQUEST = {400: {"model": ErrorEnvelope, "description": "Invalid request"}}
UNAVAILABLE = {503: {"model": ErrorEnvelope, "description": "Product service unavailable"}}


@router.get(
    "/{product_id}/available",
    response_model=int,
    responses={**NOT_FOUND, **UNAVAILABLE},
)
async def get_available(
    product_id: int = Path(..., le=MAX_INT32, description="Product identifier"),
    service: InventoryService = Depends(get_inventory_service),
):
    """Available quantity in stock for a product"""
    return await service.get_available_quantity(product_id)


@router.get(
    "/{product_id}",
    response_model=ProductSnapshot,
    responses={**NOT_FOUND, **UNAVAILABLE},
)
async def get_product(
    product_id: int = Path(..., le=MAX_INT32, description="Product identifier"),
    service: InventoryService = Depends(get_inventory_service),
):
    """Product detail exactly as the product service exposes it"""
    return await service.get_product(product_id)


@router.put(
    "/update/{product_id}",
    response_model=int,
    responses={**BAD_REQUEST, **NOT_FOUND, **UNAVAILABLE},
)
async def update_available(
    request: UpdateQuantityRequest,
    product_id: int = Path(..., le=MAX_INT32, description="Product identifier"),
    service: InventoryService = Depends(get_inventory_service),
):
    """Set the available quantity for a product, creating its inventory if needed"""
    return await service.update_available_quantity(product_id, request.cantidad)


@router.post(
    "/buy",
    response_model=PurchaseReceipt,
    responses={**BAD_REQUEST, **NOT_FOUND, **UNAVAILABLE},
)
async def buy_product(
    request: BuyRequest,
    service: InventoryService = Depends(get_inventory_service),
):
    """Buy a product: checks availability, takes the units off stock and returns a receipt"""
    logger.info(f"Purchase request: product {request.product_id} x {request.quantity}")
    return await service.buy_product(request.product_id, request.quantity)
