"""
Schemas for the inventory API: request bodies, the purchase receipt and the
error envelope shared by every failing response.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import Field

from inventory_service.schemas.base import BaseSchema, CamelSchema

# Upper bound of the INTEGER columns the quantities and ids are stored in
MAX_INT32 = 2**31 - 1


class UpdateQuantityRequest(BaseSchema):
    """New available quantity for a product (replaces, does not add)."""
    cantidad: int = Field(..., strict=True, ge=0, le=MAX_INT32, description="New available quantity (>= 0)", examples=[25])


class BuyRequest(CamelSchema):
    """Purchase of a single product."""
    product_id: int = Field(..., strict=True, le=MAX_INT32, description="Catalog id of the product to buy")
    quantity: int = Field(..., strict=True, gt=0, le=MAX_INT32, description="Units to buy (> 0)")


class PurchaseReceipt(CamelSchema):
    """Summary of a completed purchase. Computed per request, never stored."""
    product_id: int
    product_name: Optional[str] = None
    quantity_purchased: int
    remaining_quantity: int
    unit_price: float
    total_amount: float
    buy_date: datetime
    message: str


class ErrorEnvelope(BaseSchema):
    """Body of every error response."""
    path: str
    mensaje: List[str]
