"""
Purpose: The inventory core. Orchestrates catalog validation and stock reads/writes.

Operations:
- get_available_quantity: catalog check + live stock lookup, read only
- update_available_quantity: catalog check + atomic upsert (replaces the quantity)
- buy_product: catalog check + locked read + sufficiency check + conditional
  decrement + receipt, committed as one transaction
- get_product: catalog check, returns the catalog's view of the product

The service holds no state between requests; one instance is built per request
around that request's session.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_service.core.exceptions import (
    DatabaseError,
    InsufficientStockError,
    InvalidRequestError,
    InventoryNotFoundError,
    ProductNotFoundError,
)
from inventory_service.schemas.inventory import PurchaseReceipt
from inventory_service.schemas.product import ProductSnapshot
from inventory_service.services import stock_store
from inventory_service.services.catalog.base import CatalogLookup

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, db: AsyncSession, catalog: CatalogLookup):
        self.db = db
        self.catalog = catalog

    async def _require_product(self, product_id: int) -> ProductSnapshot:
        """Look the product up in the catalog; absent or deleted products are not found."""
        product = await self.catalog.lookup_product(product_id)
        if product is None or not product.is_available:
            raise ProductNotFoundError("Product not found in product-service")
        return product

    async def get_product(self, product_id: int) -> ProductSnapshot:
        """Return the catalog's snapshot of a live product."""
        return await self._require_product(product_id)

    async def get_available_quantity(self, product_id: int) -> int:
        """
        Available units for a product.

        Raises:
            ProductNotFoundError: catalog has no live product with this id
            InventoryNotFoundError: no live stock record for the product
        """
        await self._require_product(product_id)

        record = await stock_store.get_active_record(self.db, product_id)
        if record is None:
            raise InventoryNotFoundError("Inventory not found for product")
        return record.quantity

    async def update_available_quantity(self, product_id: int, quantity: int) -> int:
        """
        Replace the available quantity for a product, creating its stock record if needed.

        Args:
            product_id: Catalog product id
            quantity: New quantity, must be >= 0

        Returns:
            The quantity as persisted

        Raises:
            InvalidRequestError: negative quantity
            ProductNotFoundError: catalog has no live product with this id
        """
        if quantity is None or quantity < 0:
            raise InvalidRequestError("Quantity must be zero or positive")

        await self._require_product(product_id)

        try:
            stored = await stock_store.upsert_quantity(self.db, product_id, quantity)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Failed to update stock for product {product_id}")
            raise DatabaseError(f"Failed to update stock: {str(e)}") from e

        logger.info(f"Stock for product {product_id} set to {stored}")
        return stored

    async def buy_product(self, product_id: int, quantity: int) -> PurchaseReceipt:
        """
        Process a purchase of ``quantity`` units of one product.

        The stock row is locked for the duration of the check and the write is a
        conditional decrement, so concurrent purchases cannot oversell. Nothing
        is written unless every check passes.

        Raises:
            InvalidRequestError: quantity not positive
            ProductNotFoundError: catalog has no live product with this id
            InventoryNotFoundError: no live stock record (purchases never create one)
            InsufficientStockError: fewer units available than requested
        """
        if quantity is None or quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than zero")

        product = await self._require_product(product_id)

        try:
            record = await stock_store.get_active_record(self.db, product_id, for_update=True)
            if record is None:
                raise InventoryNotFoundError("Inventory not found for product")

            current = record.quantity
            if current < quantity:
                raise InsufficientStockError(available=current, requested=quantity)

            remaining = await stock_store.decrement_quantity(self.db, product_id, quantity)
            if remaining is None:
                # Another writer changed the row between our read and write
                fresh = await stock_store.get_active_record(self.db, product_id)
                if fresh is None:
                    raise InventoryNotFoundError("Inventory not found for product")
                await self.db.refresh(fresh)
                raise InsufficientStockError(available=fresh.quantity, requested=quantity)

            await self.db.commit()
        except (InventoryNotFoundError, InsufficientStockError):
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Failed to process purchase of product {product_id}")
            raise DatabaseError(f"Failed to process purchase: {str(e)}") from e

        unit_price = product.unit_price
        total_amount = unit_price * quantity

        logger.info(
            f"Purchased {quantity} x product {product_id}, {remaining} left, total {total_amount}"
        )

        return PurchaseReceipt(
            product_id=product_id,
            product_name=product.name,
            quantity_purchased=quantity,
            remaining_quantity=remaining,
            unit_price=unit_price,
            total_amount=total_amount,
            buy_date=datetime.now(),
            message=f"Successfully purchased {quantity} units of {product.name}",
        )
