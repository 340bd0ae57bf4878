"""Statements against the inventories table.

Every lookup goes through ``StockRecord.active()`` so soft-deleted rows are
never seen. Writes are single statements so that concurrent requests for the
same product cannot interleave between a read and a write.
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_service.models.inventory import StockRecord


def _insert_for(db: AsyncSession):
    """Pick the dialect-specific INSERT that supports ON CONFLICT."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise NotImplementedError(f"Upsert not supported for dialect '{dialect}'")


async def get_active_record(
    db: AsyncSession,
    product_id: int,
    *,
    for_update: bool = False,
) -> Optional[StockRecord]:
    """Fetch the live stock row for a product, optionally locking it."""
    stmt = select(StockRecord).where(
        StockRecord.product_id == product_id,
        StockRecord.active(),
    )
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalars().first()


async def upsert_quantity(db: AsyncSession, product_id: int, quantity: int) -> int:
    """
    Set the quantity for a product, creating the row if there is none.

    Conflicts are resolved on the partial unique index over live rows, so two
    concurrent first-updates end up with one row. Returns the stored quantity.
    """
    insert = _insert_for(db)
    stmt = insert(StockRecord).values(
        product_id=product_id,
        quantity=quantity,
        deleted=False,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["product_id"],
        index_where=StockRecord.active(),
        set_={
            "quantity": stmt.excluded.quantity,
            "modified_at": func.now(),
        },
    ).returning(StockRecord.quantity)

    result = await db.execute(stmt)
    return result.scalar_one()


async def decrement_quantity(db: AsyncSession, product_id: int, quantity: int) -> Optional[int]:
    """
    Take ``quantity`` units off a product's live row if enough are left.

    Returns the remaining quantity, or None when no row matched (missing row
    or not enough stock at the time of the write).
    """
    stmt = (
        update(StockRecord)
        .where(
            StockRecord.product_id == product_id,
            StockRecord.active(),
            StockRecord.quantity >= quantity,
        )
        .values(
            quantity=StockRecord.quantity - quantity,
            modified_at=func.now(),
        )
        .returning(StockRecord.quantity)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()
