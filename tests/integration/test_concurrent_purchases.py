import asyncio

import pytest

from inventory_service.core.exceptions import InsufficientStockError
from inventory_service.services.inventory_service import InventoryService


async def _buy(session_factory, catalog, product_id, quantity):
    async with session_factory() as session:
        service = InventoryService(session, catalog)
        try:
            return await service.buy_product(product_id, quantity)
        except InsufficientStockError as e:
            return e


@pytest.mark.asyncio
async def test_concurrent_buys_never_oversell(session_factory, mock_catalog, seed_stock, read_stock):
    await seed_stock(1, 10)

    # 8 buyers of 3 units each against 10 in stock: at most 3 can succeed
    results = await asyncio.gather(
        *[_buy(session_factory, mock_catalog, 1, 3) for _ in range(8)]
    )

    receipts = [r for r in results if not isinstance(r, InsufficientStockError)]
    failures = [r for r in results if isinstance(r, InsufficientStockError)]

    sold = sum(r.quantity_purchased for r in receipts)
    assert sold <= 10
    assert len(receipts) == 3
    assert len(failures) == 5
    assert await read_stock(1) == 10 - sold
    assert sorted(r.remaining_quantity for r in receipts) == [1, 4, 7]


@pytest.mark.asyncio
async def test_concurrent_first_updates_create_one_row(session_factory, mock_catalog, read_stock):
    from sqlalchemy import select
    from inventory_service.models.inventory import StockRecord

    async def _update(quantity):
        async with session_factory() as session:
            return await InventoryService(session, mock_catalog).update_available_quantity(7, quantity)

    results = await asyncio.gather(*[_update(q) for q in (5, 6, 7, 8)])

    assert sorted(results) == [5, 6, 7, 8]
    async with session_factory() as session:
        rows = (await session.execute(select(StockRecord).where(StockRecord.product_id == 7))).scalars().all()
    assert len(rows) == 1
    assert rows[0].quantity in (5, 6, 7, 8)
    assert await read_stock(7) == rows[0].quantity
