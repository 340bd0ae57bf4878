import pytest

from inventory_service.core.exceptions import (
    CatalogUnavailableError,
    InsufficientStockError,
    InvalidRequestError,
    InventoryNotFoundError,
    ProductNotFoundError,
)
from inventory_service.services.inventory_service import InventoryService


@pytest.fixture
def service(db_session, mock_catalog):
    return InventoryService(db_session, mock_catalog)


"""
1. Available quantity
"""

@pytest.mark.asyncio
async def test_get_available_quantity(service, seed_stock):
    await seed_stock(1, 20)

    assert await service.get_available_quantity(1) == 20


@pytest.mark.asyncio
async def test_get_available_quantity_without_inventory(service):
    with pytest.raises(InventoryNotFoundError):
        await service.get_available_quantity(7)


@pytest.mark.asyncio
async def test_get_available_quantity_ignores_soft_deleted_rows(service, seed_stock):
    await seed_stock(7, 50, deleted=True)

    with pytest.raises(InventoryNotFoundError):
        await service.get_available_quantity(7)


@pytest.mark.asyncio
async def test_get_available_quantity_unknown_product(service, seed_stock):
    await seed_stock(42, 10)

    with pytest.raises(ProductNotFoundError):
        await service.get_available_quantity(42)


@pytest.mark.asyncio
async def test_get_available_quantity_deleted_product(service, seed_stock):
    await seed_stock(9, 10)

    with pytest.raises(ProductNotFoundError):
        await service.get_available_quantity(9)


"""
2. Update (upsert)
"""

@pytest.mark.asyncio
async def test_update_creates_missing_inventory(service, read_stock, session_factory):
    from sqlalchemy import select
    from inventory_service.models.inventory import StockRecord

    assert await service.update_available_quantity(7, 30) == 30
    assert await read_stock(7) == 30

    async with session_factory() as session:
        rows = (await session.execute(select(StockRecord).where(StockRecord.product_id == 7))).scalars().all()
    assert len(rows) == 1
    assert rows[0].deleted is False


@pytest.mark.asyncio
async def test_update_replaces_quantity(service, seed_stock, read_stock):
    await seed_stock(1, 20)

    assert await service.update_available_quantity(1, 3) == 3
    assert await read_stock(1) == 3


@pytest.mark.asyncio
async def test_update_is_idempotent(service, read_stock):
    first = await service.update_available_quantity(7, 12)
    second = await service.update_available_quantity(7, 12)

    assert first == second == 12
    assert await read_stock(7) == 12


@pytest.mark.asyncio
async def test_update_skips_soft_deleted_row(service, seed_stock, read_stock):
    await seed_stock(7, 99, deleted=True)

    assert await service.update_available_quantity(7, 4) == 4
    assert await read_stock(7) == 4


@pytest.mark.asyncio
async def test_update_unknown_product_writes_nothing(service, read_stock):
    with pytest.raises(ProductNotFoundError):
        await service.update_available_quantity(42, 10)

    assert await read_stock(42) is None


@pytest.mark.asyncio
async def test_update_deleted_product_writes_nothing(service, read_stock):
    with pytest.raises(ProductNotFoundError):
        await service.update_available_quantity(9, 10)

    assert await read_stock(9) is None


@pytest.mark.asyncio
async def test_update_rejects_negative_quantity(service, mock_catalog):
    with pytest.raises(InvalidRequestError):
        await service.update_available_quantity(1, -1)

    # Rejected before the catalog is consulted
    assert mock_catalog.lookup_calls == []


"""
3. Buy
"""

@pytest.mark.asyncio
async def test_buy_product(service, seed_stock, read_stock):
    await seed_stock(1, 20)

    receipt = await service.buy_product(1, 5)

    assert receipt.product_id == 1
    assert receipt.product_name == "Laptop"
    assert receipt.quantity_purchased == 5
    assert receipt.remaining_quantity == 15
    assert receipt.unit_price == 1200.0
    assert receipt.total_amount == 6000.0
    assert "5" in receipt.message and "Laptop" in receipt.message
    assert receipt.buy_date is not None

    assert await read_stock(1) == 15
    assert await service.get_available_quantity(1) == 15


@pytest.mark.asyncio
async def test_buy_whole_stock(service, seed_stock, read_stock):
    await seed_stock(7, 4)

    receipt = await service.buy_product(7, 4)

    assert receipt.remaining_quantity == 0
    assert receipt.total_amount == pytest.approx(102.0)
    assert await read_stock(7) == 0


@pytest.mark.asyncio
async def test_buy_insufficient_stock_leaves_quantity(service, seed_stock, read_stock):
    await seed_stock(1, 5)

    with pytest.raises(InsufficientStockError) as exc_info:
        await service.buy_product(1, 10)

    assert exc_info.value.available == 5
    assert exc_info.value.requested == 10
    assert "Available: 5" in str(exc_info.value)
    assert "Requested: 10" in str(exc_info.value)
    assert await read_stock(1) == 5


@pytest.mark.asyncio
async def test_buy_without_inventory_does_not_create_one(service, read_stock):
    with pytest.raises(InventoryNotFoundError):
        await service.buy_product(7, 1)

    assert await read_stock(7) is None


@pytest.mark.asyncio
async def test_buy_deleted_product(service, seed_stock, read_stock):
    await seed_stock(9, 10)

    with pytest.raises(ProductNotFoundError):
        await service.buy_product(9, 1)

    assert await read_stock(9) == 10


@pytest.mark.asyncio
async def test_buy_without_price_is_free(service, mock_catalog, seed_stock):
    mock_catalog.add_product(11, name="Sample", price=None)
    await seed_stock(11, 3)

    receipt = await service.buy_product(11, 2)

    assert receipt.unit_price == 0.0
    assert receipt.total_amount == 0.0


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -3])
async def test_buy_rejects_non_positive_quantity(service, seed_stock, read_stock, quantity):
    await seed_stock(1, 20)

    with pytest.raises(InvalidRequestError):
        await service.buy_product(1, quantity)

    assert await read_stock(1) == 20


@pytest.mark.asyncio
async def test_buy_catalog_unavailable_is_not_not_found(service, mock_catalog, seed_stock, read_stock):
    await seed_stock(1, 20)
    mock_catalog.should_fail = True

    with pytest.raises(CatalogUnavailableError):
        await service.buy_product(1, 1)

    assert await read_stock(1) == 20


@pytest.mark.asyncio
async def test_buy_lost_race_reports_fresh_availability(service, seed_stock, read_stock, mocker):
    """If the conditional decrement matches nothing, the fresh quantity is reported."""
    from inventory_service.services import stock_store

    await seed_stock(1, 5)
    mocker.patch.object(stock_store, "decrement_quantity", return_value=None)

    with pytest.raises(InsufficientStockError) as exc_info:
        await service.buy_product(1, 3)

    assert exc_info.value.available == 5
    assert await read_stock(1) == 5


"""
4. Product detail
"""

@pytest.mark.asyncio
async def test_get_product(service):
    product = await service.get_product(7)

    assert product.id == 7
    assert product.name == "Keyboard"


@pytest.mark.asyncio
async def test_get_product_deleted(service):
    with pytest.raises(ProductNotFoundError):
        await service.get_product(9)
