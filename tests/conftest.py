# tests/conftest.py
import os

# Keep the application engine off a real server during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./inventory_test.db")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inventory_service.core.config import Settings
from inventory_service.database import Base, build_engine
from inventory_service.dependencies import get_catalog, get_db
from inventory_service.main import app
from inventory_service.models.inventory import StockRecord
from tests.mocks.mock_catalog import MockCatalog


@pytest.fixture
def settings():
    """Provide test settings"""
    return Settings(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        PRODUCTS_SERVICE_URL="http://catalog.test",
        PRODUCTS_API_KEY="test_key",
        PRODUCTS_RETRY_PERIOD=0.01,
        PRODUCTS_RETRY_MAX_PERIOD=0.05,
    )


@pytest.fixture
async def test_engine(tmp_path):
    """Create and configure a file-backed SQLite engine per test function."""
    test_database_url = os.environ.get(
        "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}"
    )
    engine = build_engine(test_database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Provide a database session for tests"""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_catalog():
    """Provide a catalog fake with two live products and one deleted one"""
    catalog = MockCatalog()
    catalog.add_product(1, name="Laptop", price=1200.0)
    catalog.add_product(7, name="Keyboard", price=25.5)
    catalog.add_product(9, name="Discontinued Mouse", price=10.0, deleted=True)
    return catalog


@pytest.fixture
def seed_stock(session_factory):
    """Insert stock rows directly, bypassing the service."""
    async def _seed(product_id: int, quantity: int, deleted: bool = False) -> StockRecord:
        async with session_factory() as session:
            record = StockRecord(product_id=product_id, quantity=quantity, deleted=deleted)
            session.add(record)
            await session.commit()
            return record
    return _seed


@pytest.fixture
def read_stock(session_factory):
    """Read back the live quantity for a product (None when there is no live row)."""
    from inventory_service.services import stock_store

    async def _read(product_id: int):
        async with session_factory() as session:
            record = await stock_store.get_active_record(session, product_id)
            return record.quantity if record else None
    return _read


@pytest.fixture
async def api_client(session_factory, mock_catalog):
    """Provide an HTTP client bound to the app with the test database and catalog"""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog] = lambda: mock_catalog

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_product_payload():
    """Catalog JSON for a product, as product-service returns it"""
    return {
        "idProducto": 1,
        "nombre": "Laptop",
        "precio": 1200.0,
        "descripcion": "14 inch laptop",
        "eliminado": False,
        "fechaCreacion": "2025-10-01T10:00:00",
        "fechaModificacion": "2025-10-02T11:30:00",
    }
