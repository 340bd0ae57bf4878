from typing import AsyncGenerator
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_service.database import async_session
from inventory_service.services.catalog.base import CatalogLookup
from inventory_service.services.inventory_service import InventoryService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


def get_catalog(request: Request) -> CatalogLookup:
    """The catalog client created at startup (see main.lifespan)."""
    return request.app.state.catalog


def get_inventory_service(
    db: AsyncSession = Depends(get_db),
    catalog: CatalogLookup = Depends(get_catalog),
) -> InventoryService:
    return InventoryService(db, catalog)
