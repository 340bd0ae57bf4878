# inventory_service/cli/create_tables.py
import asyncio
import click

from inventory_service.database import Base, build_engine

# Import all models to ensure they're registered with the Base
from inventory_service.models.inventory import StockRecord  # noqa: F401


async def _create_tables(database_url: str, echo: bool = False):
    engine = build_engine(database_url, echo=echo)
    try:
        async with engine.begin() as conn:
            # This will create all tables defined in models that inherit from Base
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


@click.command()
@click.option("--database-url", default=None, help="Override DATABASE_URL from settings")
@click.option("--echo", is_flag=True, help="Echo the emitted SQL")
def create_tables(database_url, echo):
    """Create all database tables directly using SQLAlchemy"""
    from inventory_service.core.config import get_settings
    settings = get_settings()

    asyncio.run(_create_tables(database_url or settings.DATABASE_URL, echo=echo))
    click.echo("All tables created successfully!")


if __name__ == "__main__":
    create_tables()
