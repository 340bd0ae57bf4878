# inventory_service/main.py

import logging
import subprocess
from contextlib import asynccontextmanager

from fastapi import FastAPI

import inventory_service.core.logging_config  # noqa: F401  configures logging on import
from inventory_service.core.config import get_settings
from inventory_service.core.error_handlers import register_exception_handlers
from inventory_service.routes import health, inventory
from inventory_service.services.catalog.client import ProductCatalogClient

logger = logging.getLogger(__name__)


def run_migrations():
    """Run `alembic upgrade head`; a failure stops startup."""
    logger.info("Running database migrations...")
    result = subprocess.run(['alembic', 'upgrade', 'head'], capture_output=True, text=True)
    if result.returncode != 0:
        logger.error(f"Migration failed: {result.stderr}")
        raise RuntimeError("Database migrations failed")
    logger.info("Migrations completed successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    if settings.RUN_MIGRATIONS:
        run_migrations()

    # Tests may install their own catalog before startup
    if getattr(app.state, "catalog", None) is None:
        app.state.catalog = ProductCatalogClient.from_settings(settings)

    logger.info(f"Inventory service started ({settings.ENVIRONMENT})")
    try:
        yield  # This is where the app runs
    finally:
        await app.state.catalog.close()
        app.state.catalog = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = get_settings()
    app = FastAPI(
        title="Inventory Service",
        description="Stock levels and purchases for catalog products",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.catalog = None

    register_exception_handlers(app)

    app.include_router(inventory.router)
    app.include_router(health.router)  # Health check should be accessible without auth

    return app


app = create_app()
