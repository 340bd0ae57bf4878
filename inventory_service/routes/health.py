from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from inventory_service.dependencies import get_db

router = APIRouter(tags=["health"])

logger = logging.getLogger(__name__)

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "inventory-service"}

@router.get("/health/db")
async def database_health(db: AsyncSession = Depends(get_db)):
    """Check database connectivity"""
    try:
        await db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected",
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return {
            "status": "unhealthy",
            "database": "error",
            "error": type(e).__name__
        }
