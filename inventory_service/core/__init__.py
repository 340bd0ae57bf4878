"""
Core module exports.
"""
from .exceptions import (
    BaseServiceError,
    NotFoundError,
    ProductNotFoundError,
    InventoryNotFoundError,
    InvalidRequestError,
    InsufficientStockError,
    UpstreamServiceError,
    CatalogUnavailableError,
    DatabaseError,
)
