class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class NotFoundError(BaseServiceError):
    """Raised when a requested resource does not exist."""
    pass

class ProductNotFoundError(NotFoundError):
    """Raised when the catalog has no usable product for an id (absent or deleted)."""
    pass

class InventoryNotFoundError(NotFoundError):
    """Raised when there is no active stock record for a product."""
    pass

class InvalidRequestError(BaseServiceError):
    """Raised when input data is malformed or out of range."""
    pass

class InsufficientStockError(InvalidRequestError):
    """Raised when a purchase asks for more units than are available."""

    def __init__(self, available: int, requested: int):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock. Available: {available}, Requested: {requested}"
        )

class UpstreamServiceError(BaseServiceError):
    """Base exception for failures of services we depend on."""
    pass

class CatalogUnavailableError(UpstreamServiceError):
    """Raised when the product catalog times out or errors after retries."""
    pass

class DatabaseError(BaseServiceError):
    """Exception raised for database-related errors."""
    pass
