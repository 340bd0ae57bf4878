from .inventory import StockRecord

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'StockRecord',
]
