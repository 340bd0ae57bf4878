"""
Schema exports for the application.
"""

# Base schemas
from .base import BaseSchema, CamelSchema

# Catalog schemas
from .product import ProductSnapshot

# Inventory schemas
from .inventory import UpdateQuantityRequest, BuyRequest, PurchaseReceipt, ErrorEnvelope
