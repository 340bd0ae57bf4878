from abc import ABC, abstractmethod
from typing import Optional

from inventory_service.schemas.product import ProductSnapshot


class CatalogLookup(ABC):
    """Resolves a product id against the product catalog."""

    @abstractmethod
    async def lookup_product(self, product_id: int) -> Optional[ProductSnapshot]:
        """
        Fetch a fresh snapshot of a product.

        Returns None when the catalog does not know the product. Raises
        CatalogUnavailableError when the catalog cannot be reached.
        """
        pass

    async def close(self) -> None:
        """Release any held resources"""
        pass
