"""
Schema for product data as exposed by the external product catalog.

The catalog speaks Spanish field names on the wire (idProducto, nombre, ...);
inside the service the snapshot is used through snake_case attributes.
"""

from typing import Optional
from pydantic import Field, field_validator

from inventory_service.schemas.base import BaseSchema


class ProductSnapshot(BaseSchema):
    """A product as returned by GET /products/{id} on the catalog."""
    id: Optional[int] = Field(default=None, alias="idProducto")
    name: Optional[str] = Field(default=None, alias="nombre")
    price: Optional[float] = Field(default=None, alias="precio")
    description: Optional[str] = Field(default=None, alias="descripcion")
    deleted: Optional[bool] = Field(default=False, alias="eliminado")
    created_at: Optional[str] = Field(default=None, alias="fechaCreacion")
    modified_at: Optional[str] = Field(default=None, alias="fechaModificacion")

    @field_validator('deleted', mode='before')
    @classmethod
    def null_means_not_deleted(cls, v):
        return bool(v) if v is not None else False

    @property
    def is_available(self) -> bool:
        """Usable for stock operations: identified and not soft-deleted."""
        return self.id is not None and not self.deleted

    @property
    def unit_price(self) -> float:
        return self.price if self.price is not None else 0.0
