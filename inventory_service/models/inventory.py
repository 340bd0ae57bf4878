"""
Model for the stock held for each catalog product.

One active row per product id. Rows are soft-deleted through the ``deleted``
flag and are never physically removed by the service.
"""

from sqlalchemy import Column, Integer, Boolean, TIMESTAMP, CheckConstraint, Index, false, func

from ..database import Base


class StockRecord(Base):
    __tablename__ = "inventories"

    # Primary Key and Timestamps
    id = Column(Integer, primary_key=True)

    created_at = Column(
        TIMESTAMP(timezone=False),
        server_default=func.now(),
        nullable=False
    )

    modified_at = Column(
        TIMESTAMP(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # Stock
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventories_quantity_non_negative"),
        # product_id is a natural key among live rows only
        Index(
            "uq_inventories_product_id_active",
            "product_id",
            unique=True,
            postgresql_where=(deleted == false()),
            sqlite_where=(deleted == false()),
        ),
    )

    @classmethod
    def active(cls):
        """Predicate selecting rows that are not soft-deleted."""
        return cls.deleted == false()

    def __repr__(self):
        return f"<StockRecord product_id={self.product_id} quantity={self.quantity} deleted={self.deleted}>"
