"""
Tracked product model.

A Product is a single physical item whose lifecycle is being recorded.
Its ID comes from the product ID allocator rather than the database
autoincrement, so IDs start at 1 and are never reused.
"""

from sqlalchemy import Column, Integer, String, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship, validates

from src.utils.constants import MAX_PARTY_LENGTH, MAX_PRODUCT_NAME_LENGTH

from .base import BaseModel
from .product_status import ProductStatus


class Product(BaseModel):
    """
    Product model representing one tracked physical item.

    Attributes:
        id: Allocated product ID (1, 2, 3, ...)
        name: Product name (non-empty)
        manufacturer: Identity of the registering party; the only party
            allowed to change the status. Immutable once set.
        current_status: Latest accepted ProductStatus
        created_at: Registration time
        updated_at: Time of the latest accepted status change
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(MAX_PRODUCT_NAME_LENGTH), nullable=False)
    manufacturer = Column(String(MAX_PARTY_LENGTH), nullable=False, index=True)
    current_status = Column(
        SQLEnum(ProductStatus), nullable=False, default=ProductStatus.CREATED
    )

    history_entries = relationship(
        "ProductHistoryEntry",
        back_populates="product",
        order_by="ProductHistoryEntry.sequence",
        lazy="select",
    )
    sequence_counter = relationship(
        "ProductSequenceCounter",
        back_populates="product",
        uselist=False,
        lazy="select",
    )

    __table_args__ = (Index("idx_product_status", "current_status"),)

    @validates("manufacturer")
    def _validate_manufacturer(self, _key, value):
        """Manufacturer is set once at registration."""
        if self.manufacturer is not None and value != self.manufacturer:
            raise ValueError(f"Manufacturer of product {self.id} cannot be changed")
        return value

    def is_owned_by(self, party: str) -> bool:
        """True if party registered this product."""
        return self.manufacturer == party
