"""
Product history ledger models.

This module contains:
- ProductHistoryEntry: one immutable record per accepted mutation
- ProductSequenceCounter: number of history entries written per product

Entries are keyed by (product_id, sequence). Sequence numbers start at 1
(the registration entry) and grow by exactly one per accepted status
update, so the composite primary key rejects any duplicate.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship, validates

from src.utils.constants import MAX_NOTES_LENGTH, MAX_PARTY_LENGTH
from src.utils.datetime_utils import utc_now

from .base import Base, UTCDateTime, columns_to_dict
from .product_status import ProductStatus


class ProductHistoryEntry(Base):
    """
    One line of a product's audit trail.

    Attributes:
        product_id: Product the entry belongs to
        sequence: Position in the product's ledger (1-based, no gaps)
        status: Status the product entered with this mutation
        recorded_at: When the mutation was committed
        actor: Party that performed the mutation
        notes: Free-text note supplied with the mutation
    """

    __tablename__ = "product_history"

    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)
    sequence = Column(Integer, primary_key=True, autoincrement=False)
    status = Column(SQLEnum(ProductStatus), nullable=False)
    recorded_at = Column(UTCDateTime, nullable=False, default=utc_now)
    actor = Column(String(MAX_PARTY_LENGTH), nullable=False)
    notes = Column(String(MAX_NOTES_LENGTH), nullable=False, default="")

    product = relationship("Product", back_populates="history_entries")

    def to_dict(self):
        return columns_to_dict(self)

    def __repr__(self) -> str:
        return (
            f"ProductHistoryEntry(product_id={self.product_id}, "
            f"sequence={self.sequence}, status={self.status.name})"
        )


class ProductSequenceCounter(Base):
    """
    Count of history entries written for one product.

    Created at 1 alongside the product and advanced by exactly one per
    accepted status update. Never decremented or reset.
    """

    __tablename__ = "product_sequence_counters"

    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)
    count = Column(Integer, nullable=False, default=1)

    product = relationship("Product", back_populates="sequence_counter")

    @validates("count")
    def _validate_count(self, _key, value):
        if self.count is not None and value != self.count + 1:
            raise ValueError(
                f"Sequence counter for product {self.product_id} can only advance by one "
                f"(current {self.count}, requested {value})"
            )
        return value

    def __repr__(self) -> str:
        return f"ProductSequenceCounter(product_id={self.product_id}, count={self.count})"
