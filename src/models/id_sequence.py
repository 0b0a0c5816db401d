"""
Named ID sequence model.

Stores the next unallocated value of an application-managed ID sequence.
The product ID allocator keeps one row named "products".
"""

from sqlalchemy import Column, Integer, String

from .base import Base


class IdSequence(Base):
    """
    Next-value counter for an application-managed ID sequence.

    Attributes:
        name: Sequence name
        next_value: Value the next allocation will hand out
    """

    __tablename__ = "id_sequences"

    name = Column(String(50), primary_key=True)
    next_value = Column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"IdSequence(name='{self.name}', next_value={self.next_value})"
