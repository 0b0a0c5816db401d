"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel, UTCDateTime
from .product_status import ProductStatus, STATUS_NAMES, get_status_name
from .product import Product
from .product_history import ProductHistoryEntry, ProductSequenceCounter
from .id_sequence import IdSequence

__all__ = [
    "Base",
    "BaseModel",
    "UTCDateTime",
    "ProductStatus",
    "STATUS_NAMES",
    "get_status_name",
    "Product",
    "ProductHistoryEntry",
    "ProductSequenceCounter",
    "IdSequence",
]
