"""
Base model class for all database models.

Provides common functionality and fields for all models:
- SQLAlchemy declarative base
- UTCDateTime column type (aware UTC in, aware UTC out)
- Timestamp fields (created_at, updated_at)
- Utility methods (to_dict)
"""

import enum
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

from src.utils.datetime_utils import ensure_utc, utc_now

# Create the declarative base for all models
Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """
    DateTime column that always hands back timezone-aware UTC values.

    SQLite stores datetimes without an offset, so values are normalized to
    UTC on the way in and tagged as UTC on the way out.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        value = ensure_utc(value)
        if value is not None and dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        return ensure_utc(value)


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    All timestamped models inherit from this class to get:
    - created_at: Timestamp when record was created
    - updated_at: Timestamp when record was last modified
    - to_dict(): Convert model to dictionary

    Subclasses declare their own primary key.
    """

    __abstract__ = True

    created_at = Column(UTCDateTime, nullable=False, default=utc_now)
    updated_at = Column(UTCDateTime, nullable=False, default=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Datetimes become ISO strings and enums become their names.

        Returns:
            Dictionary representation of the model
        """
        return columns_to_dict(self)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        attrs = []

        if getattr(self, "id", None) is not None:
            attrs.append(f"id={self.id}")
        if getattr(self, "name", None) is not None:
            attrs.append(f"name='{self.name}'")

        return f"{class_name}({', '.join(attrs)})"


def columns_to_dict(instance) -> Dict[str, Any]:
    """Serialize the mapped columns of any model instance."""
    result = {}
    for column in instance.__table__.columns:
        value = getattr(instance, column.name)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, enum.Enum):
            value = value.name
        result[column.name] = value
    return result
