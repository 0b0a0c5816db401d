"""
Product Query Service - read-only lookups over the product ledger.

None of these functions write. Records are returned detached from their
session with column attributes loaded, so they can be used after the
transaction closes. Relationships are not loaded; use get_product_history()
for the ledger of a product.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from src.models import Product, ProductHistoryEntry, ProductSequenceCounter
from src.models.product_status import get_status_name
from src.services.database import session_scope
from src.services.id_allocator import ProductIdAllocator, default_allocator
from src.services.transition_validator import is_valid_transition


def _detach(session: Session, instance):
    if instance is not None:
        session.expunge(instance)
    return instance


def get_product(product_id: int, session: Session = None) -> Optional[Product]:
    """
    Fetch a product by ID.

    Args:
        product_id: Product ID
        session: Optional session for transaction sharing

    Returns:
        Product, or None if no product has that ID
    """
    if session is not None:
        return session.query(Product).filter(Product.id == product_id).first()

    with session_scope() as session:
        return _detach(session, session.query(Product).filter(Product.id == product_id).first())


def get_history_entry(
    product_id: int, sequence: int, session: Session = None
) -> Optional[ProductHistoryEntry]:
    """
    Fetch one history entry by (product ID, sequence number).

    Returns:
        ProductHistoryEntry, or None if no such entry exists
    """

    def _query(session):
        return (
            session.query(ProductHistoryEntry)
            .filter(
                ProductHistoryEntry.product_id == product_id,
                ProductHistoryEntry.sequence == sequence,
            )
            .first()
        )

    if session is not None:
        return _query(session)

    with session_scope() as session:
        return _detach(session, _query(session))


def get_product_history(product_id: int, session: Session = None) -> List[ProductHistoryEntry]:
    """
    Fetch a product's full history, oldest first.

    Returns:
        Entries ordered by sequence number (empty list for unknown products)
    """

    def _query(session):
        return (
            session.query(ProductHistoryEntry)
            .filter(ProductHistoryEntry.product_id == product_id)
            .order_by(ProductHistoryEntry.sequence)
            .all()
        )

    if session is not None:
        return _query(session)

    with session_scope() as session:
        entries = _query(session)
        for entry in entries:
            session.expunge(entry)
        return entries


def get_sequence_count(product_id: int, session: Session = None) -> int:
    """
    Number of history entries written for a product.

    Returns:
        Current counter value, or 0 if the product is unknown
    """

    def _query(session):
        counter = (
            session.query(ProductSequenceCounter)
            .filter(ProductSequenceCounter.product_id == product_id)
            .first()
        )
        return counter.count if counter is not None else 0

    if session is not None:
        return _query(session)

    with session_scope() as session:
        return _query(session)


def can_transition(product_id: int, target_status, session: Session = None) -> bool:
    """
    Check whether the product's current status allows moving to target_status.

    Ownership is not considered.

    Returns:
        False for unknown products or unknown statuses
    """
    product = get_product(product_id, session=session)
    if product is None:
        return False
    return is_valid_transition(product.current_status, target_status)


def status_display_name(status) -> str:
    """Human-readable name of a status ("Unknown" for unrecognized values)."""
    return get_status_name(status)


def next_product_id(
    allocator: Optional[ProductIdAllocator] = None, session: Session = None
) -> int:
    """
    ID the next registration will receive.

    Returns:
        Next unallocated product ID (1 before any registration)
    """
    allocator = allocator or default_allocator

    if session is not None:
        return allocator.peek(session)

    with session_scope() as session:
        return allocator.peek(session)
