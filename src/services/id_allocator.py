"""
Product ID allocator.

Hands out product IDs 1, 2, 3, ... from a stored IdSequence row. The row is
read and advanced through the caller's session, so an allocation commits or
rolls back together with the product it was allocated for; an ID is never
handed out twice and a rolled-back registration does not burn one.

The ledger service takes an allocator as a dependency; tests and
alternative deployments can pass their own (for example one bound to a
different sequence name).
"""

from sqlalchemy.orm import Session

from src.models.id_sequence import IdSequence
from src.utils.constants import PRODUCT_ID_SEQUENCE


class ProductIdAllocator:
    """Allocates sequential product IDs from a named IdSequence row."""

    FIRST_ID = 1

    def __init__(self, sequence_name: str = PRODUCT_ID_SEQUENCE):
        self.sequence_name = sequence_name

    def _get_row(self, session: Session, for_update: bool = False):
        query = session.query(IdSequence).filter(IdSequence.name == self.sequence_name)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def peek(self, session: Session) -> int:
        """
        Next ID that allocate() would return, without consuming it.

        Transaction boundary: Inherits session from caller. Read-only.
        """
        row = self._get_row(session)
        if row is None:
            return self.FIRST_ID
        return row.next_value

    def allocate(self, session: Session) -> int:
        """
        Consume and return the next product ID.

        Transaction boundary: Inherits session from caller.
        The sequence row is locked (where supported) and advanced by one
        within the caller's transaction.

        Returns:
            Newly allocated ID
        """
        row = self._get_row(session, for_update=True)
        if row is None:
            row = IdSequence(name=self.sequence_name, next_value=self.FIRST_ID)
            session.add(row)

        allocated = row.next_value
        row.next_value = allocated + 1
        session.flush()
        return allocated

    def __repr__(self) -> str:
        return f"ProductIdAllocator(sequence_name='{self.sequence_name}')"


# Allocator used when callers don't inject their own
default_allocator = ProductIdAllocator()
