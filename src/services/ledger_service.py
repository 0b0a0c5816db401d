"""
Ledger Service - product registration and status updates.

Every accepted mutation appends exactly one ProductHistoryEntry and advances
the product's ProductSequenceCounter, all within a single transaction:

    register_product: allocate ID -> Product(CREATED) -> counter=1 -> entry 1
    update_status:    validate -> Product.current_status -> entry N+1 -> counter=N+1

update_status checks run in a fixed order and the first failing check wins:
    1. product exists            (ProductNotFound)
    2. status is known           (InvalidStatusError)
    3. transition is allowed     (InvalidStatusTransitionError)
    4. caller is the manufacturer (UnauthorizedError)

All validation happens before the first write, so a rejected call leaves
storage untouched.

Session Management Pattern:
- All public functions accept session=None parameter
- If session provided, use it directly
- If session is None, create a new session via session_scope()
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import (
    Product,
    ProductHistoryEntry,
    ProductSequenceCounter,
    ProductStatus,
)
from src.services.database import session_scope
from src.services.exceptions import (
    DatabaseError,
    EmptyNameError,
    HistoryImmutableError,
    InvalidStatusError,
    InvalidStatusTransitionError,
    LedgerError,
    ProductNotFound,
    UnauthorizedError,
    ValidationError,
)
from src.services.id_allocator import ProductIdAllocator, default_allocator
from src.services.logging_utils import get_service_logger, log_operation, log_rejection
from src.services.transition_validator import coerce_status, is_valid_transition
from src.utils.constants import (
    CREATED_NOTE,
    MAX_NOTES_LENGTH,
    MAX_PARTY_LENGTH,
    MAX_PRODUCT_NAME_LENGTH,
)
from src.utils.datetime_utils import ensure_utc, utc_now

logger = get_service_logger(__name__)


# =============================================================================
# History immutability
# =============================================================================


@event.listens_for(ProductHistoryEntry, "before_update")
def _reject_history_update(mapper, connection, target):
    raise HistoryImmutableError(target.product_id, target.sequence)


@event.listens_for(ProductHistoryEntry, "before_delete")
def _reject_history_delete(mapper, connection, target):
    raise HistoryImmutableError(target.product_id, target.sequence)


# =============================================================================
# Validation helpers
# =============================================================================


def _validate_party(caller: str) -> None:
    errors = []
    if not caller:
        errors.append("Acting party is required")
    elif len(caller) > MAX_PARTY_LENGTH:
        errors.append(f"Acting party must be at most {MAX_PARTY_LENGTH} characters")
    if errors:
        raise ValidationError(errors)


def _validate_name(name: str) -> None:
    if not name:
        raise EmptyNameError()
    if len(name) > MAX_PRODUCT_NAME_LENGTH:
        raise ValidationError(
            [f"Product name must be at most {MAX_PRODUCT_NAME_LENGTH} characters"]
        )


def _normalize_notes(notes: Optional[str]) -> str:
    notes = notes or ""
    if len(notes) > MAX_NOTES_LENGTH:
        raise ValidationError([f"Notes must be at most {MAX_NOTES_LENGTH} characters"])
    return notes


def _resolve_now(now: Optional[datetime]) -> datetime:
    return ensure_utc(now) if now is not None else utc_now()


# =============================================================================
# Registration
# =============================================================================


def _register_product_impl(
    name: str,
    caller: str,
    now: datetime,
    allocator: ProductIdAllocator,
    session: Session,
) -> int:
    """Internal implementation of register_product.

    Transaction boundary: Inherits session from caller.
    """
    _validate_name(name)
    _validate_party(caller)

    product_id = allocator.allocate(session)

    product = Product(
        id=product_id,
        name=name,
        manufacturer=caller,
        current_status=ProductStatus.CREATED,
        created_at=now,
        updated_at=now,
    )
    session.add(product)
    session.add(ProductSequenceCounter(product_id=product_id, count=1))
    session.add(
        ProductHistoryEntry(
            product_id=product_id,
            sequence=1,
            status=ProductStatus.CREATED,
            recorded_at=now,
            actor=caller,
            notes=CREATED_NOTE,
        )
    )
    session.flush()
    return product_id


def register_product(
    name: str,
    caller: str,
    now: Optional[datetime] = None,
    allocator: Optional[ProductIdAllocator] = None,
    session: Session = None,
) -> int:
    """Register a new product owned by caller.

    Transaction boundary: Multi-step operation (atomic).
    Steps executed atomically:
        1. Validate name (and caller identity)
        2. Allocate the next product ID
        3. Insert Product with status CREATED
        4. Insert sequence counter at 1
        5. Insert history entry 1 ("Product created")

    Args:
        name: Product name (non-empty)
        caller: Registering party; becomes the manufacturer
        now: Registration time (defaults to current UTC time)
        allocator: Product ID allocator (defaults to the shared allocator)
        session: Optional session for transaction sharing

    Returns:
        Newly allocated product ID

    Raises:
        EmptyNameError: If name is empty
        ValidationError: If name is too long or caller is missing
        DatabaseError: If the database write fails
    """
    now = _resolve_now(now)
    allocator = allocator or default_allocator

    try:
        if session is not None:
            product_id = _register_product_impl(name, caller, now, allocator, session)
        else:
            with session_scope() as session:
                product_id = _register_product_impl(name, caller, now, allocator, session)
    except LedgerError as e:
        log_rejection(logger, "register_product", e, actor=caller)
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to register product: {str(e)}", e)

    log_operation(
        logger,
        operation="register_product",
        outcome="success",
        product_id=product_id,
        actor=caller,
    )
    return product_id


# =============================================================================
# Status updates
# =============================================================================


def _update_status_impl(
    product_id: int,
    target_status,
    notes: Optional[str],
    caller: str,
    now: datetime,
    session: Session,
) -> ProductHistoryEntry:
    """Internal implementation of update_status.

    Transaction boundary: Inherits session from caller.
    Product and counter rows are locked (where supported) so concurrent
    updates of the same product serialize.
    """
    product = (
        session.query(Product).filter(Product.id == product_id).with_for_update().first()
    )
    if product is None:
        raise ProductNotFound(product_id)

    target = coerce_status(target_status)
    if target is None:
        raise InvalidStatusError(target_status)

    if not is_valid_transition(product.current_status, target):
        raise InvalidStatusTransitionError(product_id, product.current_status, target)

    if not product.is_owned_by(caller):
        raise UnauthorizedError(product_id, caller)

    notes = _normalize_notes(notes)

    counter = (
        session.query(ProductSequenceCounter)
        .filter(ProductSequenceCounter.product_id == product_id)
        .with_for_update()
        .first()
    )
    if counter is None:
        raise DatabaseError(f"Sequence counter missing for product {product_id}")

    next_sequence = counter.count + 1

    product.current_status = target
    product.updated_at = now

    entry = ProductHistoryEntry(
        product_id=product_id,
        sequence=next_sequence,
        status=target,
        recorded_at=now,
        actor=caller,
        notes=notes,
    )
    session.add(entry)
    counter.count = next_sequence
    session.flush()
    return entry


def update_status(
    product_id: int,
    target_status,
    notes: Optional[str],
    caller: str,
    now: Optional[datetime] = None,
    session: Session = None,
) -> bool:
    """Move a product to a new status and append it to the history ledger.

    Transaction boundary: Multi-step operation (atomic).
    Atomicity guarantee: Either ALL steps succeed OR nothing is written.
    Steps executed atomically:
        1. Validate existence, status, transition, ownership (in that order)
        2. Set Product.current_status and updated_at
        3. Read sequence counter N, write history entry N+1
        4. Store counter N+1

    Args:
        product_id: Product to update
        target_status: ProductStatus member or integer code
        notes: Free-text note stored on the history entry
        caller: Acting party; must be the product's manufacturer
        now: Time of the change (defaults to current UTC time)
        session: Optional session for transaction sharing

    Returns:
        True when the update was recorded

    Raises:
        ProductNotFound: No product with product_id
        InvalidStatusError: target_status is not a known status
        InvalidStatusTransitionError: Transition not allowed from current status
        UnauthorizedError: caller is not the manufacturer
        ValidationError: notes too long
        DatabaseError: If the database write fails
    """
    now = _resolve_now(now)

    try:
        if session is not None:
            entry = _update_status_impl(product_id, target_status, notes, caller, now, session)
        else:
            with session_scope() as session:
                entry = _update_status_impl(
                    product_id, target_status, notes, caller, now, session
                )
    except LedgerError as e:
        log_rejection(
            logger,
            "update_status",
            e,
            product_id=product_id,
            target_status=target_status,
            actor=caller,
        )
        raise
    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update status of product {product_id}: {str(e)}", e)

    log_operation(
        logger,
        operation="update_status",
        outcome="success",
        product_id=product_id,
        status=entry.status.name,
        sequence=entry.sequence,
        actor=caller,
    )
    return True
