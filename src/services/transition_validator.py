"""
Transition Validator - lifecycle rules for product status changes.

Pure functions over ProductStatus; nothing here touches the database.

Status values arrive from callers as enum members or raw integer codes
(CLI input, imported data). is_valid_status() answers the membership
question on its own so the ledger can report an unknown status separately
from a forbidden transition.
"""

from typing import Dict, FrozenSet, Optional

from src.models.product_status import ProductStatus


# Valid status transitions map
VALID_TRANSITIONS: Dict[ProductStatus, FrozenSet[ProductStatus]] = {
    ProductStatus.CREATED: frozenset(
        {ProductStatus.IN_PRODUCTION, ProductStatus.RECALLED}
    ),
    ProductStatus.IN_PRODUCTION: frozenset(
        {ProductStatus.QUALITY_CHECK, ProductStatus.RECALLED}
    ),
    ProductStatus.QUALITY_CHECK: frozenset(
        {ProductStatus.SHIPPED, ProductStatus.IN_PRODUCTION, ProductStatus.RECALLED}
    ),
    ProductStatus.SHIPPED: frozenset(
        {ProductStatus.DELIVERED, ProductStatus.RECALLED}
    ),
    ProductStatus.DELIVERED: frozenset({ProductStatus.RECALLED}),
    ProductStatus.RECALLED: frozenset(),  # Terminal
}

TERMINAL_STATUSES: FrozenSet[ProductStatus] = frozenset(
    status for status, targets in VALID_TRANSITIONS.items() if not targets
)


def coerce_status(value) -> Optional[ProductStatus]:
    """
    Convert a caller-supplied value to a ProductStatus.

    Args:
        value: ProductStatus member or integer code

    Returns:
        The matching ProductStatus, or None if the value is not a known status
    """
    if isinstance(value, ProductStatus):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return ProductStatus(value)
    except ValueError:
        return None


def is_valid_status(value) -> bool:
    """True if value is one of the six lifecycle statuses."""
    return coerce_status(value) is not None


def is_valid_transition(current, target) -> bool:
    """
    Check whether a product may move from current to target.

    Self-transitions are never valid and RECALLED has no successors.
    Unknown values on either side yield False.

    Args:
        current: Status the product is in now
        target: Requested status

    Returns:
        True if the transition is in the allowed table
    """
    current_status = coerce_status(current)
    target_status = coerce_status(target)
    if current_status is None or target_status is None:
        return False
    return target_status in VALID_TRANSITIONS[current_status]


def allowed_targets(current) -> FrozenSet[ProductStatus]:
    """Statuses reachable in one step from current (empty if unknown)."""
    current_status = coerce_status(current)
    if current_status is None:
        return frozenset()
    return VALID_TRANSITIONS[current_status]


def is_terminal(status) -> bool:
    """True if no transition leaves status."""
    return coerce_status(status) in TERMINAL_STATUSES
