"""
Product status enum for lifecycle tracking.

This enum defines the six stages a physical product moves through, from
registration to delivery. RECALLED can be entered from any stage and is
terminal.

Status transitions:
    CREATED -> IN_PRODUCTION
    IN_PRODUCTION -> QUALITY_CHECK
    QUALITY_CHECK -> SHIPPED, or back to IN_PRODUCTION for rework
    SHIPPED -> DELIVERED
    any non-recalled status -> RECALLED

The numeric values are part of the public interface (CLI input, exports)
and must not be renumbered.
"""

import enum
from typing import Dict


class ProductStatus(enum.IntEnum):
    """Lifecycle stage of a tracked product."""

    CREATED = 1
    IN_PRODUCTION = 2
    QUALITY_CHECK = 3
    SHIPPED = 4
    DELIVERED = 5
    RECALLED = 6


STATUS_NAMES: Dict[ProductStatus, str] = {
    ProductStatus.CREATED: "Created",
    ProductStatus.IN_PRODUCTION: "In Production",
    ProductStatus.QUALITY_CHECK: "Quality Check",
    ProductStatus.SHIPPED: "Shipped",
    ProductStatus.DELIVERED: "Delivered",
    ProductStatus.RECALLED: "Recalled",
}

UNKNOWN_STATUS_NAME = "Unknown"


def get_status_name(status) -> str:
    """
    Human-readable name for a status value.

    Args:
        status: ProductStatus member or raw integer code

    Returns:
        Display name, or "Unknown" for values outside the enumeration
        (including bools and non-integer numbers)
    """
    if isinstance(status, bool) or not isinstance(status, int):
        return UNKNOWN_STATUS_NAME
    try:
        return STATUS_NAMES[ProductStatus(status)]
    except (ValueError, TypeError):
        return UNKNOWN_STATUS_NAME
