"""
History Audit Service - re-check a product's ledger against its invariants.

Used by the CLI `verify` command and after imports or manual database
maintenance. Reports problems rather than raising, so one audit lists every
issue it finds.

Checks:
- product exists
- counter equals the number of entries
- sequence numbers run 1..N without gaps
- entry 1 records CREATED
- each consecutive pair of entries is an allowed transition
- the last entry's status matches the product's current status
"""

import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.orm import Session

from src.models import ProductStatus
from src.services.database import session_scope
from src.services.logging_utils import get_service_logger, log_operation
from src.services.product_query_service import (
    get_product,
    get_product_history,
    get_sequence_count,
)
from src.services.transition_validator import is_valid_transition


logger = get_service_logger(__name__)


@dataclass
class HistoryAuditResult:
    """Outcome of verify_history() for one product.

    Attributes:
        product_id: Audited product
        entry_count: Number of history entries found
        sequence_count: Stored counter value
        issues: Human-readable descriptions of every violation found
    """

    product_id: int
    entry_count: int = 0
    sequence_count: int = 0
    issues: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


def _verify_history_impl(product_id: int, session: Session) -> HistoryAuditResult:
    result = HistoryAuditResult(product_id=product_id)

    product = get_product(product_id, session=session)
    if product is None:
        result.issues.append(f"Product {product_id} not found")
        return result

    entries = get_product_history(product_id, session=session)
    result.entry_count = len(entries)
    result.sequence_count = get_sequence_count(product_id, session=session)

    if not entries:
        result.issues.append("No history entries recorded")
        return result

    if result.sequence_count != result.entry_count:
        result.issues.append(
            f"Sequence counter is {result.sequence_count} "
            f"but {result.entry_count} entries exist"
        )

    for expected, entry in enumerate(entries, start=1):
        if entry.sequence != expected:
            result.issues.append(f"Expected sequence {expected}, found {entry.sequence}")
            break

    if entries[0].status != ProductStatus.CREATED:
        result.issues.append(f"First entry records {entries[0].status.name}, not CREATED")

    for previous, entry in zip(entries, entries[1:]):
        if not is_valid_transition(previous.status, entry.status):
            result.issues.append(
                f"Entry {entry.sequence}: {previous.status.name} -> "
                f"{entry.status.name} is not an allowed transition"
            )

    if entries[-1].status != product.current_status:
        result.issues.append(
            f"Current status {product.current_status.name} does not match "
            f"last entry ({entries[-1].status.name})"
        )

    return result


def verify_history(product_id: int, session: Session = None) -> HistoryAuditResult:
    """
    Audit one product's history ledger.

    Transaction boundary: Read-only operation.

    Args:
        product_id: Product to audit
        session: Optional session for transaction sharing

    Returns:
        HistoryAuditResult; is_valid is True when no issue was found
    """
    if session is not None:
        result = _verify_history_impl(product_id, session)
    else:
        with session_scope() as session:
            result = _verify_history_impl(product_id, session)

    log_operation(
        logger,
        operation="verify_history",
        outcome="valid" if result.is_valid else "invalid",
        level=logging.INFO if result.is_valid else logging.WARNING,
        product_id=product_id,
        issue_count=len(result.issues),
    )
    return result
