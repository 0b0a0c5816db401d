"""Services package - Business logic layer for the Product Lifecycle Tracker.

Architecture:
- Services: Stateless functions organized by concern
- Transactions: Managed via session_scope() context manager
- Exceptions: Consistent error handling via ServiceError hierarchy
- Validation: Input and transition validation before any write

Service Modules:
- transition_validator: Allowed status transitions (pure)
- ledger_service: Product registration and status updates
- product_query_service: Read-only lookups
- history_audit_service: Ledger invariant checks

Infrastructure:
- database: Session management and database utilities
- id_allocator: Product ID allocation
- exceptions: Custom exception classes for service layer errors
- logging_utils: Structured operation logging
"""

# Service modules
from . import (
    database,
    transition_validator,
    ledger_service,
    product_query_service,
    history_audit_service,
)

__all__ = [
    "database",
    "transition_validator",
    "ledger_service",
    "product_query_service",
    "history_audit_service",
]
