"""Service layer exception classes for the Product Lifecycle Tracker.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    ├── DatabaseError
    ├── HistoryImmutableError
    └── LedgerError (carries a stable numeric code)
        ├── UnauthorizedError
        ├── ProductNotFound
        ├── InvalidStatusError
        ├── EmptyNameError
        └── InvalidStatusTransitionError

Ledger errors are always raised before any write, so a caller that sees one
can retry safely.
"""


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class ValidationError(ServiceError):
    """Raised when data validation fails."""

    def __init__(self, errors: list):
        self.errors = errors
        error_msg = "; ".join(errors)
        super().__init__(f"Validation failed: {error_msg}")


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class HistoryImmutableError(ServiceError):
    """Raised when something tries to modify or delete a written history entry."""

    def __init__(self, product_id: int, sequence: int):
        self.product_id = product_id
        self.sequence = sequence
        super().__init__(
            f"History entry {sequence} of product {product_id} is immutable"
        )


class LedgerError(ServiceError):
    """Base class for rejected ledger operations.

    Subclasses set ``code``, a stable numeric identifier for the kind of
    rejection (shown by the CLI and written to the logs).
    """

    code = 0


class UnauthorizedError(LedgerError):
    """Raised when a party other than the manufacturer updates a product.

    Example:
        >>> raise UnauthorizedError(1, "wallet_1")
        UnauthorizedError: Party 'wallet_1' is not allowed to update product 1
    """

    code = 100

    def __init__(self, product_id: int, party: str):
        self.product_id = product_id
        self.party = party
        super().__init__(f"Party '{party}' is not allowed to update product {product_id}")


class ProductNotFound(LedgerError):
    """Raised when product cannot be found by ID.

    Example:
        >>> raise ProductNotFound(999)
        ProductNotFound: Product with ID 999 not found
    """

    code = 101

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class InvalidStatusError(LedgerError):
    """Raised when a status value is not one of the known lifecycle stages."""

    code = 102

    def __init__(self, status):
        self.status = status
        super().__init__(f"Invalid status: {status!r}")


class EmptyNameError(LedgerError):
    """Raised when registering a product with an empty name."""

    code = 105

    def __init__(self):
        super().__init__("Product name must not be empty")


class InvalidStatusTransitionError(LedgerError):
    """Raised when a status transition is not allowed."""

    code = 106

    def __init__(self, product_id: int, current, target):
        self.product_id = product_id
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot transition product {product_id} from {current.name} to {target.name}"
        )
