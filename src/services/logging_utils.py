"""Service layer logging utilities.

Provides structured logging functions for ledger operations, so every
registration, status change and rejection is logged with the same shape.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="update_status",
        outcome="success",
        product_id=1,
        status="SHIPPED",
    )
"""

import logging
from typing import Any

from src.services.exceptions import LedgerError

LOGGER_PREFIX = "product_tracker.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger named '<prefix>.<module>'

    Example:
        >>> get_service_logger("src.services.ledger_service").name
        'product_tracker.services.ledger_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The context is passed via the 'extra' parameter for structured logging
    and rendered into the message so it shows up with plain formatters too.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "register_product")
        outcome: Outcome description (e.g., "success", "rejected")
        level: Log level (default: INFO)
        **context: Additional context fields (product_id, actor, error_code...)
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    details = ", ".join(f"{key}={value}" for key, value in context.items())
    message = f"{operation}: {outcome}"
    if details:
        message = f"{message} ({details})"
    logger.log(level, message, extra=extra)


def log_rejection(
    logger: logging.Logger,
    operation: str,
    error: LedgerError,
    **context: Any,
) -> None:
    """Log a rejected ledger operation at WARNING with its error code."""
    log_operation(
        logger,
        operation=operation,
        outcome="rejected",
        level=logging.WARNING,
        error=type(error).__name__,
        error_code=error.code,
        **context,
    )
