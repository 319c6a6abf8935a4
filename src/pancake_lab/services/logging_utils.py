"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across the order service.

Usage:
    from pancake_lab.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="add_pancakes",
        outcome="invalid_state",
        level=logging.WARNING,
        order_id=order_id,
        current_status="COMPLETED",
    )
"""

import logging
from typing import Any, Optional

from ..utils.config import get_config

LOGGER_ROOT = "pancake_lab"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance with the 'pancake_lab.services' prefix.

    Example:
        >>> logger = get_service_logger(__name__)
        >>> logger.name
        'pancake_lab.services.order_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_ROOT}.services.{name}")


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """
    Apply the configured level to the ``pancake_lab`` logger hierarchy.

    Handlers are left to the embedding application.

    Args:
        level: Explicit level; defaults to ``get_config().log_level``

    Returns:
        The package root logger
    """
    root = logging.getLogger(LOGGER_ROOT)
    root.setLevel(level if level is not None else get_config().log_level)
    return root


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "create_order", "cancel_order")
        outcome: Outcome description (e.g., "success", "not_found", "invalid_state")
        level: Log level (default: INFO). Use DEBUG for verbose/frequent logs.
        **context: Additional context fields (order_id, pancake_id, error, ...)

    Example:
        >>> log_operation(
        ...     logger,
        ...     operation="remove_pancakes",
        ...     outcome="not_found",
        ...     level=logging.WARNING,
        ...     order_id=order_id,
        ...     requested=3,
        ...     available=1,
        ... )
        # Logs: "remove_pancakes: not_found" with extra context
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
