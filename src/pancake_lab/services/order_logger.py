"""
Order log sink.

The order service reports every visible effect to an OrderLogger. The
default InMemoryOrderLogger keeps timestamped records in memory, newest
last, and mirrors each one to the stdlib ``pancake_lab`` loggers.

Record format:
    [2026-10-18T09:30:00.123456+00:00] [ADD] Delicious pancake with hazelnuts! to order 6f1c...
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from collections import deque
from typing import Optional, Tuple

from ..models import Order, Pancake
from ..utils.config import get_config
from ..utils.datetime_utils import utc_timestamp
from .logging_utils import configure_logging, get_service_logger


class OrderLogger(ABC):
    """Write-only sink for order events, plus read access to the latest record."""

    @abstractmethod
    def log_order_created(self, order: Order) -> None:
        ...

    @abstractmethod
    def log_pancake_added(self, order_id: uuid.UUID, pancake: Pancake) -> None:
        ...

    @abstractmethod
    def log_pancake_removed(self, order_id: uuid.UUID, pancake: Pancake) -> None:
        ...

    @abstractmethod
    def log_order_status_change(self, order: Order, action: str) -> None:
        ...

    @abstractmethod
    def log_order_delivered(self, order: Order) -> None:
        ...

    @abstractmethod
    def log_invalid_transition(self, order: Order, action: str) -> None:
        ...

    @abstractmethod
    def get_last_log(self) -> Optional[str]:
        ...

    @abstractmethod
    def clear_logs(self) -> None:
        ...


class InMemoryOrderLogger(OrderLogger):
    """
    Thread-safe in-memory OrderLogger.

    Use ``InMemoryOrderLogger.get_instance()`` for the process-wide logger;
    construct directly for an isolated one (tests, multiple services).

    Attributes:
        capacity: Maximum retained records, oldest dropped first (None = unbounded)
    """

    _instance: Optional["InMemoryOrderLogger"] = None
    _instance_lock = threading.Lock()

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity
        self._records = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._logger = get_service_logger("order_log")

    @classmethod
    def get_instance(cls) -> "InMemoryOrderLogger":
        """
        Return the process-wide logger, creating it on first use.

        The buffer capacity is read from ``get_config().log_capacity``, and the
        configured log level is applied to the ``pancake_lab`` loggers.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    configure_logging()
                    cls._instance = cls(capacity=get_config().log_capacity)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """
        Drop the process-wide logger.

        Useful for testing.
        """
        with cls._instance_lock:
            cls._instance = None

    # =========================================================================
    # Events
    # =========================================================================

    def log_order_created(self, order: Order) -> None:
        self._log(
            "CREATE", f"Order {order.id} for building {order.building} room {order.room}"
        )

    def log_pancake_added(self, order_id: uuid.UUID, pancake: Pancake) -> None:
        self._log("ADD", f"{pancake.description} to order {order_id}")

    def log_pancake_removed(self, order_id: uuid.UUID, pancake: Pancake) -> None:
        self._log("REMOVE", f"{pancake.description} from order {order_id}")

    def log_order_status_change(self, order: Order, action: str) -> None:
        self._log("STATUS", f"Order {order.id} {action} -> {order.status}")

    def log_order_delivered(self, order: Order) -> None:
        self._log("DELIVER", f"Order {order.id}")

    def log_invalid_transition(self, order: Order, action: str) -> None:
        self._log(
            "ERROR",
            f"Invalid {action} for order {order.id} (current: {order.status})",
            level=logging.WARNING,
        )

    # =========================================================================
    # Reading
    # =========================================================================

    def get_last_log(self) -> Optional[str]:
        """Most recent record, or None when the log is empty."""
        with self._lock:
            return self._records[-1] if self._records else None

    def get_logs(self) -> Tuple[str, ...]:
        """All retained records, oldest first."""
        with self._lock:
            return tuple(self._records)

    def clear_logs(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _log(self, event: str, message: str, level: int = logging.DEBUG) -> None:
        record = f"[{utc_timestamp()}] [{event}] {message}"
        with self._lock:
            self._records.append(record)
        self._logger.log(level, record, extra={"order_event": event})
