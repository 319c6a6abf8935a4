"""Services package - order management for Pancake Lab.

Architecture:
- OrderService: Stateful, thread-safe engine owning the order registries
- DTOs: Frozen snapshots returned to callers
- Order log: Pluggable OrderLogger sink (in-memory singleton by default)
- Logging: Structured stdlib logging via logging_utils

Service Modules:
- order_service: Order entry, pancake composition, lifecycle, queries
- order_logger: OrderLogger interface and InMemoryOrderLogger
- dto / dto_utils: Snapshot types and conversion helpers
- logging_utils: Service logger helpers
"""

from .dto import OrderDTO, PancakeDTO
from .order_logger import InMemoryOrderLogger, OrderLogger
from .order_service import OrderService

__all__ = [
    "OrderDTO",
    "PancakeDTO",
    "OrderLogger",
    "InMemoryOrderLogger",
    "OrderService",
]
