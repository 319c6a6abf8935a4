"""Exception classes for Pancake Lab.

This module defines all custom exceptions raised by the order entities and
the order service, so callers can handle failures by kind.

Exception Hierarchy:
    ServiceError (base)
    ├── DomainArgumentError (also a ValueError)
    │   ├── InvalidCoordinatesError
    │   ├── InvalidQuantityError
    │   ├── UnknownIngredientError
    │   ├── UnknownOrderStatusError
    │   ├── OrderNotFoundError
    │   └── PancakeNotFoundError
    ├── InvalidStateError
    └── ContractError
"""

from typing import Optional


class ServiceError(Exception):
    """Base exception for all Pancake Lab errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class DomainArgumentError(ServiceError, ValueError):
    """Raised when an input is invalid independent of any order's state."""

    pass


class InvalidCoordinatesError(DomainArgumentError):
    """Raised when a building or room number is out of range.

    Example:
        >>> raise InvalidCoordinatesError("Building must be between 1 and 10")
        InvalidCoordinatesError: Building must be between 1 and 10
    """

    pass


class InvalidQuantityError(DomainArgumentError):
    """Raised when a pancake quantity is below one."""

    def __init__(self, quantity, message: str = "Quantity must be positive"):
        self.quantity = quantity
        super().__init__(message)


class UnknownIngredientError(DomainArgumentError):
    """Raised when an ingredient name is not in the catalog.

    Args:
        name: The name that failed to resolve

    Example:
        >>> raise UnknownIngredientError("maple syrup")
        UnknownIngredientError: Unknown ingredient: maple syrup
    """

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown ingredient: {name}")


class UnknownOrderStatusError(DomainArgumentError):
    """Raised when a status name does not match any OrderStatus."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown order status: {value}")


class OrderNotFoundError(DomainArgumentError):
    """Raised when an order id is in neither the active nor the finished registry.

    Args:
        order_id: The order id that was not found

    Example:
        >>> raise OrderNotFoundError(order_id)
        OrderNotFoundError: Order 6f1c... not found
    """

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class PancakeNotFoundError(DomainArgumentError):
    """Raised when a removal target is not present in an order."""

    def __init__(self, order_id, message: str):
        self.order_id = order_id
        super().__init__(message)


class InvalidStateError(ServiceError):
    """Raised when an order's current status does not allow an operation.

    Args:
        message: Human-readable explanation
        order_id: The order concerned, when known
        current_status: The status the order was in
        required: The status (or statuses) the operation needs
    """

    def __init__(
        self,
        message: str,
        order_id=None,
        current_status=None,
        required: Optional[object] = None,
    ):
        self.order_id = order_id
        self.current_status = current_status
        self.required = required
        super().__init__(message)


class ContractError(ServiceError):
    """Raised on internal misuse, such as reusing a pancake builder.

    Never expected from correct callers.
    """

    pass
