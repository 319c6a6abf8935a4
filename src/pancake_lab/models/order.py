"""
Order model for delivery orders.

An Order is bound to a delivery location (building, room) and carries the
lifecycle status. Transitions follow:

    NEW --complete--> COMPLETED --prepare--> PREPARING --deliver--> DELIVERED
    NEW/COMPLETED --cancel--> CANCELLED

Every order owns a re-entrant lock. Transition methods take it themselves,
and the order service holds it across compound operations that also touch
its registries.
"""

import threading
import uuid
from typing import Optional

from ..exceptions import InvalidCoordinatesError, InvalidStateError
from ..utils.validators import validate_building, validate_room
from .enums import OrderStatus

_CANCELLABLE = (OrderStatus.NEW, OrderStatus.COMPLETED)


class Order:
    """
    A customer's order for a delivery location.

    Attributes:
        id: Unique order identifier (UUID4)
        building: Building number, 1-10
        room: Room number, 1-999
        status: Current OrderStatus; the only mutable attribute
        lock: Per-order re-entrant lock
    """

    __slots__ = ("_id", "_building", "_room", "_status", "_lock")

    def __init__(self, building: int, room: int, order_id: Optional[uuid.UUID] = None):
        """
        Create an order in NEW status.

        Args:
            building: Building number
            room: Room number
            order_id: Explicit id; a fresh UUID4 is assigned when omitted

        Raises:
            InvalidCoordinatesError: If building or room is out of range
        """
        for is_valid, error in (validate_building(building), validate_room(room)):
            if not is_valid:
                raise InvalidCoordinatesError(error)

        self._id = order_id if order_id is not None else uuid.uuid4()
        self._building = building
        self._room = room
        self._status = OrderStatus.NEW
        self._lock = threading.RLock()

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def building(self) -> int:
        return self._building

    @property
    def room(self) -> int:
        return self._room

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # =========================================================================
    # Transitions
    # =========================================================================

    def complete(self) -> None:
        """NEW -> COMPLETED."""
        self._transition(OrderStatus.NEW, OrderStatus.COMPLETED)

    def prepare(self) -> None:
        """COMPLETED -> PREPARING."""
        self._transition(OrderStatus.COMPLETED, OrderStatus.PREPARING)

    def deliver(self) -> None:
        """PREPARING -> DELIVERED."""
        self._transition(OrderStatus.PREPARING, OrderStatus.DELIVERED)

    def cancel(self) -> None:
        """
        NEW or COMPLETED -> CANCELLED.

        Raises:
            InvalidStateError: If the order is already preparing or finished
        """
        with self._lock:
            if self._status not in _CANCELLABLE:
                raise InvalidStateError(
                    "Can only cancel either NEW or COMPLETED orders",
                    order_id=self._id,
                    current_status=self._status,
                    required=_CANCELLABLE,
                )
            self._status = OrderStatus.CANCELLED

    def _transition(self, required: OrderStatus, target: OrderStatus) -> None:
        with self._lock:
            if self._status != required:
                raise InvalidStateError(
                    f"Order must be {required} (current: {self._status})",
                    order_id=self._id,
                    current_status=self._status,
                    required=required,
                )
            self._status = target

    def __eq__(self, other) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Order(id={self._id}, building={self._building}, "
            f"room={self._room}, status={self._status})"
        )


def create_order(building: int, room: int) -> Order:
    """Create a NEW order with a freshly assigned id."""
    return Order(building, room)
