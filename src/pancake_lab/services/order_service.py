"""Order Service - in-memory pancake order management.

Owns the order registries and serialises all mutations per order:

- ``_active_orders``: orders in NEW, COMPLETED or PREPARING
- ``_order_pancakes``: pancake list per active order, in insertion order
- ``_finished_orders``: orders in DELIVERED or CANCELLED

Lock discipline:
- Every read-modify-write on an order (status or pancake list) runs under
  that order's own lock, including the state precondition check.
- ``_registry_lock`` guards structural changes to the three dicts and is
  always acquired after an order lock, never before one.

Orders never contend with each other; only calls on the same order block.
"""

import logging
import threading
import uuid
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from ..exceptions import (
    ContractError,
    DomainArgumentError,
    InvalidQuantityError,
    InvalidStateError,
    OrderNotFoundError,
    PancakeNotFoundError,
)
from ..models import Ingredient, Order, OrderStatus, Pancake, create_pancake, matches_ingredients
from ..models.order import create_order as new_order
from ..utils.validators import validate_quantity
from .dto import OrderDTO, PancakeDTO
from .dto_utils import to_order_dto, to_pancake_dtos
from .logging_utils import get_service_logger, log_operation
from .order_logger import InMemoryOrderLogger, OrderLogger

logger = get_service_logger(__name__)


class OrderService:
    """
    Service for pancake orders.

    Any method may be called from any thread. Each instance has its own
    registries; the order log defaults to the process-wide
    ``InMemoryOrderLogger``.
    """

    def __init__(self, order_logger: Optional[OrderLogger] = None):
        """
        Initialize the service.

        Args:
            order_logger: Sink for order events (default: process-wide in-memory log)

        Raises:
            ContractError: If order_logger is not an OrderLogger
        """
        if order_logger is None:
            order_logger = InMemoryOrderLogger.get_instance()
        if not isinstance(order_logger, OrderLogger):
            raise ContractError("Logger must implement OrderLogger")
        self._order_logger = order_logger
        self._active_orders: Dict[uuid.UUID, Order] = {}
        self._order_pancakes: Dict[uuid.UUID, List[Pancake]] = {}
        self._finished_orders: Dict[uuid.UUID, Order] = {}
        self._registry_lock = threading.Lock()

    @property
    def order_logger(self) -> OrderLogger:
        return self._order_logger

    # =========================================================================
    # Order entry
    # =========================================================================

    def create_order(self, building: int, room: int) -> OrderDTO:
        """
        Create a NEW order for a delivery location.

        Args:
            building: Building number (1-10)
            room: Room number (1-999)

        Returns:
            OrderDTO with status "NEW" and no pancakes

        Raises:
            InvalidCoordinatesError: If building or room is out of range
        """
        try:
            order = new_order(building, room)
        except DomainArgumentError as e:
            log_operation(
                logger, "create_order", "validation_failed", building=building, room=room, error=str(e)
            )
            raise

        with order.lock:
            with self._registry_lock:
                self._active_orders[order.id] = order
                self._order_pancakes[order.id] = []
            self._order_logger.log_order_created(order)
            return to_order_dto(order)

    # =========================================================================
    # Pancake composition
    # =========================================================================

    def add_pancakes(self, order_id: uuid.UUID, ingredient_names: Iterable[str], quantity: int) -> None:
        """
        Add ``quantity`` identical pancakes to a NEW order.

        Checks run in this order: quantity, order existence, order status,
        ingredient names.

        Args:
            order_id: Order to add to
            ingredient_names: Ingredient display names; order is kept and
                repeats are collapsed
            quantity: Number of pancakes, at least 1

        Raises:
            InvalidQuantityError: If quantity < 1
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is not NEW
            UnknownIngredientError: For the first unknown ingredient name
            DomainArgumentError: If no ingredient names were given
        """
        is_valid, error = validate_quantity(quantity)
        if not is_valid:
            log_operation(logger, "add_pancakes", "validation_failed", order_id=order_id, quantity=quantity)
            raise InvalidQuantityError(quantity, error)

        order = self._get_order(order_id, "add_pancakes")
        with order.lock:
            self._require_status(order, OrderStatus.NEW, "add_pancakes")
            ingredients = self._resolve_ingredients(ingredient_names)
            new_pancakes = [create_pancake(order.id, ingredients) for _ in range(quantity)]
            pancakes = self._order_pancakes[order.id]
            for pancake in new_pancakes:
                pancakes.append(pancake)
                self._order_logger.log_pancake_added(order.id, pancake)

    def remove_pancake(
        self, order_id: uuid.UUID, target: Union[uuid.UUID, Iterable[str]]
    ) -> None:
        """
        Remove one pancake, either by pancake id or by ingredient names.

        Args:
            order_id: Order to remove from
            target: A pancake UUID, or an iterable of ingredient names

        See ``remove_pancake_by_id`` and ``remove_pancake_by_ingredients``.
        """
        if isinstance(target, uuid.UUID):
            self.remove_pancake_by_id(order_id, target)
        else:
            self.remove_pancake_by_ingredients(order_id, target)

    def remove_pancake_by_ingredients(self, order_id: uuid.UUID, ingredient_names: Iterable[str]) -> None:
        """
        Remove the earliest pancake whose ingredient set equals the given names.

        Name order and repeats do not matter.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is not NEW
            UnknownIngredientError: If a name is not in the catalog
            PancakeNotFoundError: If no pancake matches
        """
        names = self._as_name_list(ingredient_names)
        order = self._get_order(order_id, "remove_pancake")
        with order.lock:
            self._require_status(order, OrderStatus.NEW, "remove_pancake")
            ingredients = Ingredient.resolve_all(names)
            pancakes = self._order_pancakes[order.id]
            for index, pancake in enumerate(pancakes):
                if matches_ingredients(pancake, ingredients):
                    del pancakes[index]
                    self._order_logger.log_pancake_removed(order.id, pancake)
                    return

        log_operation(logger, "remove_pancake", "not_found", order_id=order_id, ingredients=names)
        raise PancakeNotFoundError(
            order_id, f"Pancake with ingredients {names} not found in order {order_id}"
        )

    def remove_pancake_by_id(self, order_id: uuid.UUID, pancake_id: uuid.UUID) -> None:
        """
        Remove the pancake with the given id.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is not NEW
            PancakeNotFoundError: If the order holds no such pancake
        """
        order = self._get_order(order_id, "remove_pancake")
        with order.lock:
            self._require_status(order, OrderStatus.NEW, "remove_pancake")
            pancakes = self._order_pancakes[order.id]
            for index, pancake in enumerate(pancakes):
                if pancake.pancake_id == pancake_id:
                    del pancakes[index]
                    self._order_logger.log_pancake_removed(order.id, pancake)
                    return

        log_operation(logger, "remove_pancake", "not_found", order_id=order_id, pancake_id=pancake_id)
        raise PancakeNotFoundError(
            order_id, f"Pancake with ID {pancake_id} not found in order {order_id}"
        )

    def remove_pancakes(self, description: str, order_id: uuid.UUID, quantity: int) -> None:
        """
        Remove the earliest ``quantity`` pancakes with exactly this description.

        Nothing is removed unless enough matching pancakes are present.

        Args:
            description: Full description, e.g. "Delicious pancake with hazelnuts!"
            order_id: Order to remove from
            quantity: Number of pancakes to remove, at least 1

        Raises:
            InvalidQuantityError: If quantity < 1
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is not NEW
            PancakeNotFoundError: If fewer than ``quantity`` pancakes match
        """
        is_valid, error = validate_quantity(quantity)
        if not is_valid:
            raise InvalidQuantityError(quantity, error)

        order = self._get_order(order_id, "remove_pancakes")
        with order.lock:
            self._require_status(order, OrderStatus.NEW, "remove_pancakes")
            pancakes = self._order_pancakes[order.id]
            matching = [i for i, p in enumerate(pancakes) if p.description == description][:quantity]
            if len(matching) < quantity:
                log_operation(
                    logger,
                    "remove_pancakes",
                    "not_found",
                    order_id=order_id,
                    requested=quantity,
                    available=len(matching),
                )
                raise PancakeNotFoundError(
                    order_id,
                    f"Cannot remove {quantity} pancakes of type {description}; "
                    f"only {len(matching)} available",
                )

            removed = [pancakes[i] for i in matching]
            drop = set(matching)
            pancakes[:] = [p for i, p in enumerate(pancakes) if i not in drop]
            for pancake in removed:
                self._order_logger.log_pancake_removed(order.id, pancake)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def complete_order(self, order_id: uuid.UUID) -> None:
        """
        Move an order from NEW to COMPLETED.

        The pancake check and the transition happen under the order lock, so
        a concurrent removal cannot leave a completed order empty.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order has no pancakes or is not NEW
        """
        order = self._get_order(order_id, "complete_order")
        with order.lock:
            if order.status is OrderStatus.NEW and not self._order_pancakes.get(order.id):
                log_operation(
                    logger, "complete_order", "invalid_state", level=logging.WARNING, order_id=order.id
                )
                raise InvalidStateError(
                    f"Cannot complete order {order.id} with no pancakes",
                    order_id=order.id,
                    current_status=order.status,
                    required=OrderStatus.NEW,
                )
            self._apply_transition(order, order.complete, "Completed")
            self._order_logger.log_order_status_change(order, "Completed")

    def prepare_order(self, order_id: uuid.UUID) -> None:
        """
        Move an order from COMPLETED to PREPARING.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is not COMPLETED
        """
        order = self._get_order(order_id, "prepare_order")
        with order.lock:
            self._apply_transition(order, order.prepare, "Preparing")
            self._order_logger.log_order_status_change(order, "Preparing")

    def deliver_order(self, order_id: uuid.UUID) -> OrderDTO:
        """
        Move an order from PREPARING to DELIVERED and archive it.

        Returns:
            OrderDTO with status "DELIVERED" and the delivered pancakes,
            captured under the order lock

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is not PREPARING
        """
        order = self._get_order(order_id, "deliver_order")
        with order.lock:
            self._apply_transition(order, order.deliver, "Delivered")
            pancakes = self._move_to_finished(order)
            self._order_logger.log_order_delivered(order)
            return to_order_dto(order, pancakes)

    def cancel_order(self, order_id: uuid.UUID) -> None:
        """
        Cancel a NEW or COMPLETED order; its pancakes are discarded.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidStateError: If the order is PREPARING or already finished
        """
        order = self._get_order(order_id, "cancel_order")
        with order.lock:
            self._apply_transition(order, order.cancel, "Cancelled")
            self._move_to_finished(order)
            self._order_logger.log_order_status_change(order, "Cancelled")

    def clear_all_finished_orders(self) -> None:
        """Forget all delivered and cancelled orders. Active orders are untouched."""
        with self._registry_lock:
            count = len(self._finished_orders)
            self._finished_orders.clear()
        log_operation(logger, "clear_all_finished_orders", "success", level=logging.DEBUG, cleared=count)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_order_status(self, order_id: uuid.UUID) -> OrderDTO:
        """
        Snapshot an active or finished order.

        Returns:
            OrderDTO; pancakes are empty for finished orders

        Raises:
            OrderNotFoundError: If the order is in neither registry
        """
        order = self._get_order(order_id, "get_order_status")
        with order.lock:
            return to_order_dto(order, self._order_pancakes.get(order.id, ()))

    def get_pancake_descriptions(self, order_id: uuid.UUID) -> List[PancakeDTO]:
        """
        Snapshot the pancakes of an active order.

        Unknown and finished orders yield an empty list rather than an error.
        """
        order = self._find_active_order(order_id)
        if order is None:
            return []
        with order.lock:
            return list(to_pancake_dtos(self._order_pancakes.get(order.id, ())))

    def view_order(self, order_id: uuid.UUID) -> List[str]:
        """
        Pancake descriptions of an active order, in insertion order.

        Unknown and finished orders yield an empty list.
        """
        order = self._find_active_order(order_id)
        if order is None:
            return []
        with order.lock:
            return [pancake.description for pancake in self._order_pancakes.get(order.id, ())]

    def list_orders_with_status(self, status: Union[OrderStatus, str]) -> Set[uuid.UUID]:
        """
        Ids of all known orders currently in ``status``.

        Args:
            status: An OrderStatus or its name, e.g. "DELIVERED"

        Raises:
            UnknownOrderStatusError: If the status name is not recognised
        """
        wanted = OrderStatus.parse(status)
        with self._registry_lock:
            orders = list(self._active_orders.values()) + list(self._finished_orders.values())
        return {order.id for order in orders if order.status is wanted}

    def count_finished_orders(self) -> int:
        with self._registry_lock:
            return len(self._finished_orders)

    # =========================================================================
    # Internal
    # =========================================================================

    def _get_order(self, order_id: uuid.UUID, operation: str) -> Order:
        """
        Look up an order in the active, then the finished registry.

        Raises:
            OrderNotFoundError: If the order is in neither
        """
        with self._registry_lock:
            order = self._active_orders.get(order_id)
            if order is None:
                order = self._finished_orders.get(order_id)
        if order is None:
            log_operation(logger, operation, "not_found", level=logging.DEBUG, order_id=order_id)
            raise OrderNotFoundError(order_id)
        return order

    def _find_active_order(self, order_id: uuid.UUID) -> Optional[Order]:
        with self._registry_lock:
            return self._active_orders.get(order_id)

    def _require_status(self, order: Order, required: OrderStatus, operation: str) -> None:
        """Raise InvalidStateError unless the order is in ``required``. Caller holds the lock."""
        if order.status is not required:
            log_operation(
                logger,
                operation,
                "invalid_state",
                level=logging.WARNING,
                order_id=order.id,
                current_status=order.status.name,
            )
            raise InvalidStateError(
                f"Order {order.id} must be {required} (current: {order.status})",
                order_id=order.id,
                current_status=order.status,
                required=required,
            )

    def _apply_transition(self, order: Order, action: Callable[[], None], action_name: str) -> None:
        """Run a transition; an invalid one is logged as ERROR and re-raised."""
        try:
            action()
        except InvalidStateError:
            self._order_logger.log_invalid_transition(order, action_name)
            log_operation(
                logger,
                action_name.lower(),
                "invalid_transition",
                level=logging.WARNING,
                order_id=order.id,
                current_status=order.status.name,
            )
            raise

    def _move_to_finished(self, order: Order) -> List[Pancake]:
        """Move an order to the finished registry and return its dropped pancakes."""
        with self._registry_lock:
            pancakes = self._order_pancakes.pop(order.id, [])
            self._active_orders.pop(order.id, None)
            self._finished_orders[order.id] = order
        return pancakes

    @staticmethod
    def _as_name_list(ingredient_names: Iterable[str]) -> List[str]:
        if isinstance(ingredient_names, str):
            return [ingredient_names]
        return list(ingredient_names)

    def _resolve_ingredients(self, ingredient_names: Iterable[str]):
        names = self._as_name_list(ingredient_names)
        if not names:
            raise DomainArgumentError("At least one ingredient is required")
        return Ingredient.resolve_all(names)
