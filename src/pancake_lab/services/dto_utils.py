"""DTO utilities for the order service.

Conversion functions from live entities to snapshot DTOs. Callers are
expected to hold the order's lock while converting, so the snapshot is
consistent.
"""

from typing import Iterable, Tuple

from ..models import Order, Pancake
from .dto import OrderDTO, PancakeDTO


def to_pancake_dto(pancake: Pancake) -> PancakeDTO:
    """
    Convert a pancake into its DTO.

    Examples:
        >>> to_pancake_dto(pancake).ingredients
        ('milk chocolate', 'hazelnuts')
    """
    return PancakeDTO(
        order_id=pancake.order_id,
        pancake_id=pancake.pancake_id,
        ingredients=pancake.ingredient_names,
        description=pancake.description,
    )


def to_pancake_dtos(pancakes: Iterable[Pancake]) -> Tuple[PancakeDTO, ...]:
    return tuple(to_pancake_dto(pancake) for pancake in pancakes)


def to_order_dto(order: Order, pancakes: Iterable[Pancake] = ()) -> OrderDTO:
    """
    Convert an order and its pancakes into an OrderDTO.

    Args:
        order: The order
        pancakes: Pancakes to include (default: none)

    Returns:
        OrderDTO with the status rendered as its enumerator name
    """
    return OrderDTO(
        id=order.id,
        building=order.building,
        room=order.room,
        status=order.status.name,
        pancakes=to_pancake_dtos(pancakes),
    )
