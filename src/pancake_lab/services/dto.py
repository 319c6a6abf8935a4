"""Data Transfer Objects for the order service.

DTOs are frozen snapshots. Sequence members are copied into tuples on
construction, so nothing the service does afterwards is visible through a
DTO a caller already holds.
"""

import uuid
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PancakeDTO:
    """Snapshot of one pancake.

    Attributes:
        order_id: Id of the owning order
        pancake_id: Pancake id
        ingredients: Ingredient display names in insertion order
        description: "Delicious pancake with ...!" text
    """

    order_id: uuid.UUID
    pancake_id: uuid.UUID
    ingredients: Tuple[str, ...]
    description: str

    def __post_init__(self) -> None:
        if self.ingredients is None:
            raise ValueError("Ingredients cannot be None")
        object.__setattr__(self, "ingredients", tuple(self.ingredients))


@dataclass(frozen=True)
class OrderDTO:
    """Snapshot of an order.

    Attributes:
        id: Order id
        building: Building number
        room: Room number
        status: Status enumerator name, e.g. "NEW"
        pancakes: Pancakes in insertion order (empty for finished orders,
            except the snapshot returned by delivery)

    Examples:
        >>> dto = OrderDTO(id=order_id, building=10, room=20, status="NEW", pancakes=[])
        >>> dto.pancakes
        ()
    """

    id: uuid.UUID
    building: int
    room: int
    status: str
    pancakes: Tuple[PancakeDTO, ...] = ()

    def __post_init__(self) -> None:
        """Validate required fields and freeze the pancake sequence."""
        if self.id is None:
            raise ValueError("Order ID cannot be None")
        if self.status is None:
            raise ValueError("Status cannot be None")
        if self.pancakes is None:
            raise ValueError("Pancakes cannot be None")
        object.__setattr__(self, "pancakes", tuple(self.pancakes))

    @property
    def descriptions(self) -> Tuple[str, ...]:
        return tuple(pancake.description for pancake in self.pancakes)
