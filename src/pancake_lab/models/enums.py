"""
Enumerations for pancake ordering.

This module contains enums used across the order models:
- Ingredient: The closed catalog of pancake ingredients
- OrderStatus: Lifecycle status of an order
"""

from enum import Enum
from typing import Iterable, Tuple

from ..exceptions import UnknownIngredientError, UnknownOrderStatusError
from ..utils.validators import sanitize_name


class Ingredient(str, Enum):
    """
    Pancake ingredient catalog.

    The value of each member is its display name, which is also the text used
    in pancake descriptions.

    Values:
        DARK_CHOCOLATE: "dark chocolate"
        MILK_CHOCOLATE: "milk chocolate"
        WHIPPED_CREAM: "whipped cream"
        HAZELNUTS: "hazelnuts"
    """

    DARK_CHOCOLATE = "dark chocolate"
    MILK_CHOCOLATE = "milk chocolate"
    WHIPPED_CREAM = "whipped cream"
    HAZELNUTS = "hazelnuts"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Ingredient":
        """
        Look up an ingredient by display name, ignoring case.

        Args:
            name: Display name such as "Dark Chocolate"

        Returns:
            The matching Ingredient

        Raises:
            UnknownIngredientError: If no ingredient has that name
        """
        key = sanitize_name(name)
        if key is not None:
            for ingredient in cls:
                if ingredient.value == key:
                    return ingredient
        raise UnknownIngredientError(name)

    @classmethod
    def resolve_all(cls, names: Iterable[str]) -> Tuple["Ingredient", ...]:
        """Resolve names in order; the first unknown name raises."""
        return tuple(cls.from_name(name) for name in names)

    @classmethod
    def display_names(cls) -> Tuple[str, ...]:
        return tuple(ingredient.value for ingredient in cls)


class OrderStatus(str, Enum):
    """
    Order lifecycle status.

    NEW -> COMPLETED -> PREPARING -> DELIVERED, with CANCELLED reachable from
    NEW and COMPLETED. Values equal the enumerator names, which is the text
    form handed to callers.
    """

    NEW = "NEW"
    COMPLETED = "COMPLETED"
    PREPARING = "PREPARING"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_active(self) -> bool:
        """True while the order is still in the shop."""
        return self in (OrderStatus.NEW, OrderStatus.COMPLETED, OrderStatus.PREPARING)

    @property
    def is_finished(self) -> bool:
        return not self.is_active

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        """
        Accept an OrderStatus or its name in any case.

        Raises:
            UnknownOrderStatusError: If the value names no status
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
        raise UnknownOrderStatusError(value)

    def __str__(self) -> str:
        return self.value
