"""
Pancake model.

A Pancake is an immutable value owned by one order. Pancakes are assembled
with a PancakeBuilder that is created for each build, so no construction
state is shared between threads.

Description format:
    "Delicious pancake with dark chocolate, hazelnuts!"
"""

import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from ..exceptions import ContractError
from ..utils.constants import DESCRIPTION_PREFIX, DESCRIPTION_SUFFIX, INGREDIENT_SEPARATOR
from ..utils.validators import sanitize_name
from .enums import Ingredient


def describe(ingredients: Iterable[Ingredient]) -> str:
    """Build the description text for ingredients in the given order."""
    names = INGREDIENT_SEPARATOR.join(ingredient.display_name for ingredient in ingredients)
    return f"{DESCRIPTION_PREFIX}{names}{DESCRIPTION_SUFFIX}"


@dataclass(frozen=True)
class Pancake:
    """
    A single pancake in an order.

    Attributes:
        order_id: Id of the owning order
        pancake_id: Unique pancake id
        ingredients: Distinct ingredients in insertion order
    """

    order_id: uuid.UUID
    pancake_id: uuid.UUID
    ingredients: Tuple[Ingredient, ...]
    _description: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.order_id is None:
            raise ContractError("Order ID cannot be None")
        if not self.ingredients:
            raise ContractError("Pancake must have at least one ingredient")
        ingredients = tuple(dict.fromkeys(self.ingredients))
        if None in ingredients:
            raise ContractError("Ingredient cannot be None")
        object.__setattr__(self, "ingredients", ingredients)
        object.__setattr__(self, "_description", describe(ingredients))

    @property
    def description(self) -> str:
        return self._description

    @property
    def ingredient_names(self) -> Tuple[str, ...]:
        return tuple(ingredient.display_name for ingredient in self.ingredients)


class PancakeBuilder:
    """
    One-shot builder for a Pancake.

    Example:
        >>> pancake = (
        ...     PancakeBuilder()
        ...     .with_order_id(order_id)
        ...     .add_ingredient(Ingredient.DARK_CHOCOLATE)
        ...     .build()
        ... )
    """

    def __init__(self):
        self._order_id: Optional[uuid.UUID] = None
        self._ingredients: List[Ingredient] = []
        self._built = False

    def with_order_id(self, order_id: uuid.UUID) -> "PancakeBuilder":
        """
        Bind the owning order.

        Raises:
            ContractError: If the order id is None or was already set, or the
                pancake has already been built
        """
        if self._built:
            raise ContractError("Pancake has already been built")
        if order_id is None:
            raise ContractError("Order ID cannot be None")
        if self._order_id is not None:
            raise ContractError(
                f"orderId has already been set to {self._order_id}; "
                f"cannot set it again to {order_id}"
            )
        self._order_id = order_id
        return self

    def add_ingredient(self, ingredient: Ingredient) -> "PancakeBuilder":
        """Add an ingredient; repeats are ignored so the set stays ordered."""
        if self._built:
            raise ContractError("Pancake has already been built")
        if ingredient is None:
            raise ContractError("Ingredient cannot be None")
        if ingredient not in self._ingredients:
            self._ingredients.append(ingredient)
        return self

    def build(self) -> Pancake:
        """
        Build the pancake.

        Raises:
            ContractError: If the builder was used before, has no order id,
                or has no ingredients
        """
        if self._built:
            raise ContractError("Pancake has already been built")
        if self._order_id is None:
            raise ContractError("Order ID cannot be None")
        if not self._ingredients:
            raise ContractError("Pancake must have at least one ingredient")
        self._built = True
        return Pancake(
            order_id=self._order_id,
            pancake_id=uuid.uuid4(),
            ingredients=tuple(self._ingredients),
        )


def create_pancake(order_id: uuid.UUID, ingredients: Iterable[Ingredient]) -> Pancake:
    """Build one pancake for an order with a fresh builder."""
    builder = PancakeBuilder().with_order_id(order_id)
    for ingredient in ingredients:
        builder.add_ingredient(ingredient)
    return builder.build()


def matches_ingredients(pancake: Pancake, names: Iterable[Union[Ingredient, str]]) -> bool:
    """
    True if the pancake's ingredients are exactly the given names.

    Ingredients and plain display names are both accepted. Order, repeats,
    case and surrounding whitespace are ignored.
    """
    wanted = {sanitize_name(_display_name(name)) for name in names}
    return {sanitize_name(name) for name in pancake.ingredient_names} == wanted


def _display_name(name: Union[Ingredient, str]) -> str:
    if isinstance(name, Ingredient):
        return name.display_name
    return name
