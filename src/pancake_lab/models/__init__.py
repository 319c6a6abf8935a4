"""
Domain models package.

This package contains the order and pancake entities and their enums.
"""

from .enums import Ingredient, OrderStatus
from .order import Order, create_order
from .pancake import Pancake, PancakeBuilder, create_pancake, describe, matches_ingredients

__all__ = [
    "Ingredient",
    "OrderStatus",
    "Order",
    "create_order",
    "Pancake",
    "PancakeBuilder",
    "create_pancake",
    "describe",
    "matches_ingredients",
]
