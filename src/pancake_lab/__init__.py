"""Pancake Lab - in-memory pancake ordering engine.

Customers open an order for a delivery location, compose it from pancakes,
and the kitchen moves it through NEW -> COMPLETED -> PREPARING -> DELIVERED.
The public entry point is :class:`pancake_lab.services.OrderService`.
"""

from .utils.constants import APP_VERSION as __version__

__all__ = ["__version__"]
