"""
Input validation functions for the Pancake Lab ordering engine.

Validators return ``(is_valid, error_message)`` tuples and never raise; the
caller decides which exception to turn a failure into. This module provides:
- Integer range validation (delivery coordinates)
- Quantity validation
- Ingredient name sanitizing
"""

from typing import Any, Optional, Tuple

from .constants import (
    ERROR_BUILDING_RANGE,
    ERROR_QUANTITY_POSITIVE,
    ERROR_ROOM_RANGE,
    MAX_BUILDING,
    MAX_ROOM,
    MIN_BUILDING,
    MIN_QUANTITY,
    MIN_ROOM,
)


def is_integer(value: Any) -> bool:
    """Return True for real ints (``bool`` is excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


def validate_int_range(
    value: Any, min_value: int, max_value: int, error_message: str
) -> Tuple[bool, str]:
    """
    Validate that a value is an integer within ``[min_value, max_value]``.

    Args:
        value: The value to validate
        min_value: Smallest accepted value (inclusive)
        max_value: Largest accepted value (inclusive)
        error_message: Message returned when validation fails

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not is_integer(value):
        return False, error_message
    if value < min_value or value > max_value:
        return False, error_message
    return True, ""


def validate_building(building: Any) -> Tuple[bool, str]:
    """Validate a building number."""
    return validate_int_range(building, MIN_BUILDING, MAX_BUILDING, ERROR_BUILDING_RANGE)


def validate_room(room: Any) -> Tuple[bool, str]:
    """Validate a room number."""
    return validate_int_range(room, MIN_ROOM, MAX_ROOM, ERROR_ROOM_RANGE)


def validate_quantity(quantity: Any) -> Tuple[bool, str]:
    """
    Validate a pancake quantity.

    Returns:
        Tuple of (is_valid, error_message); the message is
        "Quantity must be positive" for anything below one.
    """
    if not is_integer(quantity) or quantity < MIN_QUANTITY:
        return False, ERROR_QUANTITY_POSITIVE
    return True, ""


def sanitize_name(value: Optional[str]) -> Optional[str]:
    """
    Normalize a lookup name: strip whitespace and lowercase.

    Args:
        value: Raw name

    Returns:
        Normalized name, or None if the input was not a string
    """
    if not isinstance(value, str):
        return None
    return value.strip().lower()
