"""
Constants for the Pancake Lab ordering engine.

This module defines all system-wide constants including:
- Application metadata
- Delivery coordinate ranges
- Pancake description format
- Environment variable names read by the configuration layer
"""

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Pancake Lab"
APP_VERSION = "0.1.0"

# ============================================================================
# Delivery Coordinates
# ============================================================================

MIN_BUILDING = 1
MAX_BUILDING = 10

MIN_ROOM = 1
MAX_ROOM = 999

# ============================================================================
# Pancakes
# ============================================================================

MIN_QUANTITY = 1

DESCRIPTION_PREFIX = "Delicious pancake with "
DESCRIPTION_SUFFIX = "!"
INGREDIENT_SEPARATOR = ", "

# ============================================================================
# Environment
# ============================================================================

ENV_VAR_ENVIRONMENT = "PANCAKE_LAB_ENV"
ENV_VAR_LOG_LEVEL = "PANCAKE_LAB_LOG_LEVEL"
ENV_VAR_LOG_CAPACITY = "PANCAKE_LAB_LOG_CAPACITY"

ENVIRONMENT_PRODUCTION = "production"
ENVIRONMENT_DEVELOPMENT = "development"
VALID_ENVIRONMENTS = (ENVIRONMENT_PRODUCTION, ENVIRONMENT_DEVELOPMENT)

# ============================================================================
# Error Messages
# ============================================================================

ERROR_BUILDING_RANGE = f"Building must be between {MIN_BUILDING} and {MAX_BUILDING}"
ERROR_ROOM_RANGE = f"Room must be between {MIN_ROOM} and {MAX_ROOM}"
ERROR_QUANTITY_POSITIVE = "Quantity must be positive"
