"""
Configuration management for the Pancake Lab ordering engine.

This module handles:
- Environment selection (development vs. production)
- Log level for the service loggers
- Retention of the in-memory order log
"""

import logging
import os
from typing import Optional

from .constants import (
    APP_NAME,
    APP_VERSION,
    ENV_VAR_ENVIRONMENT,
    ENV_VAR_LOG_CAPACITY,
    ENV_VAR_LOG_LEVEL,
    ENVIRONMENT_DEVELOPMENT,
    ENVIRONMENT_PRODUCTION,
    VALID_ENVIRONMENTS,
)


class Config:
    """
    Application configuration manager.

    Values come from the environment at construction time and are read-only
    afterwards.
    """

    def __init__(self, environment: str = ENVIRONMENT_PRODUCTION):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'

        Raises:
            ValueError: If the environment name is not recognised
        """
        if environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{environment}'; "
                f"expected one of {', '.join(VALID_ENVIRONMENTS)}"
            )
        self.environment = environment
        self._app_name = APP_NAME
        self._app_version = APP_VERSION
        self._log_level = self._read_log_level()
        self._log_capacity = self._read_log_capacity()

    def _read_log_level(self) -> int:
        default = logging.DEBUG if self.is_development else logging.WARNING
        raw = os.environ.get(ENV_VAR_LOG_LEVEL)
        if not raw:
            return default
        level = logging.getLevelName(raw.strip().upper())
        # getLevelName returns "Level X" for unknown names
        return level if isinstance(level, int) else default

    def _read_log_capacity(self) -> Optional[int]:
        """
        Read the maximum number of retained order log records.

        Returns:
            Positive capacity, or None for an unbounded log
        """
        raw = os.environ.get(ENV_VAR_LOG_CAPACITY)
        if not raw:
            return None
        try:
            capacity = int(raw)
        except ValueError:
            logging.getLogger(__name__).warning(
                f"Ignoring non-integer {ENV_VAR_LOG_CAPACITY}={raw!r}"
            )
            return None
        return capacity if capacity > 0 else None

    @property
    def app_name(self) -> str:
        """Application name."""
        return self._app_name

    @property
    def app_version(self) -> str:
        """Application version."""
        return self._app_version

    @property
    def log_level(self) -> int:
        """Level applied to the ``pancake_lab`` logger hierarchy."""
        return self._log_level

    @property
    def log_capacity(self) -> Optional[int]:
        """Maximum records kept by the in-memory order log (None = unbounded)."""
        return self._log_capacity

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == ENVIRONMENT_DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == ENVIRONMENT_PRODUCTION

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"Config(environment='{self.environment}', "
            f"log_level={logging.getLevelName(self._log_level)}, "
            f"log_capacity={self._log_capacity})"
        )


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    PANCAKE_LAB_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(ENV_VAR_ENVIRONMENT, ENVIRONMENT_PRODUCTION)
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger = logging.getLogger(__name__)
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None
