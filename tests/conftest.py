"""Pytest configuration and fixtures for Pancake Lab tests."""

import logging

import pytest

from pancake_lab.services import InMemoryOrderLogger, OrderService
from pancake_lab.utils.config import reset_config


@pytest.fixture(autouse=True)
def clean_singletons():
    """Give every test a fresh config, process-wide order log and log level."""
    package_logger = logging.getLogger("pancake_lab")
    level = package_logger.level
    reset_config()
    InMemoryOrderLogger.reset_instance()
    yield
    reset_config()
    InMemoryOrderLogger.reset_instance()
    package_logger.setLevel(level)


@pytest.fixture
def order_log():
    """Provide an isolated in-memory order log."""
    return InMemoryOrderLogger()


@pytest.fixture
def service(order_log):
    """Provide an OrderService wired to the isolated order log."""
    return OrderService(order_log)


@pytest.fixture
def new_order(service):
    """Provide a NEW order with no pancakes."""
    return service.create_order(3, 15)
