"""Shared pytest fixtures for cupcake tests."""

import pytest

from cupcake.catalog import DEFAULT_CATALOG
from cupcake.config import Settings
from cupcake.models import Catalog
from cupcake.navigation import NavigationController
from cupcake.order import OrderController
from cupcake.session import OrderSession


@pytest.fixture
def catalog() -> Catalog:
    """The built-in bakery catalog."""
    return DEFAULT_CATALOG


@pytest.fixture
def order(catalog: Catalog) -> OrderController:
    """A fresh order controller with strict topping validation."""
    return OrderController(catalog)


@pytest.fixture
def navigation(order: OrderController) -> NavigationController:
    """A navigation controller wired to the `order` fixture."""
    return NavigationController(order)


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def session(settings: Settings) -> OrderSession:
    """A session built from default settings."""
    return OrderSession(settings)
