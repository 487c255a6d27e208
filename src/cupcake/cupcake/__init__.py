"""Cupcake order wizard: order state, pricing and screen navigation."""

from .enums import Screen
from .errors import CupcakeError, InvalidArgumentError, InvalidTransitionError, NotFoundError
from .models import (
    BUNDLE_FLAVOR_ID,
    Catalog,
    CatalogItem,
    NavigationState,
    OrderState,
    OrderSummary,
    QuantityOption,
)
from .navigation import NavigationController
from .order import OrderController
from .session import OrderSession

__all__ = [
    "BUNDLE_FLAVOR_ID",
    "Catalog",
    "CatalogItem",
    "CupcakeError",
    "InvalidArgumentError",
    "InvalidTransitionError",
    "NavigationController",
    "NavigationState",
    "NotFoundError",
    "OrderController",
    "OrderSession",
    "OrderState",
    "OrderSummary",
    "QuantityOption",
    "Screen",
]
