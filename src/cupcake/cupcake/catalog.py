"""Built-in bakery catalog.

The tables below are loaded once at import time into DEFAULT_CATALOG.
Module-level lookups delegate to it so collaborators that never load a
custom catalog can simply call `get_flavor("vanilla")`.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from loguru import logger

from .models import BUNDLE_FLAVOR_ID, Catalog, CatalogItem, QuantityOption

FLAVORS: tuple[CatalogItem, ...] = (
    CatalogItem(
        item_id=BUNDLE_FLAVOR_ID,
        name="All Flavors Bundle",
        description="One of every flavor at a flat price",
        unit_price=Decimal("20.00"),
    ),
    CatalogItem(
        item_id="vanilla",
        name="Vanilla",
        description="Classic vanilla with a smooth, delicate crumb",
        unit_price=Decimal("15.20"),
    ),
    CatalogItem(
        item_id="chocolate",
        name="Chocolate",
        description="Rich chocolate made with premium cocoa",
        unit_price=Decimal("10.80"),
    ),
    CatalogItem(
        item_id="red-velvet",
        name="Red Velvet",
        description="Elegant red velvet with cocoa and cream cheese",
        unit_price=Decimal("20.60"),
    ),
    CatalogItem(
        item_id="salted-caramel",
        name="Salted Caramel",
        description="Sweet caramel with just the right pinch of sea salt",
        unit_price=Decimal("18.90"),
    ),
    CatalogItem(
        item_id="coffee",
        name="Coffee",
        description="A coffee cupcake for coffee lovers",
        unit_price=Decimal("24.80"),
    ),
)

TOPPINGS: tuple[CatalogItem, ...] = (
    CatalogItem(
        item_id="strawberry",
        name="Strawberries",
        description="Fresh sliced strawberries",
        unit_price=Decimal("5.00"),
    ),
    CatalogItem(
        item_id="blueberry",
        name="Blueberries",
        description="A handful of plump blueberries",
        unit_price=Decimal("10.00"),
    ),
    CatalogItem(
        item_id="orange",
        name="Oranges",
        description="Candied orange segments",
        unit_price=Decimal("6.00"),
    ),
)

QUANTITY_OPTIONS: tuple[QuantityOption, ...] = (
    QuantityOption(label="One Cupcake", quantity=1),
    QuantityOption(label="Six Cupcakes", quantity=6),
    QuantityOption(label="Twelve Cupcakes", quantity=12),
)

DEFAULT_CATALOG = Catalog(
    flavors=FLAVORS,
    toppings=TOPPINGS,
    quantity_options=QUANTITY_OPTIONS,
    bundle_flavor_ids=tuple(f.item_id for f in FLAVORS if f.item_id != BUNDLE_FLAVOR_ID),
)


@lru_cache(maxsize=8)
def load_catalog(path: str | None = None) -> Catalog:
    """Return the catalog at `path`, or the built-in one when path is None."""
    if path is None:
        return DEFAULT_CATALOG
    catalog = Catalog.from_json_file(Path(path))
    logger.info(
        "Catalog loaded from {} ({} flavors, {} toppings)",
        path,
        len(catalog.flavors),
        len(catalog.toppings),
    )
    return catalog


def get_flavor(flavor_id: str) -> CatalogItem:
    return DEFAULT_CATALOG.get_flavor(flavor_id)


def get_topping(topping_id: str) -> CatalogItem:
    return DEFAULT_CATALOG.get_topping(topping_id)


def list_flavors() -> tuple[CatalogItem, ...]:
    return DEFAULT_CATALOG.list_flavors()


def list_toppings() -> tuple[CatalogItem, ...]:
    return DEFAULT_CATALOG.list_toppings()


def list_quantity_options() -> tuple[QuantityOption, ...]:
    return DEFAULT_CATALOG.list_quantity_options()
