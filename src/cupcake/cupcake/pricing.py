"""Pricing engine.

Pure functions over order fields. Amounts are Decimals; rounding only
happens for display, in compute_total_price / format_currency.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, NamedTuple

from .models import Catalog

CENTS = Decimal("0.01")
WHOLE = Decimal("1")


class PriceBreakdown(NamedTuple):
    cake_price: str
    toppings_price: str
    total_price: str


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a price to Decimal without float representation noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_cake_price(
    quantity: int,
    is_bundle: bool,
    price_per_cupcake: Decimal,
    bundle_price: Decimal,
) -> Decimal:
    """Bundle orders cost the flat bundle price regardless of quantity."""
    if is_bundle:
        return to_decimal(bundle_price)
    return quantity * to_decimal(price_per_cupcake)


def compute_toppings_price(topping_ids: Iterable[str], catalog: Catalog) -> Decimal:
    """Sum topping unit prices. Unknown ids contribute zero."""
    total = Decimal("0")
    for topping_id in topping_ids:
        if catalog.has_topping(topping_id):
            total += catalog.get_topping(topping_id).unit_price
    return total


def compute_total_price(
    cake_price: Decimal, toppings_price: Decimal, is_rounded: bool
) -> Decimal:
    """Add cake and toppings, rounding half away from zero to whole units
    when is_rounded is set and keeping two decimal places otherwise.
    """
    total = to_decimal(cake_price) + to_decimal(toppings_price)
    if is_rounded:
        return total.quantize(WHOLE, rounding=ROUND_HALF_UP)
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, rounded: bool = False, prefix: str = "RM") -> str:
    """Format `amount` as e.g. RM12.00, or RM28 when rounded."""
    exponent = WHOLE if rounded else CENTS
    return f"{prefix}{to_decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)}"


def price_order(
    quantity: int,
    is_bundle: bool,
    price_per_cupcake: Decimal,
    topping_ids: Iterable[str],
    is_rounded: bool,
    catalog: Catalog,
    prefix: str = "RM",
) -> PriceBreakdown:
    """Derive all three displayed price strings for one set of order fields."""
    cake = compute_cake_price(quantity, is_bundle, price_per_cupcake, catalog.bundle_price)
    toppings = compute_toppings_price(topping_ids, catalog)
    total = compute_total_price(cake, toppings, is_rounded)
    return PriceBreakdown(
        cake_price=format_currency(cake, prefix=prefix),
        toppings_price=format_currency(toppings, prefix=prefix),
        total_price=format_currency(total, rounded=is_rounded, prefix=prefix),
    )
