import json
from decimal import Decimal
from pathlib import Path
from typing import Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    model_validator,
)

from .enums import Screen
from .errors import InvalidArgumentError, NotFoundError

BUNDLE_FLAVOR_ID = "bundle-all-flavors"
DEFAULT_PRICE_PER_CUPCAKE = Decimal("2.00")


class CatalogItem(BaseModel):
    """A flavor or topping the customer can pick."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    name: str
    description: str = ""
    unit_price: Decimal = Field(ge=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatalogItem):
            return NotImplemented
        return self.item_id == other.item_id and self.unit_price == other.unit_price

    def __hash__(self) -> int:
        return hash((self.item_id, self.unit_price))


class QuantityOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    quantity: int = Field(ge=1)


class Catalog(BaseModel):
    """Read-only reference data for one bakery.

    Flavors keep their declared order and always include the bundle
    pseudo-item, whose unit price is the flat bundle fee.
    """

    model_config = ConfigDict(frozen=True)

    flavors: tuple[CatalogItem, ...]
    toppings: tuple[CatalogItem, ...]
    quantity_options: tuple[QuantityOption, ...] = ()
    bundle_flavor_ids: tuple[str, ...] = ()  # Flavors included in the bundle

    @model_validator(mode="after")
    def check_ids(self) -> Self:
        for kind, items in (("flavor", self.flavors), ("topping", self.toppings)):
            ids = [item.item_id for item in items]
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            if duplicates:
                raise ValueError(f"duplicate {kind} ids: {', '.join(duplicates)}")

        flavor_ids = {item.item_id for item in self.flavors}
        if BUNDLE_FLAVOR_ID not in flavor_ids:
            raise ValueError(f"flavors must include the {BUNDLE_FLAVOR_ID!r} item")
        unknown = [i for i in self.bundle_flavor_ids if i not in flavor_ids]
        if unknown or BUNDLE_FLAVOR_ID in self.bundle_flavor_ids:
            raise ValueError(f"invalid bundle contents: {self.bundle_flavor_ids}")
        return self

    @property
    def bundle_price(self) -> Decimal:
        return self.get_flavor(BUNDLE_FLAVOR_ID).unit_price

    def get_flavor(self, flavor_id: str) -> CatalogItem:
        item = next((i for i in self.flavors if i.item_id == flavor_id), None)
        if item is None:
            raise NotFoundError("flavor", flavor_id)
        return item

    def get_topping(self, topping_id: str) -> CatalogItem:
        item = next((i for i in self.toppings if i.item_id == topping_id), None)
        if item is None:
            raise NotFoundError("topping", topping_id)
        return item

    def has_topping(self, topping_id: str) -> bool:
        return any(i.item_id == topping_id for i in self.toppings)

    def list_flavors(self) -> tuple[CatalogItem, ...]:
        return self.flavors

    def list_toppings(self) -> tuple[CatalogItem, ...]:
        return self.toppings

    def list_quantity_options(self) -> tuple[QuantityOption, ...]:
        return self.quantity_options

    def bundle_contents(self) -> tuple[CatalogItem, ...]:
        return tuple(self.get_flavor(i) for i in self.bundle_flavor_ids)

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        """Load a Catalog from a dictionary (matching the JSON structure).

        Raises:
            InvalidArgumentError: if the data does not describe a valid catalog.
        """
        try:
            return cls(
                flavors=[CatalogItem(**item) for item in data["flavors"]],
                toppings=[CatalogItem(**item) for item in data["toppings"]],
                quantity_options=[
                    QuantityOption(**option)
                    for option in data.get("quantity_options", [])
                ],
                bundle_flavor_ids=data.get("bundle_flavor_ids", []),
            )
        except (KeyError, TypeError, ValidationError) as exc:
            raise InvalidArgumentError(f"Invalid catalog data: {exc}") from exc

    @classmethod
    def from_json_file(cls, path: str | Path) -> "Catalog":
        """Load a Catalog from a JSON file path."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise InvalidArgumentError(f"Invalid catalog JSON in {path}: {exc}") from exc
        return cls.from_dict(data)


class OrderState(BaseModel):
    """Snapshot of the order in progress.

    The three price strings are derived from the other fields; only
    OrderController builds published snapshots, and it always rederives
    them together.
    """

    model_config = ConfigDict(frozen=True)

    quantity: int = Field(default=0, ge=0, strict=True)
    flavor_id: str | None = None
    selected_topping_ids: tuple[str, ...] = ()
    price_per_cupcake: Decimal = Field(default=DEFAULT_PRICE_PER_CUPCAKE, ge=0)
    is_rounded: bool = False
    cake_price: str = ""
    toppings_price: str = ""
    total_price: str = ""

    @computed_field
    @property
    def is_bundle(self) -> bool:
        return self.flavor_id == BUNDLE_FLAVOR_ID


class NavigationState(BaseModel):
    """Current screen plus the screens visited before it.

    Welcome is the implicit root beneath the back-stack and is never stored.
    """

    model_config = ConfigDict(frozen=True)

    current_screen: Screen = Screen.WELCOME
    back_stack: tuple[Screen, ...] = ()

    @model_validator(mode="after")
    def check_back_stack(self) -> Self:
        if Screen.WELCOME in self.back_stack:
            raise ValueError("back_stack must not contain the welcome screen")
        for previous, following in zip(self.back_stack, self.back_stack[1:]):
            if previous == following:
                raise ValueError(f"consecutive duplicate screen: {previous}")
        if self.back_stack and self.back_stack[-1] == self.current_screen:
            raise ValueError("current screen cannot be back of itself")
        return self

    @computed_field
    @property
    def can_navigate_back(self) -> bool:
        return self.current_screen != Screen.WELCOME


class OrderSummary(BaseModel):
    """Human-readable order details shown on the summary screen."""

    model_config = ConfigDict(frozen=True)

    subject: str
    quantity_text: str
    flavor_text: str
    bundle_contents: tuple[str, ...] = ()
    toppings_text: str
    cake_price: str
    toppings_price: str
    total_price: str

    def as_text(self) -> str:
        """Format the summary as the body of a shared order message."""
        lines = [
            f"Quantity: {self.quantity_text}",
            f"Flavor: {self.flavor_text}",
        ]
        if self.bundle_contents:
            lines.append(f"Bundle includes: {', '.join(self.bundle_contents)}")
        lines += [
            f"Toppings: {self.toppings_text}",
            f"Total: {self.total_price}",
            "",
            "Thank you!",
        ]
        return "\n".join(lines)
