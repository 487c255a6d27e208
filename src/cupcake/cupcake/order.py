"""Order controller: the only writer of OrderState.

Every intent builds a complete new snapshot, rederives all three price
strings from it, and publishes it once. Validation happens before the
snapshot is built, so a rejected intent never reaches the store.
"""

from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable

from loguru import logger
from pydantic import ValidationError

from .catalog import DEFAULT_CATALOG
from .errors import InvalidArgumentError
from .models import DEFAULT_PRICE_PER_CUPCAKE, Catalog, OrderState
from .pricing import price_order, to_decimal
from .store import StateStore

# Fields the caller controls; the price strings are always derived.
_INPUT_FIELDS = {
    "quantity",
    "flavor_id",
    "selected_topping_ids",
    "price_per_cupcake",
    "is_rounded",
}


class OrderController:
    """Applies order intents and publishes consistent OrderState snapshots.

    Args:
        catalog: Flavors and toppings used for pricing and validation.
        currency_prefix: Prefix for every formatted price string.
        default_price_per_cupcake: Price per cupcake before a flavor is chosen.
        strict_toppings: Reject unknown topping ids instead of pricing them at zero.
    """

    def __init__(
        self,
        catalog: Catalog = DEFAULT_CATALOG,
        *,
        currency_prefix: str = "RM",
        default_price_per_cupcake: Decimal = DEFAULT_PRICE_PER_CUPCAKE,
        strict_toppings: bool = True,
    ):
        self._catalog = catalog
        self._currency_prefix = currency_prefix
        self._default_price = to_decimal(default_price_per_cupcake)
        self._strict_toppings = strict_toppings
        self._store: StateStore[OrderState] = StateStore(self.default_state())

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def state(self) -> OrderState:
        return self._store.value

    def subscribe(
        self, callback: Callable[[OrderState], None], replay: bool = True
    ) -> Callable[[], None]:
        return self._store.subscribe(callback, replay=replay)

    def default_state(self) -> OrderState:
        return self._derive(
            {
                "quantity": 0,
                "flavor_id": None,
                "selected_topping_ids": (),
                "price_per_cupcake": self._default_price,
                "is_rounded": False,
            }
        )

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def set_quantity(self, quantity: int) -> OrderState:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise self._reject(f"quantity must be an integer, got {quantity!r}")
        if quantity < 0:
            raise self._reject(f"quantity must be >= 0, got {quantity}")
        return self._apply("set_quantity", quantity=quantity)

    def select_flavor(self, flavor_id: str) -> OrderState:
        """Select a flavor and take its price from the catalog.

        This folds the separate price update into the selection, so the
        published snapshot already carries the chosen flavor's price.
        """
        try:
            flavor = self._catalog.get_flavor(flavor_id)
        except LookupError:
            logger.warning("Rejected select_flavor: unknown flavor {!r}", flavor_id)
            raise
        return self._apply(
            "select_flavor", flavor_id=flavor.item_id, price_per_cupcake=flavor.unit_price
        )

    def update_price_per_cupcake(self, price: Decimal | int | float | str) -> OrderState:
        try:
            value = to_decimal(price)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise self._reject(f"price must be a number, got {price!r}") from exc
        if not value.is_finite() or value < 0:
            raise self._reject(f"price must be a finite amount >= 0, got {price!r}")
        return self._apply("update_price_per_cupcake", price_per_cupcake=value)

    def set_selected_toppings(self, topping_ids: Iterable[str]) -> OrderState:
        """Replace the topping selection. Repeated ids keep their first position."""
        if isinstance(topping_ids, str):
            raise self._reject("topping_ids must be a collection of ids, not a string")
        selected = tuple(dict.fromkeys(topping_ids))
        for topping_id in selected:
            self._check_topping(topping_id)
        return self._apply("set_selected_toppings", selected_topping_ids=selected)

    def toggle_topping(self, topping_id: str) -> OrderState:
        self._check_topping(topping_id)
        current = self.state.selected_topping_ids
        if topping_id in current:
            selected = tuple(t for t in current if t != topping_id)
        else:
            selected = current + (topping_id,)
        return self._apply("toggle_topping", selected_topping_ids=selected)

    def toggle_round_price(self) -> OrderState:
        return self._apply("toggle_round_price", is_rounded=not self.state.is_rounded)

    def reset(self) -> OrderState:
        state = self.default_state()
        self._store.publish(state)
        logger.info("Order reset")
        return state

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_topping(self, topping_id: str) -> None:
        if not self._strict_toppings or self._catalog.has_topping(topping_id):
            return
        raise self._reject(f"unknown topping {topping_id!r}")

    def _reject(self, message: str) -> InvalidArgumentError:
        logger.warning("Rejected order intent: {}", message)
        return InvalidArgumentError(message)

    def _derive(self, fields: dict) -> OrderState:
        try:
            draft = OrderState(**fields)
        except ValidationError as exc:
            raise self._reject(str(exc)) from exc
        prices = price_order(
            quantity=draft.quantity,
            is_bundle=draft.is_bundle,
            price_per_cupcake=draft.price_per_cupcake,
            topping_ids=draft.selected_topping_ids,
            is_rounded=draft.is_rounded,
            catalog=self._catalog,
            prefix=self._currency_prefix,
        )
        return draft.model_copy(update=prices._asdict())

    def _apply(self, intent: str, **changes) -> OrderState:
        fields = self.state.model_dump(include=_INPUT_FIELDS)
        fields.update(changes)
        state = self._derive(fields)
        logger.debug(
            "{}: quantity={} flavor={} toppings={} total={}",
            intent,
            state.quantity,
            state.flavor_id,
            list(state.selected_topping_ids),
            state.total_price,
        )
        self._store.publish(state)
        return state
