"""Wiring for one order flow.

The rendering layer receives an OrderSession, subscribes to its two
controllers, and forwards user intents to them. There is no module-level
session; each caller constructs and owns its own.
"""

from loguru import logger

from .catalog import load_catalog
from .config import Settings, get_settings
from .enums import Screen
from .errors import InvalidTransitionError
from .logging import setup_logging
from .models import Catalog, NavigationState, OrderSummary
from .navigation import NavigationController
from .order import OrderController

SUBJECT = "New Cupcake Order"
NO_TOPPINGS = "No toppings selected"


class OrderSession:
    """One customer's order flow: catalog, order state and navigation."""

    def __init__(self, settings: Settings | None = None, catalog: Catalog | None = None):
        self.settings = settings or get_settings()
        self.catalog = catalog or load_catalog(self.settings.catalog_json_path)
        self.order = OrderController(
            self.catalog,
            currency_prefix=self.settings.currency_prefix,
            default_price_per_cupcake=self.settings.default_price_per_cupcake,
            strict_toppings=self.settings.strict_toppings,
        )
        self.navigation = NavigationController(self.order)

    @classmethod
    def start(cls, settings: Settings | None = None) -> "OrderSession":
        """Configure logging from settings and create a session."""
        settings = settings or get_settings()
        setup_logging(level=settings.log_level, log_file=settings.log_file)
        session = cls(settings)
        logger.info(
            "Order session started ({} flavors, {} toppings)",
            len(session.catalog.flavors),
            len(session.catalog.toppings),
        )
        return session

    def choose_quantity(self, quantity: int) -> NavigationState:
        """Set the quantity and move on to flavor selection."""
        screen = self.navigation.current_screen
        if screen != Screen.CHOOSE_QUANTITY:
            logger.warning("Rejected choose_quantity on {}", screen)
            raise InvalidTransitionError("choose quantity", str(screen))
        self.order.set_quantity(quantity)
        return self.navigation.next()

    def summary(self) -> OrderSummary:
        state = self.order.state
        if state.quantity == 1:
            quantity_text = "1 cupcake"
        else:
            quantity_text = f"{state.quantity} cupcakes"

        flavor_text = ""
        bundle_contents: tuple[str, ...] = ()
        if state.flavor_id is not None:
            flavor_text = self.catalog.get_flavor(state.flavor_id).name
        if state.is_bundle:
            bundle_contents = tuple(f.name for f in self.catalog.bundle_contents())

        if state.selected_topping_ids:
            toppings_text = ", ".join(
                self.catalog.get_topping(t).name if self.catalog.has_topping(t) else t
                for t in state.selected_topping_ids
            )
        else:
            toppings_text = NO_TOPPINGS

        return OrderSummary(
            subject=SUBJECT,
            quantity_text=quantity_text,
            flavor_text=flavor_text,
            bundle_contents=bundle_contents,
            toppings_text=toppings_text,
            cake_price=state.cake_price,
            toppings_price=state.toppings_price,
            total_price=state.total_price,
        )

    def send_order(self) -> OrderSummary:
        """Stub for sharing the order; nothing is submitted anywhere."""
        summary = self.summary()
        logger.info("send_order: {} ({})", summary.subject, summary.total_price)
        return summary
