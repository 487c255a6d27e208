"""Screen sequencing for the order flow.

    Welcome -> ChooseQuantity -> ChooseFlavor -> ChooseToppings -> Summary

`cancel` from the flavor, toppings or summary screen returns to
ChooseQuantity and resets the order. The machine does not gate `next` on
the order contents; enabling the next button is the renderer's job.
"""

from typing import Callable

from loguru import logger

from .enums import Screen
from .errors import InvalidTransitionError
from .models import NavigationState
from .order import OrderController
from .store import StateStore

FORWARD: dict[Screen, Screen] = {
    Screen.CHOOSE_QUANTITY: Screen.CHOOSE_FLAVOR,
    Screen.CHOOSE_FLAVOR: Screen.CHOOSE_TOPPINGS,
    Screen.CHOOSE_TOPPINGS: Screen.SUMMARY,
}

CANCELLABLE = frozenset({Screen.CHOOSE_FLAVOR, Screen.CHOOSE_TOPPINGS, Screen.SUMMARY})


class NavigationController:
    """Owns NavigationState and resets the order on cancel."""

    def __init__(self, order: OrderController):
        self._order = order
        self._store: StateStore[NavigationState] = StateStore(NavigationState())

    @property
    def state(self) -> NavigationState:
        return self._store.value

    @property
    def current_screen(self) -> Screen:
        return self.state.current_screen

    def subscribe(
        self, callback: Callable[[NavigationState], None], replay: bool = True
    ) -> Callable[[], None]:
        return self._store.subscribe(callback, replay=replay)

    def start_order(self) -> NavigationState:
        if self.current_screen != Screen.WELCOME:
            raise self._reject("start order")
        return self.navigate_to(Screen.CHOOSE_QUANTITY)

    def next(self) -> NavigationState:
        target = FORWARD.get(self.current_screen)
        if target is None:
            raise self._reject("go to next screen")
        return self.navigate_to(target)

    def navigate_to(self, screen: Screen) -> NavigationState:
        """Push `screen`. Navigating to the current screen is a no-op.

        Welcome is the root, so navigating there clears the back-stack.
        """
        current = self.state
        if screen == current.current_screen:
            logger.debug("Already on {}, navigation ignored", screen)
            return current
        if screen == Screen.WELCOME:
            return self._publish(NavigationState())
        back_stack = current.back_stack
        if current.current_screen != Screen.WELCOME:
            back_stack += (current.current_screen,)
        return self._publish(NavigationState(current_screen=screen, back_stack=back_stack))

    def navigate_up(self) -> NavigationState:
        """Pop one screen. At Welcome there is nothing to pop."""
        current = self.state
        if not current.can_navigate_back:
            logger.debug("navigate_up ignored on {}", current.current_screen)
            return current
        if current.back_stack:
            state = NavigationState(
                current_screen=current.back_stack[-1], back_stack=current.back_stack[:-1]
            )
        else:
            state = NavigationState()
        return self._publish(state)

    def cancel(self) -> NavigationState:
        """Abandon the order in progress and return to quantity selection.

        The navigation snapshot is published before the order is reset, so
        order subscribers already see ChooseQuantity as the current screen.
        """
        current = self.state
        if current.current_screen not in CANCELLABLE:
            raise self._reject("cancel")

        back_stack = current.back_stack
        if Screen.CHOOSE_QUANTITY in back_stack:
            back_stack = back_stack[: back_stack.index(Screen.CHOOSE_QUANTITY)]
        state = self._publish(
            NavigationState(current_screen=Screen.CHOOSE_QUANTITY, back_stack=back_stack)
        )
        self._order.reset()
        return state

    def reset(self) -> NavigationState:
        return self._publish(NavigationState())

    def _reject(self, intent: str) -> InvalidTransitionError:
        logger.warning("Rejected navigation: cannot {} from {}", intent, self.current_screen)
        return InvalidTransitionError(intent, str(self.current_screen))

    def _publish(self, state: NavigationState) -> NavigationState:
        logger.info(
            "Navigation: {} -> {}", self.current_screen, state.current_screen
        )
        self._store.publish(state)
        return state
