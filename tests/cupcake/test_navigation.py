"""Tests for the screen state machine."""

import pytest
from pydantic import ValidationError

from cupcake.enums import Screen
from cupcake.errors import InvalidArgumentError, InvalidTransitionError
from cupcake.models import NavigationState
from cupcake.navigation import NavigationController
from cupcake.order import OrderController


def go_to_summary(navigation: NavigationController) -> None:
    navigation.start_order()
    navigation.next()
    navigation.next()
    navigation.next()


class TestForwardFlow:
    """Welcome through Summary."""

    def test_initial_state(self, navigation: NavigationController):
        state = navigation.state
        assert state.current_screen == Screen.WELCOME
        assert state.back_stack == ()
        assert state.can_navigate_back is False

    def test_start_order(self, navigation: NavigationController):
        state = navigation.start_order()
        assert state.current_screen == Screen.CHOOSE_QUANTITY
        assert state.back_stack == ()
        assert state.can_navigate_back is True

    def test_full_sequence(self, navigation: NavigationController):
        go_to_summary(navigation)
        state = navigation.state
        assert state.current_screen == Screen.SUMMARY
        assert state.back_stack == (
            Screen.CHOOSE_QUANTITY,
            Screen.CHOOSE_FLAVOR,
            Screen.CHOOSE_TOPPINGS,
        )

    def test_quantity_zero_may_proceed(self, navigation: NavigationController, order: OrderController):
        """The machine does not gate on quantity (matches the reference app)."""
        navigation.start_order()
        assert order.state.quantity == 0
        assert navigation.next().current_screen == Screen.CHOOSE_FLAVOR

    def test_next_from_summary_rejected(self, navigation: NavigationController):
        go_to_summary(navigation)
        before = navigation.state
        with pytest.raises(InvalidTransitionError):
            navigation.next()
        assert navigation.state is before

    def test_next_from_welcome_rejected(self, navigation: NavigationController):
        with pytest.raises(InvalidTransitionError):
            navigation.next()

    def test_start_order_twice_rejected(self, navigation: NavigationController):
        navigation.start_order()
        with pytest.raises(InvalidArgumentError):
            navigation.start_order()


class TestCancel:
    """cancel resets the order and returns to quantity selection."""

    @pytest.mark.parametrize("steps", [1, 2, 3])
    def test_cancel_returns_to_quantity(
        self, navigation: NavigationController, order: OrderController, steps: int
    ):
        navigation.start_order()
        order.set_quantity(6)
        for _ in range(steps):
            navigation.next()
        order.select_flavor("vanilla")
        order.set_selected_toppings(["orange"])

        state = navigation.cancel()

        assert state.current_screen == Screen.CHOOSE_QUANTITY
        assert state.back_stack == ()
        assert order.state == order.default_state()

    def test_cancel_from_summary(self, navigation: NavigationController, order: OrderController):
        navigation.start_order()
        order.set_quantity(12)
        navigation.next()
        order.select_flavor("coffee")
        navigation.next()
        navigation.next()
        order.toggle_round_price()

        navigation.cancel()

        assert navigation.current_screen == Screen.CHOOSE_QUANTITY
        assert order.state == OrderController().state

    def test_order_subscribers_see_quantity_screen(
        self, navigation: NavigationController, order: OrderController
    ):
        navigation.start_order()
        navigation.next()
        screens: list[Screen] = []
        order.subscribe(lambda _: screens.append(navigation.current_screen), replay=False)

        navigation.cancel()

        assert screens == [Screen.CHOOSE_QUANTITY]

    @pytest.mark.parametrize("on_quantity", [False, True])
    def test_cancel_rejected_before_flavor(
        self, navigation: NavigationController, order: OrderController, on_quantity: bool
    ):
        if on_quantity:
            navigation.start_order()
        before = order.set_quantity(6)
        with pytest.raises(InvalidTransitionError):
            navigation.cancel()
        assert order.state is before


class TestNavigateUp:
    """navigate_up pops one screen at a time."""

    def test_pop_one(self, navigation: NavigationController):
        go_to_summary(navigation)
        state = navigation.navigate_up()
        assert state.current_screen == Screen.CHOOSE_TOPPINGS
        assert state.back_stack == (Screen.CHOOSE_QUANTITY, Screen.CHOOSE_FLAVOR)

    def test_back_to_welcome(self, navigation: NavigationController):
        navigation.start_order()
        navigation.next()
        navigation.navigate_up()
        state = navigation.navigate_up()
        assert state == NavigationState()
        assert state.can_navigate_back is False

    def test_noop_at_welcome(self, navigation: NavigationController):
        before = navigation.state
        assert navigation.navigate_up() is before

    def test_does_not_touch_order(self, navigation: NavigationController, order: OrderController):
        navigation.start_order()
        before = order.set_quantity(6)
        navigation.next()
        navigation.navigate_up()
        assert order.state is before


class TestNavigateTo:
    """Direct navigation and back-stack invariants."""

    def test_same_screen_is_noop(self, navigation: NavigationController):
        navigation.start_order()
        before = navigation.state
        assert navigation.navigate_to(Screen.CHOOSE_QUANTITY) is before

    def test_no_consecutive_duplicates(self, navigation: NavigationController):
        go_to_summary(navigation)
        navigation.navigate_to(Screen.CHOOSE_FLAVOR)
        stack = navigation.state.back_stack
        assert all(a != b for a, b in zip(stack, stack[1:]))
        assert stack[-1] != navigation.current_screen

    def test_navigate_to_welcome_clears_back_stack(self, navigation: NavigationController):
        navigation.start_order()
        navigation.next()

        state = navigation.navigate_to(Screen.WELCOME)

        assert state == NavigationState()
        assert navigation.navigate_up() is state
        assert navigation.start_order().back_stack == ()
        assert navigation.next().current_screen == Screen.CHOOSE_FLAVOR

    @pytest.mark.parametrize("target", list(Screen))
    @pytest.mark.parametrize("steps", [0, 1, 2, 3, 4])
    def test_any_jump_keeps_flow_usable(
        self, navigation: NavigationController, steps: int, target: Screen
    ):
        """After any navigate_to, back-navigation reaches Welcome and a new order can start."""
        if steps:
            navigation.start_order()
            for _ in range(steps - 1):
                navigation.next()

        state = navigation.navigate_to(target)

        assert state.current_screen == target
        assert state.can_navigate_back is (target != Screen.WELCOME)
        assert Screen.WELCOME not in state.back_stack
        for _ in range(len(Screen) + 1):
            if navigation.current_screen == Screen.WELCOME:
                break
            navigation.navigate_up()
        assert navigation.state == NavigationState()
        assert navigation.start_order().current_screen == Screen.CHOOSE_QUANTITY
        assert navigation.next().current_screen == Screen.CHOOSE_FLAVOR

    def test_reset(self, navigation: NavigationController):
        go_to_summary(navigation)
        assert navigation.reset() == NavigationState()

    def test_subscribers_notified(self, navigation: NavigationController):
        screens: list[Screen] = []
        navigation.subscribe(lambda s: screens.append(s.current_screen))
        go_to_summary(navigation)
        navigation.navigate_up()
        assert screens == [
            Screen.WELCOME,
            Screen.CHOOSE_QUANTITY,
            Screen.CHOOSE_FLAVOR,
            Screen.CHOOSE_TOPPINGS,
            Screen.SUMMARY,
            Screen.CHOOSE_TOPPINGS,
        ]


class TestNavigationStateValidation:
    """NavigationState rejects malformed back-stacks."""

    def test_welcome_not_stored(self):
        with pytest.raises(ValidationError):
            NavigationState(current_screen=Screen.CHOOSE_QUANTITY, back_stack=(Screen.WELCOME,))

    def test_consecutive_duplicates(self):
        with pytest.raises(ValidationError):
            NavigationState(
                current_screen=Screen.SUMMARY,
                back_stack=(Screen.CHOOSE_FLAVOR, Screen.CHOOSE_FLAVOR),
            )

    def test_current_not_back_of_itself(self):
        with pytest.raises(ValidationError):
            NavigationState(
                current_screen=Screen.CHOOSE_FLAVOR, back_stack=(Screen.CHOOSE_FLAVOR,)
            )

    def test_dump_includes_can_navigate_back(self):
        dumped = NavigationState(current_screen=Screen.SUMMARY).model_dump()
        assert dumped["can_navigate_back"] is True
