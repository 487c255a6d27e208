from enum import StrEnum


class Screen(StrEnum):
    WELCOME = "welcome"
    CHOOSE_QUANTITY = "choose-quantity"
    CHOOSE_FLAVOR = "choose-flavor"
    CHOOSE_TOPPINGS = "choose-toppings"
    SUMMARY = "summary"
