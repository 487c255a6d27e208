"""Exceptions raised by the order core.

All failures are local and recoverable: a rejected intent leaves the
previously published snapshot untouched.
"""


class CupcakeError(Exception):
    """Base class for all order core errors."""


class InvalidArgumentError(CupcakeError, ValueError):
    """An intent was called with an argument outside its allowed range."""


class NotFoundError(CupcakeError, LookupError):
    """A catalog lookup missed."""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Unknown {kind}: {item_id!r}")


class InvalidTransitionError(InvalidArgumentError):
    """A navigation intent is not allowed from the current screen."""

    def __init__(self, intent: str, screen: str):
        self.intent = intent
        self.screen = screen
        super().__init__(f"Cannot {intent} from screen {screen!r}")
