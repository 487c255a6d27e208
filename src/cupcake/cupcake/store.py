"""Observable holder for immutable state snapshots."""

from typing import Callable, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel

StateT = TypeVar("StateT", bound=BaseModel)

Subscriber = Callable[[StateT], None]


class StateStore(Generic[StateT]):
    """Holds the latest published snapshot and notifies subscribers.

    Snapshots are frozen pydantic models, so subscribers can keep them
    without copying. `publish` replaces the value before any subscriber
    runs; a subscriber never sees an older snapshot than `value`.
    """

    def __init__(self, initial: StateT):
        self._value = initial
        self._subscribers: list[Subscriber[StateT]] = []

    @property
    def value(self) -> StateT:
        return self._value

    def subscribe(self, callback: Subscriber[StateT], replay: bool = True) -> Callable[[], None]:
        """Register `callback` and return a function that unregisters it.

        With `replay` the callback immediately receives the current snapshot.
        """
        self._subscribers.append(callback)
        if replay:
            callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, state: StateT) -> None:
        self._value = state
        logger.debug(
            "Published {} to {} subscribers", type(state).__name__, len(self._subscribers)
        )
        for callback in list(self._subscribers):
            callback(state)
