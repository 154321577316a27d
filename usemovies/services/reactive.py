"""Observable cells with explicit subscriptions

A ``Cell`` holds one value. Effects subscribed to it are re-run synchronously
every time the value changes. An effect may return a cleanup callable, which
runs before the effect's next invocation and when the subscription ends.
"""

from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Cleanup = Optional[Callable[[], None]]
Effect = Callable[[Any], Cleanup]


class Subscription:
    """One effect registered against one cell"""

    def __init__(self, cell: "Cell", effect: Effect):
        self.cell = cell
        self.effect = effect
        self.active = True
        self._cleanup: Cleanup = None

    def _run(self, value: Any):
        """Clean up the previous invocation, then invoke the effect"""
        self._run_cleanup()
        self._cleanup = self.effect(value)

    def _run_cleanup(self):
        cleanup, self._cleanup = self._cleanup, None
        if cleanup is not None:
            cleanup()

    def unsubscribe(self):
        """Detach from the cell and run the pending cleanup"""
        if not self.active:
            return
        self.active = False
        self.cell._detach(self)
        self._run_cleanup()


class Cell(Generic[T]):
    """A mutable value whose changes are pushed to subscribers"""

    def __init__(self, value: T):
        self._value = value
        self._subscriptions: List[Subscription] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T):
        """Store ``value``; subscribers only run when it actually changed"""
        if value == self._value:
            return
        self._value = value
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription._run(value)

    def subscribe(self, effect: Effect, immediate: bool = True) -> Subscription:
        """Register ``effect``; by default it runs once right away"""
        subscription = Subscription(self, effect)
        self._subscriptions.append(subscription)
        if immediate:
            subscription._run(self._value)
        return subscription

    def _detach(self, subscription: Subscription):
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)
