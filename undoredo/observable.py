"""Push-based observable values.

UI layers subscribe to an :class:`ObservableValue` to be told when it
changes, or simply read ``value`` on every render.
"""

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class ObservableValue(Generic[T]):
    """A value with change listeners.

    Only the owner publishes new values. Listeners run synchronously, in
    subscription order, and only when the value actually changes.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._listeners: List[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a function that unregisters it."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _update(self, value: T) -> bool:
        """Store ``value`` without notifying; return True if it changed."""
        if value == self._value:
            return False
        self._value = value
        return True

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._value)

    def _publish(self, value: T) -> None:
        if self._update(value):
            self._notify()

    def __bool__(self) -> bool:
        return bool(self._value)

    def __repr__(self) -> str:
        return f"ObservableValue({self._value!r})"
