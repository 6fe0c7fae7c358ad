"""Observable state cell holding the current selection."""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from collage_studio.services.streams import SubscriptionHandle

T = TypeVar("T")


@dataclass(eq=False)
class _Observer(Generic[T]):
    callback: Callable[[T], None]
    active: bool = True


class StateCell(Generic[T]):
    """Mutable value that notifies observers synchronously on every set.

    New observers receive the current value immediately. Observers are
    notified in registration order. A set issued from inside a notification
    is queued and delivered once the current round has finished, so every
    observer sees every value in the same order.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: list[_Observer[T]] = []
        self._pending: deque[T] = deque()
        self._notifying = False

    @property
    def value(self) -> T:
        """Return the current value."""
        return self._value

    def subscribe(self, callback: Callable[[T], None]) -> SubscriptionHandle:
        """Register an observer, replaying the current value to it."""
        observer = _Observer(callback=callback)
        self._observers.append(observer)
        handle = SubscriptionHandle(lambda: self._remove(observer))
        callback(self._value)
        return handle

    def set(self, value: T) -> None:
        """Replace the value and notify observers before returning."""
        self._pending.append(value)
        if self._notifying:
            return
        self._notifying = True
        try:
            while self._pending:
                self._value = self._pending.popleft()
                for observer in list(self._observers):
                    if observer.active:
                        observer.callback(self._value)
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._notifying = False

    def _remove(self, observer: _Observer[T]) -> None:
        observer.active = False
        if observer in self._observers:
            self._observers.remove(observer)
