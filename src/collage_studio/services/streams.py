"""Subscription handles and multicast streams."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class SubscriptionHandle:
    """Token representing one active observer registration."""

    def __init__(self, on_cancel: Callable[[], None] | None = None) -> None:
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self) -> bool:
        """Return True until the handle is cancelled."""
        return self._active

    def cancel(self) -> None:
        """Stop the registration; repeated calls are ignored."""
        if not self._active:
            return
        self._active = False
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel()


@dataclass(eq=False)
class _Registration(Generic[T]):
    on_next: Callable[[T], None]
    on_complete: Callable[[], None] | None = None
    active: bool = True


class HotStream(Generic[T]):
    """Multicast stream that delivers events only to current subscribers.

    Nothing is buffered: a late subscriber misses earlier events, and a
    subscriber added after completion is completed immediately.
    """

    def __init__(self) -> None:
        self._registrations: list[_Registration[T]] = []
        self._completed = False

    @property
    def completed(self) -> bool:
        """Return True once the stream has completed."""
        return self._completed

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_complete: Callable[[], None] | None = None,
    ) -> SubscriptionHandle:
        """Register observers and return the handle that removes them."""
        if self._completed:
            if on_complete is not None:
                on_complete()
            handle = SubscriptionHandle()
            handle.cancel()
            return handle
        registration = _Registration(on_next=on_next, on_complete=on_complete)
        self._registrations.append(registration)
        return SubscriptionHandle(lambda: self._remove(registration))

    def emit(self, value: T) -> None:
        """Deliver a value to every subscriber in registration order."""
        if self._completed:
            return
        for registration in list(self._registrations):
            if registration.active:
                registration.on_next(value)

    def complete(self) -> None:
        """Signal completion and drop all subscribers."""
        if self._completed:
            return
        self._completed = True
        registrations, self._registrations = self._registrations, []
        for registration in registrations:
            if registration.active and registration.on_complete is not None:
                registration.active = False
                registration.on_complete()

    def _remove(self, registration: _Registration[T]) -> None:
        registration.active = False
        if registration in self._registrations:
            self._registrations.remove(registration)
