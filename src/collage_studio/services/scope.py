"""Lifetime boundary for the registrations of one screen."""

import logging

from collage_studio.errors import ScopeReleasedError
from collage_studio.services.streams import SubscriptionHandle

_logger = logging.getLogger(__name__)


class SubscriptionScope:
    """Owns every subscription handle created while a screen is active.

    Releasing the scope cancels all held handles at once. Registering after
    release is a programming error: strict scopes raise, lenient scopes
    cancel the late handle and log a warning.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict
        self._handles: list[SubscriptionHandle] = []
        self._released = False

    @property
    def released(self) -> bool:
        """Return True after release."""
        return self._released

    @property
    def active_count(self) -> int:
        """Return the number of handles still active."""
        return sum(1 for handle in self._handles if handle.active)

    def ensure_open(self) -> bool:
        """Return True while the scope accepts registrations.

        A released strict scope raises instead of returning False.
        """
        if not self._released:
            return True
        if self.strict:
            raise ScopeReleasedError("Subscription scope already released")
        return False

    def add(self, handle: SubscriptionHandle) -> SubscriptionHandle:
        """Take ownership of a handle and return it."""
        if self._released:
            handle.cancel()
            if self.strict:
                raise ScopeReleasedError("Subscription scope already released")
            _logger.warning("Registration after scope release; cancelled it")
            return handle
        self._handles = [held for held in self._handles if held.active]
        self._handles.append(handle)
        return handle

    def release(self) -> None:
        """Cancel every held handle; later calls are ignored."""
        if self._released:
            return
        self._released = True
        handles, self._handles = self._handles, []
        for handle in handles:
            handle.cancel()
        _logger.debug("Released subscription scope (%s handles)", len(handles))
