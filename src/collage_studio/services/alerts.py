"""Alert and navigation collaborators."""

from collections.abc import Awaitable
from typing import Protocol


class Alerts(Protocol):
    """Interface for transient on-screen alerts."""

    def show_alert(self, title: str, body: str | None = None) -> Awaitable[None]:
        """Present an alert now; the awaitable resolves when it is dismissed."""


class Navigator(Protocol):
    """Interface for screen navigation."""

    def pop_screen(self) -> None:
        """Return to the previous screen."""
