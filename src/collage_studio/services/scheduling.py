"""Timer and completion helpers on top of the asyncio event loop."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from collage_studio.services.streams import SubscriptionHandle


class Scheduler(Protocol):
    """Interface for deferring work on the UI event loop."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> SubscriptionHandle:
        """Run a callback after a delay in seconds; the handle cancels it."""


@dataclass
class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio loop."""

    loop: asyncio.AbstractEventLoop | None = None

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> SubscriptionHandle:
        """Schedule a callback with loop.call_later."""
        loop = self.loop or asyncio.get_running_loop()
        timer: asyncio.TimerHandle | None = None

        def _cancel() -> None:
            if timer is not None:
                timer.cancel()

        handle = SubscriptionHandle(_cancel)

        def _fire() -> None:
            if not handle.active:
                return
            handle.cancel()
            callback()

        timer = loop.call_later(delay, _fire)
        return handle


def watch_completion(
    awaitable: Awaitable[object],
    on_done: Callable[["asyncio.Future[object]"], None] | None = None,
) -> SubscriptionHandle:
    """Call on_done when an awaitable settles unless the handle is cancelled.

    Cancelling the handle does not abort the awaitable; its eventual result
    is dropped.
    """
    future = asyncio.ensure_future(awaitable)
    handle = SubscriptionHandle()

    def _settled(done: "asyncio.Future[object]") -> None:
        if not done.cancelled():
            done.exception()
        if not handle.active:
            return
        handle.cancel()
        if on_done is not None:
            on_done(done)

    future.add_done_callback(_settled)
    return handle
