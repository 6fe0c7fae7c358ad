"""Bridges a photo selection sub-flow into the collage state."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from collage_studio.domain.collage import (
    MAX_PHOTOS,
    Photo,
    PhotoList,
    default_title,
    selection_title,
)
from collage_studio.services.alerts import Alerts, Navigator
from collage_studio.services.scheduling import Scheduler, watch_completion
from collage_studio.services.scope import SubscriptionScope
from collage_studio.services.state import StateCell
from collage_studio.services.streams import HotStream, SubscriptionHandle
from collage_studio.services.titles import TitleController

LIMIT_TITLE = "Limit reached"

_logger = logging.getLogger(__name__)


class CountStream(Protocol):
    """Stream of counts that replays the latest value to new observers."""

    def subscribe(self, callback: Callable[[int], None]) -> SubscriptionHandle:
        """Register an observer for count changes."""


@dataclass(frozen=True)
class PhotoSelection:
    """Streams exposed by a running photo picker."""

    chosen_count: CountStream
    new_photos: HotStream[Photo]


class PhotoPicker(Protocol):
    """Interface for the photo picker sub-flow."""

    def select_photos(self, initial_count: int) -> PhotoSelection:
        """Open the picker and return its selection streams."""


@dataclass
class _IntakeFlow:
    intake_handle: SubscriptionHandle | None = None
    done: bool = False
    limit_notified: bool = False


def limit_message(capacity: int) -> str:
    """Return the body of the capacity alert."""
    return f"To add more than {capacity} photos purchase Collage Pro"


@dataclass
class SelectionIntake:
    """Appends picked photos to the state while enforcing the capacity."""

    state: StateCell[PhotoList]
    picker: PhotoPicker
    alerts: Alerts
    navigator: Navigator
    titles: TitleController
    scheduler: Scheduler
    scope: SubscriptionScope
    capacity: int = MAX_PHOTOS
    revert_delay_seconds: float = 2.0

    def begin(self) -> PhotoSelection | None:
        """Open the picker and wire its streams into the state."""
        if not self.scope.ensure_open():
            _logger.debug("Selection requested after release; ignoring")
            return None
        selection = self.picker.select_photos(initial_count=len(self.state.value))
        flow = _IntakeFlow()

        self.scope.add(selection.chosen_count.subscribe(self._on_count))
        # Appending must be registered before the limit check so the check
        # sees the length after each photo.
        intake_handle = selection.new_photos.subscribe(
            lambda photo: self._on_photo(flow, photo),
            lambda: self._finish_intake(flow),
        )
        flow.intake_handle = intake_handle
        self.scope.add(intake_handle)
        self.scope.add(
            selection.new_photos.subscribe(lambda _photo: self._check_limit(flow))
        )
        return selection

    def _on_count(self, count: int) -> None:
        if count > 0 and len(self.state.value) < self.capacity:
            self.titles.set_title(selection_title(count))

    def _on_photo(self, flow: _IntakeFlow, photo: Photo) -> None:
        if flow.done:
            return
        current = self.state.value
        if len(current) >= self.capacity:
            _logger.debug("Collage is full; dropping incoming photo")
            self._finish_intake(flow)
            return
        self.state.set((*current, photo))

    def _finish_intake(self, flow: _IntakeFlow) -> None:
        if flow.done:
            return
        flow.done = True
        if flow.intake_handle is not None:
            flow.intake_handle.cancel()
        generation = self.titles.generation
        self.scope.add(
            self.scheduler.call_later(
                self.revert_delay_seconds, lambda: self._revert_title(generation)
            )
        )

    def _revert_title(self, generation: int) -> None:
        title = default_title(len(self.state.value))
        if not self.titles.restore_if_current(generation, title):
            _logger.debug("Title changed since intake finished; skipping revert")

    def _check_limit(self, flow: _IntakeFlow) -> None:
        if flow.limit_notified or len(self.state.value) < self.capacity:
            return
        flow.limit_notified = True
        _logger.info("Collage limit of %s photos reached", self.capacity)
        acknowledgement = self.alerts.show_alert(
            LIMIT_TITLE, limit_message(self.capacity)
        )
        self.scope.add(
            watch_completion(acknowledgement, self._on_limit_acknowledged)
        )

    def _on_limit_acknowledged(self, done: "asyncio.Future[object]") -> None:
        if done.cancelled() or done.exception() is not None:
            _logger.warning("Limit alert was not acknowledged; staying on picker")
            return
        self.navigator.pop_screen()
