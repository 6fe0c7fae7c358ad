"""Save pipeline persisting the composed collage."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from PIL import Image

from collage_studio.domain.collage import (
    CompositionResult,
    PhotoList,
    SaveFailure,
    SaveOutcome,
    SaveSuccess,
)
from collage_studio.errors import NothingToSaveError
from collage_studio.services.alerts import Alerts
from collage_studio.services.composition import CompositionPipeline
from collage_studio.services.scheduling import watch_completion
from collage_studio.services.scope import SubscriptionScope
from collage_studio.services.state import StateCell
from collage_studio.services.streams import SubscriptionHandle

_logger = logging.getLogger(__name__)


class CollageRepository(Protocol):
    """Persistence interface for composed collages."""

    async def persist(self, image: Image.Image) -> str:
        """Store the image and return its id; raise on failure."""


@dataclass
class SavePipeline:
    """Persists the current preview and always ends the editing session."""

    state: StateCell[PhotoList]
    composition: CompositionPipeline
    repository: CollageRepository
    alerts: Alerts
    scope: SubscriptionScope
    strict: bool = False

    def trigger(self) -> "asyncio.Task[SaveOutcome | None] | None":
        """Start saving the current preview and return the running task."""
        preview = self.composition.latest
        if preview is None or preview.is_empty:
            if self.strict:
                raise NothingToSaveError("No composed collage to save")
            _logger.debug("Save requested without a composed collage; ignoring")
            return None
        handle = self.scope.add(SubscriptionHandle())
        if not handle.active:
            return None
        return asyncio.get_running_loop().create_task(self._save(preview, handle))

    async def _save(
        self, preview: CompositionResult, handle: SubscriptionHandle
    ) -> SaveOutcome | None:
        outcome: SaveOutcome
        try:
            collage_id = await self.repository.persist(preview.image)
        except Exception as exc:
            outcome = SaveFailure(reason=str(exc) or type(exc).__name__)
            _logger.warning("Collage save failed: %s", outcome.reason)
        else:
            outcome = SaveSuccess(id=collage_id)
            _logger.info(
                "Collage saved: id=%s photos=%s", collage_id, preview.photo_count
            )

        if not handle.active:
            _logger.debug("Save finished after the session closed; ignoring")
            return None
        handle.cancel()
        self._show_outcome(outcome)
        self.state.set(())
        return outcome

    def _show_outcome(self, outcome: SaveOutcome) -> None:
        if isinstance(outcome, SaveSuccess):
            acknowledgement = self.alerts.show_alert(f"Saved with id: {outcome.id}")
        else:
            acknowledgement = self.alerts.show_alert("Error", outcome.reason)
        self.scope.add(watch_completion(acknowledgement))
