"""Collage editing session wiring the reactive pipelines together."""

import asyncio
import logging
from dataclasses import dataclass, field

from collage_studio.domain.collage import (
    MAX_PHOTOS,
    CompositionResult,
    PhotoList,
    SaveOutcome,
    UiAffordances,
)
from collage_studio.errors import CapacityReachedError
from collage_studio.services.alerts import Alerts, Navigator
from collage_studio.services.composition import (
    CollageView,
    CompositionPipeline,
    Compositor,
)
from collage_studio.services.intake import PhotoPicker, PhotoSelection, SelectionIntake
from collage_studio.services.saving import CollageRepository, SavePipeline
from collage_studio.services.scheduling import AsyncioScheduler, Scheduler
from collage_studio.services.scope import SubscriptionScope
from collage_studio.services.state import StateCell
from collage_studio.services.titles import TitleController

_logger = logging.getLogger(__name__)


@dataclass
class CollageSession:
    """One collage screen: selection state plus its derived pipelines."""

    compositor: Compositor
    repository: CollageRepository
    view: CollageView
    picker: PhotoPicker
    alerts: Alerts
    navigator: Navigator
    scheduler: Scheduler = field(default_factory=AsyncioScheduler)
    canvas_size: tuple[int, int] = (600, 400)
    capacity: int = MAX_PHOTOS
    title_revert_delay_seconds: float = 2.0
    strict: bool = False
    state: StateCell[PhotoList] = field(init=False)
    scope: SubscriptionScope = field(init=False)
    titles: TitleController = field(init=False)
    composition: CompositionPipeline = field(init=False)
    intake: SelectionIntake = field(init=False)
    saving: SavePipeline = field(init=False)

    def __post_init__(self) -> None:
        self.state = StateCell(())
        self.scope = SubscriptionScope(strict=self.strict)
        self.titles = TitleController(self.view)
        self.composition = CompositionPipeline(
            state=self.state,
            compositor=self.compositor,
            view=self.view,
            titles=self.titles,
            canvas_size=self.canvas_size,
            capacity=self.capacity,
        )
        self.intake = SelectionIntake(
            state=self.state,
            picker=self.picker,
            alerts=self.alerts,
            navigator=self.navigator,
            titles=self.titles,
            scheduler=self.scheduler,
            scope=self.scope,
            capacity=self.capacity,
            revert_delay_seconds=self.title_revert_delay_seconds,
        )
        self.saving = SavePipeline(
            state=self.state,
            composition=self.composition,
            repository=self.repository,
            alerts=self.alerts,
            scope=self.scope,
            strict=self.strict,
        )

    @property
    def photos(self) -> PhotoList:
        """Return the currently selected photos."""
        return self.state.value

    @property
    def affordances(self) -> UiAffordances:
        """Return the control state for the current photos."""
        return UiAffordances.from_photos(self.state.value, capacity=self.capacity)

    @property
    def preview(self) -> CompositionResult | None:
        """Return the latest composed preview, if rendered."""
        return self.composition.latest

    def start(self) -> None:
        """Render the initial empty collage and follow selection changes."""
        if not self.scope.ensure_open():
            _logger.debug("Start requested after close; ignoring")
            return
        self.scope.add(self.composition.connect())

    def add_photos(self) -> PhotoSelection | None:
        """Open the photo picker unless the collage is already full."""
        if not self.scope.ensure_open():
            _logger.debug("Add requested after close; ignoring")
            return None
        if not self.affordances.add_enabled:
            if self.strict:
                raise CapacityReachedError(
                    f"Collage already has {self.capacity} photos"
                )
            _logger.debug("Add requested with a full collage; ignoring")
            return None
        return self.intake.begin()

    def clear(self) -> None:
        """Remove every selected photo."""
        self.state.set(())

    def save(self) -> "asyncio.Task[SaveOutcome | None] | None":
        """Persist the current preview; see SavePipeline.trigger."""
        return self.saving.trigger()

    def close(self) -> None:
        """Release every registration held by the session."""
        self.scope.release()
