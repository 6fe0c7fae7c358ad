"""Preview composition and control state derived from the selection."""

from dataclasses import dataclass
from typing import Protocol

from PIL import Image

from collage_studio.domain.collage import (
    MAX_PHOTOS,
    CompositionResult,
    PhotoList,
    UiAffordances,
)
from collage_studio.services.state import StateCell
from collage_studio.services.streams import SubscriptionHandle
from collage_studio.services.titles import TitleController, TitleSink


class Compositor(Protocol):
    """Interface for compositing photos into a single image."""

    def composite(self, photos: PhotoList, size: tuple[int, int]) -> Image.Image:
        """Return one image of the given size; blank for no photos."""


class CollageView(TitleSink, Protocol):
    """Interface for the screen showing the collage."""

    def apply_affordances(self, affordances: UiAffordances) -> None:
        """Enable or disable the save, clear and add controls."""

    def show_preview(self, result: CompositionResult) -> None:
        """Display the composed preview."""


@dataclass
class CompositionPipeline:
    """Keeps the preview and controls in sync with the selected photos."""

    state: StateCell[PhotoList]
    compositor: Compositor
    view: CollageView
    titles: TitleController
    canvas_size: tuple[int, int]
    capacity: int = MAX_PHOTOS
    latest: CompositionResult | None = None

    def connect(self) -> SubscriptionHandle:
        """Start rendering every selection change."""
        return self.state.subscribe(self._render)

    def _render(self, photos: PhotoList) -> None:
        # Controls first so they never wait on compositing.
        affordances = UiAffordances.from_photos(photos, capacity=self.capacity)
        self.view.apply_affordances(affordances)
        self.titles.set_title(affordances.title_text)

        image = self.compositor.composite(photos, self.canvas_size)
        self.latest = CompositionResult(image=image, photo_count=len(photos))
        self.view.show_preview(self.latest)
