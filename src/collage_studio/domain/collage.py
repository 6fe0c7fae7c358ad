"""Domain models for a collage editing session."""

from dataclasses import dataclass
from typing import TypeAlias

from PIL import Image

MAX_PHOTOS = 6

Photo: TypeAlias = Image.Image
PhotoList: TypeAlias = tuple[Photo, ...]


@dataclass(frozen=True)
class CompositionResult:
    """Composed preview image for the current photo list."""

    image: Image.Image
    photo_count: int

    @property
    def is_empty(self) -> bool:
        """Return True when the preview was composed from no photos."""
        return self.photo_count == 0


@dataclass(frozen=True)
class UiAffordances:
    """Enable flags and title derived from the selected photos."""

    save_enabled: bool
    clear_enabled: bool
    add_enabled: bool
    title_text: str

    @classmethod
    def from_photos(
        cls, photos: PhotoList, capacity: int = MAX_PHOTOS
    ) -> "UiAffordances":
        """Derive affordances from the current photo list."""
        count = len(photos)
        return cls(
            save_enabled=count > 0 and count % 2 == 0,
            clear_enabled=count > 0,
            add_enabled=count < capacity,
            title_text=default_title(count),
        )


def default_title(count: int) -> str:
    """Return the screen title for a photo count."""
    return f"{count} photos" if count > 0 else "Collage"


def selection_title(count: int) -> str:
    """Return the transient title shown while photos are being picked."""
    return f"Selected {count} photos"


@dataclass(frozen=True)
class SaveSuccess:
    """Persist completed with a stored collage id."""

    id: str


@dataclass(frozen=True)
class SaveFailure:
    """Persist failed with a user-facing reason."""

    reason: str


SaveOutcome: TypeAlias = SaveSuccess | SaveFailure
