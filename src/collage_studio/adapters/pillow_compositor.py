"""Pillow-based collage compositor."""

import math
from dataclasses import dataclass

from PIL import Image, ImageOps

from collage_studio.domain.collage import PhotoList
from collage_studio.services.composition import Compositor


@dataclass
class PillowCompositor(Compositor):
    """Lays photos out in a grid of one or two rows on a plain canvas."""

    background: tuple[int, int, int] = (255, 255, 255)

    def composite(self, photos: PhotoList, size: tuple[int, int]) -> Image.Image:
        """Compose photos into one image; an empty list gives a blank canvas."""
        canvas = Image.new("RGB", size, self.background)
        if not photos:
            return canvas

        rows, columns = _grid_shape(len(photos))
        width, height = size
        tile_size = (max(1, round(width / columns)), max(1, round(height / rows)))
        for index, photo in enumerate(photos):
            tile = ImageOps.fit(photo.convert("RGB"), tile_size)
            origin = (
                (index % columns) * tile_size[0],
                (index // columns) * tile_size[1],
            )
            canvas.paste(tile, origin)
        return canvas


def _grid_shape(count: int) -> tuple[int, int]:
    """Return (rows, columns) for a photo count."""
    rows = 1 if count < 3 else 2
    return rows, math.ceil(count / rows)
