"""Supabase-backed collage repository."""

import asyncio
import io
from dataclasses import dataclass
from uuid import uuid4

from PIL import Image
from supabase import Client

from collage_studio.domain.persisted import PersistedCollage
from collage_studio.services.saving import CollageRepository


@dataclass
class SupabaseCollageRepository(CollageRepository):
    """Stores collages in Supabase storage with a metadata row."""

    client: Client
    bucket: str = "collages"
    table: str = "collages"

    async def persist(self, image: Image.Image) -> str:
        """Upload the collage and return the id of its metadata row."""
        collage = await asyncio.to_thread(self._store, image)
        return str(collage.id)

    def _store(self, image: Image.Image) -> PersistedCollage:
        storage_path = f"{uuid4()}.png"
        self.client.storage.from_(self.bucket).upload(
            storage_path,
            _encode_png(image),
            {"content-type": "image/png"},
        )
        response = (
            self.client.table(self.table)
            .insert(
                {
                    "storage_path": storage_path,
                    "width": image.width,
                    "height": image.height,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record collage metadata")
        return PersistedCollage.model_validate(response.data[0])


def _encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
