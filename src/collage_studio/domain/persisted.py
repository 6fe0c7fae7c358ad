"""Models for stored collage metadata."""

from uuid import UUID

from pydantic import BaseModel, Field


class PersistedCollage(BaseModel):
    """Metadata row returned after a collage is stored."""

    id: UUID
    storage_path: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)
