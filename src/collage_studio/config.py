"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_STRICT_ENVIRONMENTS = {"local", "test"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    collage_bucket: str = "collages"
    collage_table: str = "collages"
    canvas_width: int = 600
    canvas_height: int = 400
    max_photos: int = 6
    title_revert_delay_seconds: float = 2.0
    strict_mode: bool | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Return the collage canvas size as (width, height)."""
        return self.canvas_width, self.canvas_height

    def is_strict(self) -> bool:
        """Return whether session misuse should raise instead of being ignored."""
        if self.strict_mode is not None:
            return self.strict_mode
        return self.environment in _STRICT_ENVIRONMENTS
