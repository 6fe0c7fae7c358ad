"""Dependency container wiring for the application."""

from dataclasses import dataclass, field

from supabase import create_client

from collage_studio.adapters.pillow_compositor import PillowCompositor
from collage_studio.adapters.supabase_collage_repository import (
    SupabaseCollageRepository,
)
from collage_studio.app_logging import configure_logging
from collage_studio.config import Settings
from collage_studio.services.alerts import Alerts, Navigator
from collage_studio.services.composition import CollageView, Compositor
from collage_studio.services.intake import PhotoPicker
from collage_studio.services.saving import CollageRepository
from collage_studio.services.scheduling import AsyncioScheduler, Scheduler
from collage_studio.services.session import CollageSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    compositor: Compositor
    collage_repository: CollageRepository
    sessions: list[CollageSession] = field(default_factory=list)

    def create_session(  # noqa: PLR0913
        self,
        view: CollageView,
        picker: PhotoPicker,
        alerts: Alerts,
        navigator: Navigator,
        scheduler: Scheduler | None = None,
    ) -> CollageSession:
        """Create and start a collage session for a screen."""
        session = CollageSession(
            compositor=self.compositor,
            repository=self.collage_repository,
            view=view,
            picker=picker,
            alerts=alerts,
            navigator=navigator,
            scheduler=scheduler or AsyncioScheduler(),
            canvas_size=self.settings.canvas_size,
            capacity=self.settings.max_photos,
            title_revert_delay_seconds=self.settings.title_revert_delay_seconds,
            strict=self.settings.is_strict(),
        )
        session.start()
        self.sessions.append(session)
        return session

    def close_resources(self) -> None:
        """Close every session created by this container."""
        sessions, self.sessions = self.sessions, []
        for session in sessions:
            session.close()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    collage_repository = SupabaseCollageRepository(
        client=supabase_client,
        bucket=resolved_settings.collage_bucket,
        table=resolved_settings.collage_table,
    )
    return AppContainer(
        settings=resolved_settings,
        compositor=PillowCompositor(),
        collage_repository=collage_repository,
    )
