"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from canvas_builder.adapters.image_fetcher import HttpxImageFetcher
from canvas_builder.adapters.pillow_raster import PillowRasterRenderer
from canvas_builder.adapters.reportlab_document import ReportlabDocument
from canvas_builder.config import Settings
from canvas_builder.services.drawing import DrawingService
from canvas_builder.services.export import EXPORT_AUTHOR, ExportService, PdfDocument
from canvas_builder.services.images import ImageResolver
from canvas_builder.services.sessions import InMemorySessionStore, SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_store: SessionStore
    image_resolver: ImageResolver
    drawing_service: DrawingService
    export_service: ExportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    raster_renderer = PillowRasterRenderer()
    session_store = InMemorySessionStore(
        max_sessions=resolved_settings.max_sessions,
        ttl_seconds=resolved_settings.session_ttl_seconds,
        preview_factory=(
            raster_renderer.new_canvas if resolved_settings.render_previews else None
        ),
    )
    image_fetcher = HttpxImageFetcher.create(
        timeout_seconds=resolved_settings.image_fetch_timeout_seconds
    )
    image_resolver = ImageResolver(image_fetcher)

    def document_factory(width: int, height: int, title: str) -> PdfDocument:
        return ReportlabDocument(
            width,
            height,
            title=title,
            author=EXPORT_AUTHOR,
            compress=resolved_settings.pdf_compress,
            invariant=resolved_settings.pdf_invariant,
        )

    drawing_service = DrawingService(
        store=session_store,
        image_resolver=image_resolver,
        raster_renderer=raster_renderer,
    )
    export_service = ExportService(
        store=session_store,
        image_resolver=image_resolver,
        document_factory=document_factory,
    )

    async def close_resources() -> None:
        await image_fetcher.close()

    return AppContainer(
        settings=resolved_settings,
        session_store=session_store,
        image_resolver=image_resolver,
        drawing_service=drawing_service,
        export_service=export_service,
        close_resources=close_resources,
    )
