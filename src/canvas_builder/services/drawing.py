"""Append path for draw requests against a canvas session."""

import logging
from dataclasses import dataclass
from typing import Protocol

from PIL import Image

from canvas_builder.domain.commands import (
    CircleCommand,
    Command,
    ImageCommand,
    RectangleCommand,
    TextCommand,
)
from canvas_builder.domain.errors import MissingImageSource
from canvas_builder.domain.scenes import CanvasSession
from canvas_builder.services.commands import (
    build_circle,
    build_image,
    build_rectangle,
    build_text,
)
from canvas_builder.services.images import ImageResolver
from canvas_builder.services.sessions import SessionStore

_logger = logging.getLogger(__name__)


class RasterRenderer(Protocol):
    """Applies commands to a mutable pixel buffer."""

    def new_canvas(self, width: int, height: int) -> Image.Image:
        """Create a blank canvas."""

    def apply(
        self,
        canvas: Image.Image,
        command: Command,
        image_content: bytes | None = None,
    ) -> None:
        """Paint one command over the canvas."""

    def render(
        self,
        width: int,
        height: int,
        commands: tuple[Command, ...],
        images: dict[int, bytes] | None = None,
    ) -> Image.Image:
        """Replay a log onto a fresh canvas."""

    def to_png(self, canvas: Image.Image) -> bytes:
        """Encode a canvas as PNG."""


@dataclass(frozen=True)
class UploadedImage:
    """Image bytes received with a draw request."""

    data: bytes
    mime_type: str | None = None


@dataclass
class DrawingService:
    """Validate, resolve and record draw commands."""

    store: SessionStore
    image_resolver: ImageResolver
    raster_renderer: RasterRenderer

    def draw_rectangle(  # noqa: PLR0913
        self,
        session_id: str,
        x: float | None,
        y: float | None,
        width: float | None,
        height: float | None,
        color: str | None = None,
    ) -> RectangleCommand:
        """Record a filled rectangle."""
        session = self.store.get(session_id)
        command = build_rectangle(x, y, width, height, color)
        self._record(session, command)
        return command

    def draw_circle(
        self,
        session_id: str,
        x: float | None,
        y: float | None,
        radius: float | None,
        color: str | None = None,
    ) -> CircleCommand:
        """Record a filled circle."""
        session = self.store.get(session_id)
        command = build_circle(x, y, radius, color)
        self._record(session, command)
        return command

    def draw_text(  # noqa: PLR0913
        self,
        session_id: str,
        text: str | None,
        x: float | None,
        y: float | None,
        font_size: float | None = None,
        font_family: str | None = None,
        color: str | None = None,
    ) -> TextCommand:
        """Record a text run."""
        session = self.store.get(session_id)
        command = build_text(text, x, y, font_size, font_family, color)
        self._record(session, command)
        return command

    async def draw_image(  # noqa: PLR0913
        self,
        session_id: str,
        x: float | None,
        y: float | None,
        width: int | None = None,
        height: int | None = None,
        upload: UploadedImage | None = None,
        image_url: str | None = None,
    ) -> ImageCommand:
        """Resolve an image source and record it.

        Exactly one of ``upload`` or ``image_url`` must be given. Network I/O
        happens before the session lock is taken.
        """
        session = self.store.get(session_id)
        has_upload = upload is not None and bool(upload.data)
        has_url = bool(image_url and image_url.strip())
        if has_upload == has_url:
            raise MissingImageSource()
        if has_upload:
            image = self.image_resolver.resolve_upload(upload.data, upload.mime_type)
        else:
            image = await self.image_resolver.resolve_url(image_url.strip())
        command = build_image(image, x, y, width, height)
        # The session may have been evicted while the fetch was in flight.
        session = self.store.get(session_id)
        self._record(session, command, image.content)
        return command

    def history(self, session_id: str) -> tuple[Command, ...]:
        """Return the recorded command log."""
        return self.store.get(session_id).snapshot()

    async def preview_png(self, session_id: str) -> bytes:
        """Return the session's raster preview as PNG.

        Sessions without a live preview are rendered by replaying the log.
        """
        session = self.store.get(session_id)
        if session.preview is not None:
            with session.lock:
                canvas = session.preview.copy()
            return self.raster_renderer.to_png(canvas)
        commands = session.snapshot()
        images: dict[int, bytes] = {}
        for index, command in enumerate(commands):
            if not isinstance(command, ImageCommand):
                continue
            try:
                images[index] = await self.image_resolver.load(command.source)
            except Exception as exc:  # noqa: BLE001
                _logger.warning(
                    "Skipping image in preview: id=%s index=%s error=%s",
                    session_id,
                    index,
                    exc,
                )
        canvas = self.raster_renderer.render(
            session.scene.width, session.scene.height, commands, images
        )
        return self.raster_renderer.to_png(canvas)

    def _record(
        self,
        session: CanvasSession,
        command: Command,
        image_content: bytes | None = None,
    ) -> None:
        with session.lock:
            length = session.scene.append(command)
            if session.preview is None:
                return
            try:
                self.raster_renderer.apply(session.preview, command, image_content)
            except Exception:
                _logger.exception(
                    "Raster preview failed after append: id=%s index=%s",
                    session.id,
                    length - 1,
                )
