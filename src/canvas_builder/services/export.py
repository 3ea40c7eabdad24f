"""Replay of a scene's command log into a PDF document."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from canvas_builder.domain.commands import (
    CircleCommand,
    Command,
    ImageCommand,
    RectangleCommand,
    TextCommand,
)
from canvas_builder.domain.errors import CanvasError, ExportFailed
from canvas_builder.domain.fonts import pdf_font_for_family
from canvas_builder.services.images import ImageResolver
from canvas_builder.services.sessions import SessionStore

_logger = logging.getLogger(__name__)

EXPORT_AUTHOR = "Canvas Builder API"


class PdfDocument(Protocol):
    """Page-oriented vector writer with top-left origin coordinates."""

    def draw_rectangle(
        self, x: float, y: float, width: float, height: float, color: str
    ) -> None:
        """Fill a rectangle."""

    def draw_circle(self, x: float, y: float, radius: float, color: str) -> None:
        """Fill a circle centered at (x, y)."""

    def draw_text(  # noqa: PLR0913
        self,
        text: str,
        x: float,
        y: float,
        font_name: str,
        font_size: float,
        color: str,
    ) -> None:
        """Draw a text run with its baseline at (x, y)."""

    def draw_image(
        self, content: bytes, x: float, y: float, width: float, height: float
    ) -> None:
        """Place image bytes scaled into the given box."""

    def finish(self) -> bytes:
        """Finalize the page and return the document bytes."""


DocumentFactory = Callable[[int, int, str], PdfDocument]


@dataclass
class ExportService:
    """Build a PDF from the full command log of a session."""

    store: SessionStore
    image_resolver: ImageResolver
    document_factory: DocumentFactory

    async def export(self, session_id: str) -> bytes:
        """Replay every recorded command, oldest first, into a new document."""
        session = self.store.get(session_id)
        commands = session.snapshot()
        scene = session.scene
        try:
            document = self.document_factory(
                scene.width, scene.height, f"Canvas Export {session_id}"
            )
            for index, command in enumerate(commands):
                await self._emit(document, command, session_id, index)
            pdf = document.finish()
        except CanvasError:
            raise
        except Exception as exc:
            _logger.exception("PDF generation failed: id=%s", session_id)
            raise ExportFailed() from exc
        _logger.info(
            "Canvas exported: id=%s commands=%s bytes=%s",
            session_id,
            len(commands),
            len(pdf),
        )
        return pdf

    async def _emit(
        self, document: PdfDocument, command: Command, session_id: str, index: int
    ) -> None:
        if isinstance(command, RectangleCommand):
            document.draw_rectangle(
                command.x, command.y, command.width, command.height, command.color
            )
        elif isinstance(command, CircleCommand):
            document.draw_circle(command.x, command.y, command.radius, command.color)
        elif isinstance(command, TextCommand):
            document.draw_text(
                command.text,
                command.x,
                command.y,
                pdf_font_for_family(command.font_family),
                command.font_size,
                command.color,
            )
        elif isinstance(command, ImageCommand):
            await self._emit_image(document, command, session_id, index)
        else:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

    async def _emit_image(
        self,
        document: PdfDocument,
        command: ImageCommand,
        session_id: str,
        index: int,
    ) -> None:
        # One broken image never fails the whole export.
        try:
            content = await self.image_resolver.load(command.source)
            document.draw_image(
                content, command.x, command.y, command.width, command.height
            )
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Skipping image in PDF export: id=%s index=%s error=%s",
                session_id,
                index,
                exc,
            )
