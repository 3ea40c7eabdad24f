"""Single-page PDF writer backed by reportlab."""

import io

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


class ReportlabDocument:
    """PDF page using top-left origin coordinates, 1 px = 1 pt.

    reportlab measures y upwards from the bottom of the page; every public
    method takes canvas-style coordinates and converts them here.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str | None = None,
        author: str | None = None,
        compress: bool = True,
        invariant: bool = False,
    ) -> None:
        self.width = width
        self.height = height
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(width, height),
            pageCompression=1 if compress else 0,
            invariant=1 if invariant else 0,
        )
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)

    def draw_rectangle(
        self, x: float, y: float, width: float, height: float, color: str
    ) -> None:
        self._canvas.setFillColor(HexColor(color))
        self._canvas.rect(x, self._flip(y + height), width, height, stroke=0, fill=1)

    def draw_circle(self, x: float, y: float, radius: float, color: str) -> None:
        self._canvas.setFillColor(HexColor(color))
        self._canvas.circle(x, self._flip(y), radius, stroke=0, fill=1)

    def draw_text(  # noqa: PLR0913
        self,
        text: str,
        x: float,
        y: float,
        font_name: str,
        font_size: float,
        color: str,
    ) -> None:
        """Draw a text run whose baseline starts at (x, y)."""
        self._canvas.setFillColor(HexColor(color))
        self._canvas.setFont(font_name, font_size)
        self._canvas.drawString(x, self._flip(y), text)

    def draw_image(
        self, content: bytes, x: float, y: float, width: float, height: float
    ) -> None:
        reader = ImageReader(io.BytesIO(content))
        self._canvas.drawImage(
            reader,
            x,
            self._flip(y + height),
            width=width,
            height=height,
            preserveAspectRatio=False,
            mask="auto",
        )

    def finish(self) -> bytes:
        """Close the page and return the complete document."""
        self._canvas.showPage()
        self._canvas.save()
        return self._buffer.getvalue()

    def _flip(self, y: float) -> float:
        return self.height - y
