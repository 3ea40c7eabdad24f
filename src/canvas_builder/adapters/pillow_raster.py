"""Raster renderer applying commands to a Pillow image."""

import io
from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from canvas_builder.domain.commands import (
    CircleCommand,
    Command,
    ImageCommand,
    RectangleCommand,
    TextCommand,
)
from canvas_builder.domain.fonts import RASTER_FONT_FILES, FontFace, face_for_family

BACKGROUND = "#FFFFFF"

RasterFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


class PillowRasterRenderer:
    """Mutates an RGB canvas one command at a time."""

    def new_canvas(self, width: int, height: int) -> Image.Image:
        """Create a white canvas of the given pixel size."""
        return Image.new("RGB", (width, height), BACKGROUND)

    def apply(
        self,
        canvas: Image.Image,
        command: Command,
        image_content: bytes | None = None,
    ) -> None:
        """Paint a single command over the current canvas contents."""
        if isinstance(command, RectangleCommand):
            _draw_rectangle(canvas, command)
        elif isinstance(command, CircleCommand):
            _draw_circle(canvas, command)
        elif isinstance(command, TextCommand):
            _draw_text(canvas, command)
        elif isinstance(command, ImageCommand):
            if image_content is None:
                raise ValueError("Image commands need decoded image content.")
            _draw_image(canvas, command, image_content)
        else:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

    def render(
        self,
        width: int,
        height: int,
        commands: tuple[Command, ...],
        images: dict[int, bytes] | None = None,
    ) -> Image.Image:
        """Replay a whole log onto a fresh canvas.

        ``images`` maps a command's index to its bytes; image commands without
        an entry are skipped.
        """
        canvas = self.new_canvas(width, height)
        for index, command in enumerate(commands):
            content = (images or {}).get(index)
            if isinstance(command, ImageCommand) and content is None:
                continue
            self.apply(canvas, command, content)
        return canvas

    @staticmethod
    def to_png(canvas: Image.Image) -> bytes:
        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG")
        return buffer.getvalue()


def _draw_rectangle(canvas: Image.Image, command: RectangleCommand) -> None:
    # Negative sizes extend left/up from the anchor, like an HTML canvas.
    left = min(command.x, command.x + command.width)
    right = max(command.x, command.x + command.width)
    top = min(command.y, command.y + command.height)
    bottom = max(command.y, command.y + command.height)
    if right - left <= 0 or bottom - top <= 0:
        return
    # Pillow boxes are inclusive; sub-pixel sizes still cover one pixel.
    x0, y0 = round(left), round(top)
    x1 = max(x0, round(right) - 1)
    y1 = max(y0, round(bottom) - 1)
    ImageDraw.Draw(canvas).rectangle([x0, y0, x1, y1], fill=command.color)


def _draw_circle(canvas: Image.Image, command: CircleCommand) -> None:
    if command.radius <= 0:
        return
    x, y, radius = command.x, command.y, command.radius
    ImageDraw.Draw(canvas).ellipse(
        [x - radius, y - radius, x + radius, y + radius],
        fill=command.color,
    )


def _draw_text(canvas: Image.Image, command: TextCommand) -> None:
    if not command.text:
        return
    size = max(1, round(command.font_size))
    font = _load_font(face_for_family(command.font_family), size)
    draw = ImageDraw.Draw(canvas)
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text(
            (command.x, command.y),
            command.text,
            fill=command.color,
            font=font,
            anchor="ls",
        )
        return
    # Bitmap fonts cannot anchor on the baseline.
    draw.text(
        (command.x, command.y - size), command.text, fill=command.color, font=font
    )


def _draw_image(canvas: Image.Image, command: ImageCommand, content: bytes) -> None:
    with Image.open(io.BytesIO(content)) as source:
        layer = source.convert("RGBA").resize(
            (command.width, command.height), Image.Resampling.LANCZOS
        )
    canvas.paste(layer, (round(command.x), round(command.y)), layer)


@lru_cache(maxsize=64)
def _load_font(face: FontFace, size: int) -> RasterFont:
    for name in RASTER_FONT_FILES[face]:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)
