"""Default resolution for draw requests.

Every draw request passes through one of the ``build_*`` functions before it
is recorded. They substitute defaults and normalize values so that the raster
and PDF renderers only ever see fully resolved commands.
"""

import math
from typing import TypeVar

from PIL import ImageColor
from pydantic import BaseModel, ValidationError

from canvas_builder.domain.commands import (
    DEFAULT_COLOR,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    CircleCommand,
    ImageCommand,
    RectangleCommand,
    TextCommand,
)
from canvas_builder.domain.errors import InvalidDrawParameters
from canvas_builder.domain.images import DecodedImage

_CommandT = TypeVar("_CommandT", bound=BaseModel)


def build_rectangle(
    x: float | None,
    y: float | None,
    width: float | None,
    height: float | None,
    color: str | None = None,
) -> RectangleCommand:
    """Resolve a rectangle request."""
    return _construct(
        RectangleCommand,
        x=_coordinate(x, "x"),
        y=_coordinate(y, "y"),
        width=_coordinate(width, "width"),
        height=_coordinate(height, "height"),
        color=normalize_color(color),
    )


def build_circle(
    x: float | None,
    y: float | None,
    radius: float | None,
    color: str | None = None,
) -> CircleCommand:
    """Resolve a circle request."""
    resolved_radius = _coordinate(radius, "radius")
    if resolved_radius < 0:
        raise InvalidDrawParameters("Circle radius must not be negative.")
    return _construct(
        CircleCommand,
        x=_coordinate(x, "x"),
        y=_coordinate(y, "y"),
        radius=resolved_radius,
        color=normalize_color(color),
    )


def build_text(  # noqa: PLR0913
    text: str | None,
    x: float | None,
    y: float | None,
    font_size: float | None = None,
    font_family: str | None = None,
    color: str | None = None,
) -> TextCommand:
    """Resolve a text request."""
    if text is None:
        raise InvalidDrawParameters("Text content is required.")
    size = DEFAULT_FONT_SIZE
    if font_size is not None:
        size = _coordinate(font_size, "fontSize")
    if size <= 0:
        raise InvalidDrawParameters("Font size must be positive.")
    family = (font_family or "").strip() or DEFAULT_FONT_FAMILY
    return _construct(
        TextCommand,
        text=text,
        x=_coordinate(x, "x"),
        y=_coordinate(y, "y"),
        font_size=size,
        font_family=family,
        color=normalize_color(color),
    )


def build_image(
    image: DecodedImage,
    x: float | None,
    y: float | None,
    width: int | None = None,
    height: int | None = None,
) -> ImageCommand:
    """Resolve an image request, baking in intrinsic size where omitted."""
    resolved_width = _size(width, image.pixel_width, "width")
    resolved_height = _size(height, image.pixel_height, "height")
    if resolved_width <= 0 or resolved_height <= 0:
        raise InvalidDrawParameters("Image width and height must be positive.")
    return _construct(
        ImageCommand,
        source=image.source,
        x=_coordinate(x, "x"),
        y=_coordinate(y, "y"),
        width=resolved_width,
        height=resolved_height,
    )


def normalize_color(color: str | None) -> str:
    """Return the color as upper-case #RRGGBB.

    Accepts hex forms and CSS color names; alpha components are dropped.
    """
    if color is None or not color.strip():
        return DEFAULT_COLOR
    try:
        rgb = ImageColor.getrgb(color.strip())
    except ValueError as exc:
        raise InvalidDrawParameters(f"Unsupported color: {color!r}.") from exc
    red, green, blue = rgb[:3]
    return f"#{red:02X}{green:02X}{blue:02X}"


def _coordinate(value: float | None, name: str) -> float:
    if value is None:
        return 0.0
    resolved = float(value)
    if not math.isfinite(resolved):
        raise InvalidDrawParameters(f"{name} must be a finite number.")
    return resolved


def _size(value: int | None, intrinsic: int, name: str) -> int:
    # Zero or missing means the image's own pixel size.
    if not value:
        return intrinsic
    return int(_coordinate(value, name))


def _construct(model: type[_CommandT], **fields: object) -> _CommandT:
    try:
        return model(**fields)
    except ValidationError as exc:
        message = exc.errors()[0].get("msg", "invalid value")
        raise InvalidDrawParameters(f"Invalid {model.__name__}: {message}.") from exc
