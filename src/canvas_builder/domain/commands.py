"""Fully resolved draw commands recorded in a scene's log."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from canvas_builder.domain.images import ImageSource

DEFAULT_COLOR = "#000000"
DEFAULT_FONT_SIZE = 20.0
DEFAULT_FONT_FAMILY = "Arial"


class RectangleCommand(BaseModel):
    """Filled axis-aligned rectangle anchored at its top-left corner."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    type: Literal["rectangle"] = "rectangle"
    x: float
    y: float
    width: float
    height: float
    color: str


class CircleCommand(BaseModel):
    """Filled circle centered at (x, y)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    type: Literal["circle"] = "circle"
    x: float
    y: float
    radius: float = Field(ge=0)
    color: str


class TextCommand(BaseModel):
    """Single line of text whose baseline starts at (x, y)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    type: Literal["text"] = "text"
    text: str
    x: float
    y: float
    font_size: float = Field(gt=0)
    font_family: str
    color: str


class ImageCommand(BaseModel):
    """Image placed at (x, y) and scaled to width x height pixels."""

    model_config = ConfigDict(
        frozen=True, allow_inf_nan=False, ser_json_bytes="base64"
    )

    type: Literal["image"] = "image"
    source: ImageSource
    x: float
    y: float
    width: int = Field(gt=0)
    height: int = Field(gt=0)


Command = Annotated[
    RectangleCommand | CircleCommand | TextCommand | ImageCommand,
    Field(discriminator="type"),
]
