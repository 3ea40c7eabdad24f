"""Pydantic models for canvas API payloads."""

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InitializeRequest(_ApiModel):
    """Canvas initialization payload."""

    width: int | None = None
    height: int | None = None


class Dimensions(_ApiModel):
    """Canvas size in pixels."""

    width: int
    height: int


class InitializeResponse(_ApiModel):
    """Canvas initialization result."""

    message: str
    id: str
    dimensions: Dimensions


class DrawResponse(_ApiModel):
    """Acknowledgement for a recorded draw command."""

    status: str = "ok"
    message: str


class DrawRectangleRequest(_ApiModel):
    """Rectangle draw payload."""

    id: str | None = None
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    color: str | None = None


class DrawCircleRequest(_ApiModel):
    """Circle draw payload."""

    id: str | None = None
    x: float | None = None
    y: float | None = None
    radius: float | None = None
    color: str | None = None


class DrawTextRequest(_ApiModel):
    """Text draw payload."""

    id: str | None = None
    text: str | None = None
    x: float | None = None
    y: float | None = None
    font_size: float | None = Field(default=None, alias="fontSize")
    font_family: str | None = Field(default=None, alias="fontFamily")
    color: str | None = None


class DrawImageRequest(_ApiModel):
    """Image draw fields shared by JSON and form submissions."""

    id: str | None = None
    x: float | None = None
    y: float | None = None
    width: int | None = None
    height: int | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
