"""Image source references stored inside image commands."""

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class InlineSource(BaseModel):
    """Uploaded image bytes kept verbatim in the command log."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64")

    kind: Literal["inline"] = "inline"
    mime_type: str
    data: bytes


class RemoteSource(BaseModel):
    """Remote image locator, re-fetched whenever pixels are needed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["remote"] = "remote"
    url: str


ImageSource = Annotated[InlineSource | RemoteSource, Field(discriminator="kind")]


@dataclass(frozen=True)
class DecodedImage:
    """Result of resolving an inbound image reference."""

    pixel_width: int
    pixel_height: int
    source: InlineSource | RemoteSource
    content: bytes
