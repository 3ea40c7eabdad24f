"""Image resolution for draw and export paths."""

import base64
import binascii
import io
import logging
from dataclasses import dataclass

import httpx
from PIL import Image, UnidentifiedImageError

from canvas_builder.adapters.image_fetcher import ImageFetcher
from canvas_builder.domain.errors import DecodeError, ExportImageFetchError
from canvas_builder.domain.images import DecodedImage, InlineSource, RemoteSource

_logger = logging.getLogger(__name__)


@dataclass
class ImageResolver:
    """Turn uploads and URLs into stable, re-fetchable image sources."""

    fetcher: ImageFetcher

    def resolve_upload(self, data: bytes, mime_type: str | None = None) -> DecodedImage:
        """Decode uploaded bytes and keep them inline."""
        width, height, detected_mime = _decode(data)
        source = InlineSource(mime_type=mime_type or detected_mime, data=data)
        return DecodedImage(
            pixel_width=width, pixel_height=height, source=source, content=data
        )

    async def resolve_url(self, url: str) -> DecodedImage:
        """Fetch and decode a URL, storing only the URL itself."""
        if url.startswith("data:"):
            mime_type, data = parse_data_url(url)
            return self.resolve_upload(data, mime_type)
        try:
            data = await self.fetcher.fetch(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            _logger.warning("Image fetch failed: url=%s error=%s", url, exc)
            raise DecodeError(f"Failed to fetch image from {url}.") from exc
        width, height, _ = _decode(data)
        return DecodedImage(
            pixel_width=width,
            pixel_height=height,
            source=RemoteSource(url=url),
            content=data,
        )

    async def load(self, source: InlineSource | RemoteSource) -> bytes:
        """Re-derive image bytes from a stored source."""
        if isinstance(source, InlineSource):
            return source.data
        try:
            return await self.fetcher.fetch(source.url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ExportImageFetchError(
                f"Failed to re-fetch image from {source.url}."
            ) from exc


def parse_data_url(url: str) -> tuple[str | None, bytes]:
    """Split a base64 data URL into its MIME type and payload."""
    header, _, payload = url.partition(",")
    if not header.startswith("data:") or ";base64" not in header:
        raise DecodeError("Only base64 data URLs are supported.")
    mime_type = header[len("data:") :].split(";", maxsplit=1)[0] or None
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Image data URL is not valid base64.") from exc


def _decode(data: bytes) -> tuple[int, int, str]:
    """Return pixel size and MIME type, raising DecodeError on bad bytes."""
    if not data:
        raise DecodeError("Image payload is empty.")
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            mime_type = Image.MIME.get(image.format or "", "application/octet-stream")
            return image.width, image.height, mime_type
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise DecodeError("Image bytes could not be decoded.") from exc
