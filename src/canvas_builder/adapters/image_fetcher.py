"""Remote image download client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class ImageFetcher(Protocol):
    """Interface for downloading remote images."""

    async def fetch(self, url: str) -> bytes:
        """Download the resource at url and return its bytes."""


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Image fetcher using httpx."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(cls, timeout_seconds: float = 10.0) -> "HttpxImageFetcher":
        """Create an image fetcher with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout_seconds=timeout_seconds,
        )

    async def fetch(self, url: str) -> bytes:
        """Download image bytes, raising on HTTP errors."""
        response = await self.http_client.get(url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
