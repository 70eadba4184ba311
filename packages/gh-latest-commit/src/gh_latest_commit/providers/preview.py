from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from ..errors import PreviewUnavailable

logger = logging.getLogger(__name__)


class PreviewFetcher(Protocol):
    async def fetch_image(self, commit_url: str) -> str:
        ...


def _image_url(body: Any) -> str | None:
    data = body.get("data") if isinstance(body, dict) else None
    image = data.get("image") if isinstance(data, dict) else None
    if isinstance(image, dict):
        image = image.get("url")
    if isinstance(image, str) and image:
        return image
    return None


class PreviewClient:
    """Resolve a preview image for a URL through a link-preview service."""

    def __init__(
        self,
        service_url: str = "https://api.microlink.io",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.service_url = service_url
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": "gh-latest-commit"},
        )

    async def __aenter__(self) -> "PreviewClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def fetch_image(self, commit_url: str) -> str:
        logger.info("Fetching preview image for %s", commit_url)
        try:
            response = await self._client.get(self.service_url, params={"url": commit_url})
        except httpx.HTTPError as exc:
            raise PreviewUnavailable(f"Preview request failed: {exc}") from exc
        if response.status_code != 200:
            raise PreviewUnavailable(
                f"Preview service returned HTTP {response.status_code} for {commit_url}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise PreviewUnavailable(f"Preview service returned invalid JSON: {exc}") from exc
        image = _image_url(body)
        if image is None:
            raise PreviewUnavailable(f"Preview response for {commit_url} has no data.image")
        return image
