"""Gallery data service client.

Fetches thumbnail records from the service's public ``/thumbnails`` endpoint
and maps them onto ``GalleryItem`` objects. No authentication and no retry:
the carousel makes a single attempt and leaves recovery to a page reload.
"""

from __future__ import annotations

import json
from os import getenv
from typing import Any

import aiohttp
from pydantic import ValidationError

from src.core.errors import ErrorCategory, GalleryLoadError, category_for_status
from src.core.gallery import GalleryItem
from src.core.logging import get_logger
from src.providers.schemas import ThumbnailsResponseSchema

logger = get_logger(__name__)

DEFAULT_API_BASE_URL = "https://api.padyai.co.in/api"


def _client_timeout() -> aiohttp.ClientTimeout:
    """No client-side timeout unless GALLERY_API_TIMEOUT_SECONDS is set."""
    raw = getenv("GALLERY_API_TIMEOUT_SECONDS")
    if not raw:
        return aiohttp.ClientTimeout(total=None)
    return aiohttp.ClientTimeout(total=float(raw))


class ThumbnailsProvider:
    """``GallerySource`` backed by the remote thumbnails API.

    Example:
        provider = ThumbnailsProvider()
        items = await provider.fetch_first_page(limit=20)
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: API root. Defaults to GALLERY_API_BASE_URL, then the
                production API.
            session: Optional shared session. When omitted a short-lived
                session is opened per request.
        """
        self.base_url = (
            base_url or getenv("GALLERY_API_BASE_URL") or DEFAULT_API_BASE_URL
        ).rstrip("/")
        self._session = session

    async def fetch_first_page(self, limit: int) -> list[GalleryItem]:
        """Fetch the first ``limit`` items."""
        return await self.fetch_page(page=1, limit=limit)

    async def fetch_page(self, page: int, limit: int) -> list[GalleryItem]:
        """Fetch one page of items in service order.

        Args:
            page: 1-based page number.
            limit: Page size.

        Returns:
            The page's items; empty if the service sent no thumbnails.

        Raises:
            GalleryLoadError: On network failure, a non-2xx status, or a body
                that is not the expected envelope.
        """
        url = f"{self.base_url}/thumbnails"
        params = {"page": str(page), "limit": str(limit)}

        logger.debug("thumbnails_request", url=url, page=page, limit=limit)

        try:
            if self._session is not None:
                status, payload = await self._get_json(self._session, url, params)
            else:
                async with aiohttp.ClientSession() as session:
                    status, payload = await self._get_json(session, url, params)
        except aiohttp.ClientError as ex:
            logger.error("thumbnails_network_error", error=str(ex))
            raise GalleryLoadError(
                str(ex) or "Network error while loading gallery",
                category=ErrorCategory.NETWORK,
                original_error=ex,
            ) from ex

        if not 200 <= status < 300:
            message = None
            if isinstance(payload, dict):
                message = payload.get("message")
            message = message or f"HTTP error! status: {status}"
            logger.error("thumbnails_http_error", status=status, message=message)
            raise GalleryLoadError(
                message,
                category=category_for_status(status),
                status=status,
            )

        try:
            envelope = ThumbnailsResponseSchema.model_validate(payload)
        except ValidationError as ex:
            logger.error("thumbnails_invalid_response", error=str(ex))
            raise GalleryLoadError(
                "Invalid response from gallery service",
                category=ErrorCategory.INVALID_RESPONSE,
                status=status,
                original_error=ex,
            ) from ex

        items = envelope.gallery_items()
        logger.info("thumbnails_fetched", count=len(items), page=page)
        return items

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: dict[str, str],
    ) -> tuple[int, Any]:
        async with session.get(
            url,
            params=params,
            headers={"Content-Type": "application/json"},
            timeout=_client_timeout(),
        ) as response:
            text = await response.text()
            try:
                payload = json.loads(text) if text else None
            except json.JSONDecodeError:
                payload = None
            if payload is None and 200 <= response.status < 300:
                raise GalleryLoadError(
                    "Invalid response from gallery service",
                    category=ErrorCategory.INVALID_RESPONSE,
                    status=response.status,
                )
            return response.status, payload
