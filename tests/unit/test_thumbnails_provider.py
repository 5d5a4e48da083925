"""Unit tests for the thumbnails data service client.

Tests the ThumbnailsProvider implementation including:
- Successful response parsing and field mapping
- Empty and missing payloads
- HTTP error statuses and the service's error message
- Network error handling
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from src.core.errors import ErrorCategory, GalleryLoadError
from src.providers.schemas import ThumbnailSchema, ThumbnailsResponseSchema
from src.providers.thumbnails_provider import DEFAULT_API_BASE_URL, ThumbnailsProvider


def _thumbnail(n: int) -> dict[str, Any]:
    return {
        "_id": f"665f{n}",
        "title": f"Annual Day {n}",
        "description": "Stage performance",
        "originalImageUrl": f"https://cdn.example.com/original/{n}.jpg",
        "thumbnailUrl": f"https://cdn.example.com/thumb/{n}.jpg",
        "category": "events",
        "tags": ["stage", "annual"],
        "displayOrder": n,
        "isFeatured": n == 0,
        "createdAt": "2025-01-05T10:00:00.000Z",
        "thumbnailId": f"THUMB{n:03d}",
    }


def _mock_session(status: int, body: str) -> MagicMock:
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=body)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = MagicMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    mock_session.get = MagicMock(return_value=mock_response)
    return mock_session


class TestThumbnailSchema:
    """Tests for wire-to-model mapping."""

    def test_maps_thumbnail_to_primary_and_original_to_fallback(self) -> None:
        item = ThumbnailSchema.model_validate(_thumbnail(1)).to_gallery_item()
        assert item.id == "665f1"
        assert item.primary_source_url == "https://cdn.example.com/thumb/1.jpg"
        assert item.fallback_source_url == "https://cdn.example.com/original/1.jpg"
        assert item.external_reference_id == "THUMB001"
        assert item.display_order == 1
        assert item.tags == ("stage", "annual")

    def test_null_optional_fields_become_defaults(self) -> None:
        record = _thumbnail(3)
        for key in ("title", "description", "category", "createdAt", "thumbnailId", "tags"):
            record[key] = None
        item = ThumbnailSchema.model_validate(record).to_gallery_item()
        assert item.title == ""
        assert item.description == ""
        assert item.category == ""
        assert item.created_at == ""
        assert item.external_reference_id == ""
        assert item.tags == ()
        assert item.fallback_source_url == "https://cdn.example.com/original/3.jpg"

    def test_envelope_without_data_is_empty(self) -> None:
        envelope = ThumbnailsResponseSchema.model_validate(
            {"success": True, "message": "ok"}
        )
        assert envelope.gallery_items() == []


class TestFetchFirstPage:
    """Tests for ThumbnailsProvider.fetch_first_page."""

    @pytest.fixture
    def ok_body(self) -> str:
        return json.dumps(
            {
                "success": True,
                "message": "Thumbnails retrieved",
                "data": {
                    "thumbnails": [_thumbnail(2), _thumbnail(0), _thumbnail(1)],
                    "pagination": {
                        "currentPage": 1,
                        "totalPages": 1,
                        "totalThumbnails": 3,
                        "hasNext": False,
                        "hasPrev": False,
                    },
                },
            }
        )

    @pytest.mark.asyncio
    async def test_returns_items_in_service_order(self, ok_body: str) -> None:
        """Should keep the order the service returned."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(200, ok_body)
            items = await ThumbnailsProvider(base_url="https://api.test/api").fetch_first_page(20)

        assert [item.id for item in items] == ["665f2", "665f0", "665f1"]

    @pytest.mark.asyncio
    async def test_requests_first_page_with_limit(self, ok_body: str) -> None:
        """Should GET /thumbnails?page=1&limit=N."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            session = _mock_session(200, ok_body)
            mock_session_class.return_value = session
            await ThumbnailsProvider(base_url="https://api.test/api/").fetch_first_page(20)

        args, kwargs = session.get.call_args
        assert args[0] == "https://api.test/api/thumbnails"
        assert kwargs["params"] == {"page": "1", "limit": "20"}

    @pytest.mark.asyncio
    async def test_uses_injected_session(self, ok_body: str) -> None:
        """Should not open its own session when one is provided."""
        session = _mock_session(200, ok_body)
        with patch("aiohttp.ClientSession") as mock_session_class:
            items = await ThumbnailsProvider(
                base_url="https://api.test/api", session=session
            ).fetch_first_page(5)
            mock_session_class.assert_not_called()
        assert len(items) == 3

    @pytest.mark.asyncio
    async def test_empty_thumbnails_list(self) -> None:
        """Should return an empty list for an empty page."""
        body = json.dumps({"success": True, "message": "", "data": {"thumbnails": []}})
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(200, body)
            items = await ThumbnailsProvider().fetch_first_page(20)
        assert items == []

    @pytest.mark.asyncio
    async def test_record_with_null_description_still_loads(self) -> None:
        """Should not fail the whole page over one null text field."""
        record = _thumbnail(1)
        record["description"] = None
        body = json.dumps({"success": True, "data": {"thumbnails": [record, _thumbnail(2)]}})
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(200, body)
            items = await ThumbnailsProvider().fetch_first_page(20)

        assert [item.id for item in items] == ["665f1", "665f2"]
        assert items[0].description == ""

    @pytest.mark.asyncio
    async def test_http_error_uses_service_message(self) -> None:
        """Should surface the envelope's message on a non-2xx status."""
        body = json.dumps({"success": False, "message": "Database unavailable"})
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(503, body)
            with pytest.raises(GalleryLoadError) as exc_info:
                await ThumbnailsProvider().fetch_first_page(20)

        assert str(exc_info.value) == "Database unavailable"
        assert exc_info.value.status == 503
        assert exc_info.value.category == ErrorCategory.SERVICE_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_http_error_without_body(self) -> None:
        """Should fall back to a status message when the body is not JSON."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(404, "<html>nope</html>")
            with pytest.raises(GalleryLoadError) as exc_info:
                await ThumbnailsProvider().fetch_first_page(20)

        assert str(exc_info.value) == "HTTP error! status: 404"
        assert exc_info.value.category == ErrorCategory.NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_json_on_success(self) -> None:
        """Should reject a 200 whose body is not JSON."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(200, "not json")
            with pytest.raises(GalleryLoadError) as exc_info:
                await ThumbnailsProvider().fetch_first_page(20)

        assert exc_info.value.category == ErrorCategory.INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_malformed_thumbnail_record(self) -> None:
        """Should reject records missing required fields."""
        body = json.dumps({"success": True, "data": {"thumbnails": [{"title": "x"}]}})
        with patch("aiohttp.ClientSession") as mock_session_class:
            mock_session_class.return_value = _mock_session(200, body)
            with pytest.raises(GalleryLoadError) as exc_info:
                await ThumbnailsProvider().fetch_first_page(20)

        assert exc_info.value.category == ErrorCategory.INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """Should wrap aiohttp client errors."""
        with patch("aiohttp.ClientSession") as mock_session_class:
            session = _mock_session(200, "")
            session.get = MagicMock(side_effect=aiohttp.ClientError("Connection refused"))
            mock_session_class.return_value = session
            with pytest.raises(GalleryLoadError) as exc_info:
                await ThumbnailsProvider().fetch_first_page(20)

        assert exc_info.value.category == ErrorCategory.NETWORK
        assert isinstance(exc_info.value.original_error, aiohttp.ClientError)


class TestConfiguration:
    def test_default_base_url(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            assert ThumbnailsProvider().base_url == DEFAULT_API_BASE_URL

    def test_base_url_from_environment(self) -> None:
        with patch.dict("os.environ", {"GALLERY_API_BASE_URL": "http://localhost:3500/api"}):
            assert ThumbnailsProvider().base_url == "http://localhost:3500/api"
