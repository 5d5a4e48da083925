"""Zoom overlay state for the carousel."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.core.gallery import GalleryItem, download_filename
from src.core.logging import get_logger

if TYPE_CHECKING:
    from src.core.carousel_logic import CarouselState

logger = get_logger(__name__)


@dataclass(frozen=True)
class DownloadRequest:
    """A browser-style "save as" of an item's full-resolution asset."""

    url: str
    filename: str


class OverlayController:
    """Owns the zoomed item.

    While an item is zoomed the base carousel ignores input. Opening and
    closing never touch the slide index or autoplay.
    """

    def __init__(self, state: "CarouselState") -> None:
        self._state = state

    @property
    def is_active(self) -> bool:
        return self._state.zoomed_item is not None

    @property
    def item(self) -> GalleryItem | None:
        return self._state.zoomed_item

    def open(self, item: GalleryItem) -> bool:
        """Zoom ``item``, which must be one of the loaded items.

        Returns:
            True if the overlay opened.
        """
        if self.is_active:
            logger.debug("zoom_ignored", reason="already_zoomed", item_id=item.id)
            return False
        if item not in self._state.items:
            logger.debug("zoom_ignored", reason="unknown_item", item_id=item.id)
            return False
        self._state.zoomed_item = item
        self._state.zoom_index = self._state.current_index
        logger.info("zoom_opened", item_id=item.id)
        return True

    def close(self) -> None:
        """Dismiss the overlay. Closing a closed overlay is a no-op."""
        if self._state.zoomed_item is not None:
            logger.info("zoom_closed", item_id=self._state.zoomed_item.id)
        self._state.zoomed_item = None
        self._state.zoom_index = None

    def download_request(self) -> DownloadRequest | None:
        """Describe the file save for the zoomed item, if any."""
        item = self._state.zoomed_item
        if item is None:
            return None
        return DownloadRequest(
            url=item.fallback_source_url,
            filename=download_filename(item),
        )
