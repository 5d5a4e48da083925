"""Per-item image source selection with a one-shot fallback."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.core.gallery import GalleryItem
from src.core.logging import get_logger

if TYPE_CHECKING:
    from src.core.carousel_logic import CarouselState

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedAsset:
    """The source a renderer should load for one item.

    Attributes:
        url: Image location to load.
        is_fallback: True once the primary source has been abandoned.
        broken: True when the fallback failed too; show a broken-image state.
    """

    url: str
    is_fallback: bool = False
    broken: bool = False


class AssetResolver:
    """Chooses primary or fallback sources and memoizes failures.

    Once an item's primary source has failed, every later render uses the
    fallback. The primary is never attempted again for that item.
    """

    def __init__(self, state: "CarouselState") -> None:
        self._state = state

    def resolve(self, item: GalleryItem) -> ResolvedAsset:
        if item.id not in self._state.failed_primary:
            return ResolvedAsset(url=item.primary_source_url)
        return ResolvedAsset(
            url=item.fallback_source_url,
            is_fallback=True,
            broken=item.id in self._state.broken_assets,
        )

    def record_primary_failure(self, item_id: str) -> bool:
        """Add ``item_id`` to the failed-primary set.

        Ids that are not in the loaded items are ignored. Recording the same
        id twice changes nothing.

        Returns:
            True if the id was newly added.
        """
        if self._state.find_item(item_id) is None:
            logger.debug("asset_failure_unknown_item", item_id=item_id)
            return False
        if item_id in self._state.failed_primary:
            return False
        self._state.failed_primary.add(item_id)
        logger.info("asset_primary_failed", item_id=item_id)
        return True

    def report_load_error(self, item_id: str, url: str) -> ResolvedAsset | None:
        """Handle an image load-error callback for ``url``.

        A failed primary switches the item to its fallback. A failed fallback
        marks the item broken; nothing further is attempted. Callbacks for a
        source the item no longer renders are ignored.

        Returns:
            The source to render next, or None if the item is unknown.
        """
        item = self._state.find_item(item_id)
        if item is None:
            logger.debug("asset_failure_unknown_item", item_id=item_id)
            return None

        current = self.resolve(item)
        if url != current.url or current.broken:
            return current

        if not current.is_fallback:
            self.record_primary_failure(item_id)
        else:
            self._state.broken_assets.add(item_id)
            logger.warning("asset_fallback_failed", item_id=item_id, url=url)
        return self.resolve(item)
