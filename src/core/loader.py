"""Initial gallery fetch."""

from src.core.carousel_logic import CarouselController
from src.core.errors import GalleryLoadError
from src.core.gallery import GalleryItem, placeholder_items
from src.core.logging import get_logger
from src.ports.gallery import GallerySource

logger = get_logger(__name__)

GALLERY_PAGE_SIZE = 20


class GalleryLoader:
    """Fetches the first page of items and hands them to the controller.

    One attempt only. A failed fetch is terminal for the mount; the user
    recovers by reloading the page. An empty page is not an error: the
    built-in placeholder items are shown instead.
    """

    def __init__(self, source: GallerySource, page_size: int = GALLERY_PAGE_SIZE) -> None:
        self._source = source
        self._page_size = page_size

    async def load(self, controller: CarouselController) -> list[GalleryItem] | None:
        """Fetch items and move the controller out of the loading phase.

        Args:
            controller: Controller whose state receives the items.

        Returns:
            The installed items, or None if the fetch failed.
        """
        logger.info("gallery_fetch_started", page_size=self._page_size)
        try:
            items = await self._source.fetch_first_page(self._page_size)
        except GalleryLoadError as ex:
            logger.error(
                "gallery_fetch_failed",
                category=ex.category.name,
                status=ex.status,
                error=str(ex),
            )
            controller.fail(ex.user_message)
            return None
        except Exception as ex:
            error = GalleryLoadError.from_exception(ex)
            logger.exception("gallery_fetch_crashed", category=error.category.name)
            controller.fail(error.user_message)
            return None

        if not items:
            logger.info("gallery_empty_using_placeholders")
            items = placeholder_items()

        controller.load(items)
        return list(items)
