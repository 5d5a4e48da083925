"""Protocols for the widget's external collaborators.

The widget talks to exactly two things outside itself: the data service
that supplies the first page of gallery items, and the page hosting it.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.core.gallery import GalleryItem
    from src.core.overlay import DownloadRequest


class GallerySource(Protocol):
    """Supplies the initial ordered item collection."""

    async def fetch_first_page(self, limit: int) -> list["GalleryItem"]:
        """Fetch up to ``limit`` items in the service's order.

        Args:
            limit: Page size to request.

        Returns:
            The items, possibly empty.

        Raises:
            GalleryLoadError: If the fetch fails.
        """
        ...


class HostPage(Protocol):
    """The page the widget is embedded in."""

    def reload(self) -> None:
        """Reload the whole hosting page."""
        ...

    async def save_file(self, request: "DownloadRequest") -> None:
        """Save a file for the user, as a browser download would."""
        ...
