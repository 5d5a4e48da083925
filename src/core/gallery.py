"""Gallery item model and built-in placeholder content."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

PLACEHOLDER_BASE_URL = "https://via.placeholder.com"

# (id, reference id, title, description, colour)
_PLACEHOLDER_SPECS = (
    ("mock1", "MOCK001", "Sample Image 1", "This is a sample image for testing", "4F46E5"),
    ("mock2", "MOCK002", "Sample Image 2", "This is another sample image", "059669"),
    ("mock3", "MOCK003", "Sample Image 3", "Third sample image for carousel", "DC2626"),
)


@dataclass(frozen=True)
class GalleryItem:
    """One image entry in the carousel.

    Attributes:
        id: Opaque unique identifier, stable across renders.
        title: Display title.
        description: Display text shown under the title.
        primary_source_url: Preferred image location (the thumbnail).
        fallback_source_url: Used once the primary has failed to load. This
            is also the full-resolution asset offered for download.
        category: Free-form label.
        display_order: Ordering hint supplied by the service.
        created_at: ISO-8601 timestamp, display only.
        external_reference_id: Human-readable id shown in the detail view.
        tags: Free-form tags carried from the service.
        is_featured: Whether the service flagged the item as featured.
    """

    id: str
    title: str
    description: str
    primary_source_url: str
    fallback_source_url: str
    category: str = ""
    display_order: int = 0
    created_at: str = ""
    external_reference_id: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    is_featured: bool = False


def placeholder_items(now: datetime | None = None) -> list[GalleryItem]:
    """Build the fixed sample set shown when the service has no images.

    Args:
        now: Timestamp stamped on every item. Defaults to the current time.

    Returns:
        Three sample items in display order.
    """
    created_at = (now or datetime.now(UTC)).isoformat()
    items = []
    for order, (item_id, ref_id, title, description, colour) in enumerate(
        _PLACEHOLDER_SPECS
    ):
        label = f"Image+{order + 1}"
        items.append(
            GalleryItem(
                id=item_id,
                title=title,
                description=description,
                primary_source_url=(
                    f"{PLACEHOLDER_BASE_URL}/400x300/{colour}/FFFFFF?text={label}"
                ),
                fallback_source_url=(
                    f"{PLACEHOLDER_BASE_URL}/800x600/{colour}/FFFFFF?text={label}"
                ),
                category="gallery",
                display_order=order,
                created_at=created_at,
                external_reference_id=ref_id,
            )
        )
    return items


def format_display_date(created_at: str) -> str:
    """Format an ISO timestamp as e.g. ``Jan 5, 2025``.

    Values that do not parse are returned unchanged.
    """
    try:
        parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return created_at
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def download_filename(item: GalleryItem) -> str:
    """File name offered when the user saves an item's full-resolution asset."""
    return f"{item.title}.jpg"
