"""Pydantic schemas for the gallery data service's thumbnails endpoint.

Field aliases follow the service's camelCase wire format.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.core.gallery import GalleryItem


class ThumbnailSchema(BaseModel):
    """One thumbnail record as returned by ``GET /thumbnails``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., alias="_id")
    title: str | None = None
    description: str | None = None
    original_image_url: str = Field(..., alias="originalImageUrl")
    thumbnail_url: str = Field(..., alias="thumbnailUrl")
    category: str | None = None
    tags: list[str] | None = None
    display_order: int | None = Field(None, alias="displayOrder")
    is_featured: bool | None = Field(None, alias="isFeatured")
    created_at: str | None = Field(None, alias="createdAt")
    thumbnail_id: str | None = Field(None, alias="thumbnailId")

    def to_gallery_item(self) -> GalleryItem:
        """Map the wire record onto the carousel's item model.

        The thumbnail is the preferred (primary) source; the original image is
        the fallback and the full-resolution download. Optional fields the
        service sends as null take their empty defaults.
        """
        return GalleryItem(
            id=self.id,
            title=self.title or "",
            description=self.description or "",
            primary_source_url=self.thumbnail_url,
            fallback_source_url=self.original_image_url,
            category=self.category or "",
            display_order=self.display_order or 0,
            created_at=self.created_at or "",
            external_reference_id=self.thumbnail_id or "",
            tags=tuple(self.tags or ()),
            is_featured=bool(self.is_featured),
        )


class PaginationSchema(BaseModel):
    """Pagination block; only the first page is ever requested."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    current_page: int = Field(1, alias="currentPage")
    total_pages: int = Field(1, alias="totalPages")
    total_thumbnails: int = Field(0, alias="totalThumbnails")
    has_next: bool = Field(False, alias="hasNext")
    has_prev: bool = Field(False, alias="hasPrev")


class ThumbnailsPageSchema(BaseModel):
    """The ``data`` payload of a thumbnails response."""

    thumbnails: list[ThumbnailSchema] | None = None
    pagination: PaginationSchema | None = None


class ThumbnailsResponseSchema(BaseModel):
    """The service's standard response envelope."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    message: str = ""
    data: ThumbnailsPageSchema | None = None
    error: str | None = None

    def gallery_items(self) -> list[GalleryItem]:
        """Items in service order; empty when ``data`` or its list is missing."""
        if self.data is None or not self.data.thumbnails:
            return []
        return [thumbnail.to_gallery_item() for thumbnail in self.data.thumbnails]
