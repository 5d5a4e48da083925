"""Concrete implementations of the gallery ports.

This module contains the aiohttp-backed data service client that implements
the GallerySource protocol defined in src/ports/gallery.py, plus the asset
downloader a host can use to save full-resolution images.
"""

from src.providers.asset_downloader import AssetDownloader, AssetDownloadError
from src.providers.schemas import (
    PaginationSchema,
    ThumbnailSchema,
    ThumbnailsPageSchema,
    ThumbnailsResponseSchema,
)
from src.providers.thumbnails_provider import ThumbnailsProvider

__all__ = [
    "AssetDownloadError",
    "AssetDownloader",
    "PaginationSchema",
    "ThumbnailSchema",
    "ThumbnailsPageSchema",
    "ThumbnailsProvider",
    "ThumbnailsResponseSchema",
]
