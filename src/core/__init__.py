"""Core carousel logic.

This module contains the platform-agnostic pieces of the gallery carousel:
the state machine, autoplay scheduler, gesture recognizer, asset resolver,
zoom overlay and the initial loader.
"""

from src.core.assets import AssetResolver, ResolvedAsset
from src.core.autoplay import (
    AUTOPLAY_INTERVAL_SECONDS,
    AutoplayMode,
    AutoplayOff,
    AutoplayOn,
    AutoplayScheduler,
    TimerHandle,
)
from src.core.carousel_logic import (
    CarouselController,
    CarouselState,
    Direction,
    LoadFailed,
    Loading,
    LoadPhase,
    Ready,
)
from src.core.errors import (
    ErrorCategory,
    GalleryLoadError,
    classify_error,
)
from src.core.gallery import (
    GalleryItem,
    download_filename,
    format_display_date,
    placeholder_items,
)
from src.core.gestures import SWIPE_THRESHOLD_PX, GestureRecognizer, SwipeDirection
from src.core.loader import GALLERY_PAGE_SIZE, GalleryLoader
from src.core.logging import configure_logging, get_logger, widget_log_context
from src.core.overlay import DownloadRequest, OverlayController

__all__ = [
    # Assets
    "AssetResolver",
    "ResolvedAsset",
    # Autoplay
    "AUTOPLAY_INTERVAL_SECONDS",
    "AutoplayMode",
    "AutoplayOff",
    "AutoplayOn",
    "AutoplayScheduler",
    "TimerHandle",
    # Carousel
    "CarouselController",
    "CarouselState",
    "Direction",
    "LoadFailed",
    "LoadPhase",
    "Loading",
    "Ready",
    # Error handling
    "ErrorCategory",
    "GalleryLoadError",
    "classify_error",
    # Gallery model
    "GalleryItem",
    "download_filename",
    "format_display_date",
    "placeholder_items",
    # Gestures
    "GestureRecognizer",
    "SWIPE_THRESHOLD_PX",
    "SwipeDirection",
    # Loading
    "GALLERY_PAGE_SIZE",
    "GalleryLoader",
    # Logging
    "configure_logging",
    "get_logger",
    "widget_log_context",
    # Overlay
    "DownloadRequest",
    "OverlayController",
]
