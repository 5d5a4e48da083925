"""Shared constants for the gallery carousel widget."""

from src.core.autoplay import AUTOPLAY_INTERVAL_SECONDS
from src.core.gestures import SWIPE_THRESHOLD_PX
from src.core.loader import GALLERY_PAGE_SIZE

# Autoplay is on when the gallery first appears
DEFAULT_AUTOPLAY = True

# Labels
LOADING_LABEL = "Loading gallery..."
ERROR_TITLE = "Error Loading Gallery"
RETRY_LABEL = "Try Again"
EMPTY_TITLE = "No Images Available"
EMPTY_MESSAGE = "Gallery images will appear here once uploaded."
GALLERY_TITLE = "Gallery"
PAUSE_AUTOPLAY_LABEL = "Pause Auto-play"
START_AUTOPLAY_LABEL = "Start Auto-play"
DOWNLOAD_LABEL = "Download"

__all__ = [
    "AUTOPLAY_INTERVAL_SECONDS",
    "DEFAULT_AUTOPLAY",
    "DOWNLOAD_LABEL",
    "EMPTY_MESSAGE",
    "EMPTY_TITLE",
    "ERROR_TITLE",
    "GALLERY_PAGE_SIZE",
    "GALLERY_TITLE",
    "LOADING_LABEL",
    "PAUSE_AUTOPLAY_LABEL",
    "RETRY_LABEL",
    "START_AUTOPLAY_LABEL",
    "SWIPE_THRESHOLD_PX",
]
