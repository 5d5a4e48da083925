"""Gallery carousel widget package."""

from src.clients.widget.gallery_carousel import GalleryCarouselWidget
from src.clients.widget.views import (
    CarouselView,
    DotView,
    EmptyView,
    ErrorView,
    LoadingView,
    SlideView,
    WidgetView,
    ZoomView,
)

__all__ = [
    "CarouselView",
    "DotView",
    "EmptyView",
    "ErrorView",
    "GalleryCarouselWidget",
    "LoadingView",
    "SlideView",
    "WidgetView",
    "ZoomView",
]
