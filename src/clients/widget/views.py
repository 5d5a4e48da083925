"""Rendered view models for the gallery carousel.

``GalleryCarouselWidget.render`` returns exactly one of ``LoadingView``,
``ErrorView``, ``EmptyView`` or ``CarouselView``. They carry only what a
renderer needs to draw and which controls are live.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoadingView:
    label: str
    class_name: str = ""


@dataclass(frozen=True)
class ErrorView:
    """Full-widget error with a reload affordance."""

    title: str
    message: str
    retry_label: str
    class_name: str = ""


@dataclass(frozen=True)
class EmptyView:
    title: str
    message: str
    class_name: str = ""


@dataclass(frozen=True)
class SlideView:
    item_id: str
    title: str
    description: str
    image_url: str
    is_fallback: bool
    broken: bool


@dataclass(frozen=True)
class DotView:
    index: int
    active: bool
    label: str


@dataclass(frozen=True)
class ZoomView:
    """Single-item detail overlay."""

    item_id: str
    title: str
    description: str
    image_url: str
    broken: bool
    category: str
    date_label: str
    reference_label: str
    download_label: str


@dataclass(frozen=True)
class CarouselView:
    """The inline carousel, plus the overlay when an item is zoomed.

    Attributes:
        current_index: Slide on screen. Frozen at the zoom-open index while
            the overlay is showing.
        controls_enabled: False for galleries of one item; arrows, dots,
            counter and the autoplay toggle are then hidden.
        autoplay_label: Toggle caption, or None when controls are hidden.
        counter_label: "i of N", or None when controls are hidden.
    """

    title: str
    header_label: str
    slides: tuple[SlideView, ...]
    current_index: int
    autoplay_enabled: bool
    controls_enabled: bool
    dots: tuple[DotView, ...]
    autoplay_label: str | None
    counter_label: str | None
    zoom: ZoomView | None = None
    class_name: str = ""


WidgetView = LoadingView | ErrorView | EmptyView | CarouselView
