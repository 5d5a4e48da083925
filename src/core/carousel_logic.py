"""Carousel business logic - platform agnostic.

``CarouselState`` is the single mutable record a mounted widget owns.
``CarouselController`` is the only thing that mutates it: it arbitrates
commands from the autoplay scheduler, the gesture recognizer and the
discrete UI controls into index transitions.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from src.core.assets import AssetResolver
from src.core.autoplay import (
    AUTOPLAY_INTERVAL_SECONDS,
    AutoplayScheduler,
    TimerFactory,
)
from src.core.gallery import GalleryItem
from src.core.gestures import SwipeDirection
from src.core.logging import get_logger
from src.core.overlay import OverlayController

logger = get_logger(__name__)


class Direction(Enum):
    """Manual navigation direction."""

    NEXT = 1
    PREVIOUS = -1


@dataclass(frozen=True)
class Loading:
    """The gallery fetch is in flight."""


@dataclass(frozen=True)
class LoadFailed:
    """The gallery fetch failed; terminal for this mount."""

    message: str


@dataclass(frozen=True)
class Ready:
    """Items are loaded (possibly the placeholder set)."""


LoadPhase = Loading | LoadFailed | Ready


@dataclass
class CarouselState:
    """State for one mounted gallery carousel.

    Attributes:
        items: Ordered items, set once per load and read-only afterwards.
        current_index: Index of the current slide. Meaningless when empty.
        failed_primary: Ids whose primary source failed. Only ever grows.
        broken_assets: Ids whose fallback source also failed.
        zoomed_item: The item shown in the overlay, if any.
        zoom_index: Slide index that was on screen when the overlay opened.
        load_phase: Loading, LoadFailed or Ready.
    """

    items: tuple[GalleryItem, ...] = ()
    current_index: int = 0
    failed_primary: set[str] = field(default_factory=set)
    broken_assets: set[str] = field(default_factory=set)
    zoomed_item: GalleryItem | None = None
    zoom_index: int | None = None
    load_phase: LoadPhase = field(default_factory=Loading)

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def current_item(self) -> GalleryItem | None:
        if 0 <= self.current_index < len(self.items):
            return self.items[self.current_index]
        return None

    @property
    def is_navigable(self) -> bool:
        """Arrows, dots, swipes and autoplay need at least two items."""
        return len(self.items) > 1

    @property
    def is_zoomed(self) -> bool:
        return self.zoomed_item is not None

    def find_item(self, item_id: str) -> GalleryItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


class CarouselController:
    """Controls carousel navigation, autoplay and overlay state.

    Manual navigation (``advance``, ``jump_to``, swipes) always stops
    autoplay. The scheduler's own ticks go through ``autoplay_step`` which
    advances without touching the timer.

    With the default timer factory, anything that (re)starts autoplay
    (``load``, ``toggle_autoplay``) must run inside an asyncio event loop.
    Synchronous callers pass their own ``timer_factory`` or construct the
    controller with ``autoplay_default=False``.
    """

    def __init__(
        self,
        state: CarouselState | None = None,
        *,
        autoplay_default: bool = True,
        interval: float = AUTOPLAY_INTERVAL_SECONDS,
        timer_factory: TimerFactory | None = None,
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            state: State to drive. A fresh empty state is created if omitted.
            autoplay_default: Whether autoplay starts once items are loaded.
            interval: Seconds between autoplay ticks.
            timer_factory: Timer source for the scheduler. Defaults to
                ``loop_timer_factory``, which needs a running event loop.
            on_tick: Receives the generation of each scheduler tick. Defaults
                to applying ``autoplay_step`` immediately; the widget passes
                a callback that queues the tick behind pending input instead.
        """
        self.state = state or CarouselState()
        self.autoplay_default = autoplay_default
        self.scheduler = AutoplayScheduler(
            on_tick=on_tick or self.autoplay_step,
            interval=interval,
            timer_factory=timer_factory,
        )
        self.assets = AssetResolver(self.state)
        self.overlay = OverlayController(self.state)

    @property
    def autoplay_enabled(self) -> bool:
        return self.scheduler.is_running

    def load(self, items: Sequence[GalleryItem]) -> None:
        """Install the loaded items and start autoplay when applicable."""
        self.state.items = tuple(items)
        self.state.current_index = 0
        self.state.load_phase = Ready()
        logger.info("gallery_ready", total_items=len(self.state.items))
        self._sync_autoplay(self.autoplay_default)

    def fail(self, message: str) -> None:
        """Enter the terminal error phase."""
        self.scheduler.stop()
        self.state.load_phase = LoadFailed(message)
        logger.warning("gallery_load_failed", message=message)

    def advance(self, direction: Direction) -> bool:
        """Move one slide with wraparound. Always stops autoplay.

        Returns:
            True if the index moved, False for galleries of one or no items.
        """
        if not self.state.is_navigable:
            logger.debug("navigation_ignored", reason="not_navigable")
            return False
        self.scheduler.stop()
        self._step(direction)
        return True

    def jump_to(self, index: int) -> bool:
        """Go straight to ``index``. Always stops autoplay.

        Returns:
            True if the index was applied.
        """
        if not self.state.is_navigable:
            logger.debug("navigation_ignored", reason="not_navigable")
            return False
        if not 0 <= index < self.state.total_items:
            logger.debug("navigation_ignored", reason="index_out_of_range", index=index)
            return False
        self.scheduler.stop()
        self.state.current_index = index
        logger.debug("slide_changed", index=index, source="jump")
        return True

    def swipe(self, direction: SwipeDirection) -> bool:
        """Apply a recognised swipe as manual navigation."""
        if direction is SwipeDirection.LEFT:
            return self.advance(Direction.NEXT)
        if direction is SwipeDirection.RIGHT:
            return self.advance(Direction.PREVIOUS)
        return False

    def toggle_autoplay(self) -> bool:
        """Flip autoplay without moving the slide.

        Turning on restarts the timer from zero elapsed time.

        Returns:
            The new autoplay state.
        """
        if not self.state.is_navigable:
            logger.debug("autoplay_toggle_ignored", reason="not_navigable")
            return False
        self._sync_autoplay(not self.autoplay_enabled)
        return self.autoplay_enabled

    def autoplay_step(self, generation: int) -> bool:
        """Advance to the next slide on behalf of the scheduler.

        Ticks from a replaced or stopped timer are dropped.

        Returns:
            True if the index moved.
        """
        if not self.scheduler.is_current(generation):
            logger.debug("stale_autoplay_tick_dropped", generation=generation)
            return False
        if not self.state.is_navigable:
            return False
        self._step(Direction.NEXT, source="autoplay")
        return True

    def open_zoom(self, item: GalleryItem) -> bool:
        """Show ``item`` in the overlay. Autoplay keeps running."""
        return self.overlay.open(item)

    def close_zoom(self) -> None:
        self.overlay.close()

    def record_asset_failure(self, item_id: str) -> bool:
        """Remember that ``item_id``'s primary source failed to load.

        Returns:
            True if this was the first failure recorded for the item.
        """
        return self.assets.record_primary_failure(item_id)

    def shutdown(self) -> None:
        """Cancel the timer for good. Safe to call repeatedly."""
        self.scheduler.close()

    def _step(self, direction: Direction, source: str = "manual") -> None:
        total = self.state.total_items
        self.state.current_index = (self.state.current_index + direction.value) % total
        logger.debug(
            "slide_changed",
            index=self.state.current_index,
            total=total,
            source=source,
        )

    def _sync_autoplay(self, enabled: bool) -> None:
        if enabled and self.state.is_navigable:
            self.scheduler.start()
        else:
            self.scheduler.stop()
