"""Embeddable gallery carousel widget.

Every input source (arrow and dot clicks, the autoplay toggle, touch
samples, image load errors, scheduler ticks) is turned into an event and
put on one queue. A single consumer task applies the events in arrival
order, so two inputs landing in the same loop iteration can never merge or
overwrite each other.
"""

import asyncio
import contextlib
from dataclasses import dataclass
from uuid import uuid4

from src.clients.widget.constants import (
    AUTOPLAY_INTERVAL_SECONDS,
    DEFAULT_AUTOPLAY,
    DOWNLOAD_LABEL,
    EMPTY_MESSAGE,
    EMPTY_TITLE,
    ERROR_TITLE,
    GALLERY_PAGE_SIZE,
    GALLERY_TITLE,
    LOADING_LABEL,
    PAUSE_AUTOPLAY_LABEL,
    RETRY_LABEL,
    START_AUTOPLAY_LABEL,
    SWIPE_THRESHOLD_PX,
)
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
from src.core.autoplay import TimerFactory
from src.core.carousel_logic import (
    CarouselController,
    CarouselState,
    Direction,
    LoadFailed,
    Loading,
)
from src.core.gallery import GalleryItem, format_display_date
from src.core.gestures import GestureRecognizer
from src.core.loader import GalleryLoader
from src.core.logging import get_logger, widget_log_context
from src.core.overlay import DownloadRequest
from src.ports.gallery import GallerySource, HostPage

logger = get_logger(__name__)


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class Navigate:
    direction: Direction


@dataclass(frozen=True)
class JumpTo:
    index: int


@dataclass(frozen=True)
class ToggleAutoplay:
    pass


@dataclass(frozen=True)
class AutoplayTick:
    generation: int


@dataclass(frozen=True)
class OpenZoom:
    item_id: str


@dataclass(frozen=True)
class CloseZoom:
    pass


@dataclass(frozen=True)
class TouchStart:
    x: float


@dataclass(frozen=True)
class TouchMove:
    x: float


@dataclass(frozen=True)
class TouchEnd:
    pass


@dataclass(frozen=True)
class ImageError:
    item_id: str
    url: str


@dataclass(frozen=True)
class Download:
    pass


@dataclass(frozen=True)
class Retry:
    pass


WidgetEvent = (
    Navigate
    | JumpTo
    | ToggleAutoplay
    | AutoplayTick
    | OpenZoom
    | CloseZoom
    | TouchStart
    | TouchMove
    | TouchEnd
    | ImageError
    | Download
    | Retry
)

# Input on the base carousel; dropped while the overlay is showing
_BASE_CAROUSEL_EVENTS = (Navigate, JumpTo, ToggleAutoplay, OpenZoom, TouchStart, TouchMove)


# =============================================================================
# Widget
# =============================================================================


class GalleryCarouselWidget:
    """Image carousel with autoplay, swipe navigation and a zoom overlay.

    The widget owns all of its state. A host embeds it, forwards user input
    to the ``click_*``/``touch_*``/``image_error`` entry points and draws
    whatever ``render()`` returns.

    Example:
        widget = GalleryCarouselWidget(ThumbnailsProvider(), host)
        await widget.mount()
        widget.click_next()
        await widget.drain()
        view = widget.render()
        ...
        await widget.unmount()
    """

    def __init__(
        self,
        source: GallerySource,
        host: HostPage,
        class_name: str = "",
        *,
        autoplay_default: bool = DEFAULT_AUTOPLAY,
        interval: float = AUTOPLAY_INTERVAL_SECONDS,
        page_size: int = GALLERY_PAGE_SIZE,
        swipe_threshold: float = SWIPE_THRESHOLD_PX,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        """Initialize the widget.

        Args:
            source: Data service supplying the first page of items.
            host: The hosting page (reload and file-save actions).
            class_name: Styling hook passed through to every rendered view.
            autoplay_default: Whether autoplay starts once items load.
            interval: Seconds between autoplay ticks.
            page_size: How many items to request.
            swipe_threshold: Minimum horizontal travel, in pixels, of a swipe.
            timer_factory: Timer source for autoplay; defaults to the loop.
        """
        self.widget_id = uuid4().hex[:8]
        self.class_name = class_name
        self._source = source
        self._host = host
        self._autoplay_default = autoplay_default
        self._interval = interval
        self._page_size = page_size
        self._swipe_threshold = swipe_threshold
        self._timer_factory = timer_factory

        self._controller: CarouselController | None = None
        self._gestures = GestureRecognizer(swipe_threshold)
        self._events: asyncio.Queue[WidgetEvent] | None = None
        self._consumer: asyncio.Task[None] | None = None
        self._load_task: asyncio.Task[list[GalleryItem] | None] | None = None
        self._background: set[asyncio.Task[None]] = set()
        self._alive = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self._alive

    @property
    def state(self) -> CarouselState:
        """Read-only view of the current state (empty before mount)."""
        if self._controller is None:
            return CarouselState()
        return self._controller.state

    @property
    def autoplay_enabled(self) -> bool:
        return self._controller is not None and self._controller.autoplay_enabled

    async def mount(self) -> None:
        """Build fresh state, start the event consumer and load the gallery.

        Returns once the fetch has resolved (or the widget was unmounted
        while it was in flight). Input posted while loading is applied to the
        empty gallery, so navigation and toggles are no-ops until items land.
        """
        if self._alive:
            return

        self._controller = CarouselController(
            autoplay_default=self._autoplay_default,
            interval=self._interval,
            timer_factory=self._timer_factory,
            on_tick=self._queue_autoplay_tick,
        )
        self._gestures = GestureRecognizer(self._swipe_threshold)
        self._events = asyncio.Queue()
        self._alive = True
        self._consumer = asyncio.create_task(self._consume(self._events))
        logger.info("widget_mounted", widget_id=self.widget_id)

        loader = GalleryLoader(self._source, page_size=self._page_size)
        self._load_task = asyncio.create_task(loader.load(self._controller))
        try:
            await self._load_task
        except asyncio.CancelledError:
            if self._alive:
                raise
            logger.debug("widget_load_abandoned", widget_id=self.widget_id)

    async def unmount(self) -> None:
        """Tear the widget down. Safe to call more than once.

        The autoplay timer is cancelled before anything else so no tick can
        reach a discarded state.
        """
        if self._controller is not None:
            self._controller.shutdown()
        was_alive = self._alive
        self._alive = False

        tasks = [
            task
            for task in (self._load_task, self._consumer, *self._background)
            if task is not None and not task.done()
        ]
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

        # Release anyone blocked in drain()
        if self._events is not None:
            while not self._events.empty():
                self._events.get_nowait()
                self._events.task_done()

        self._background.clear()
        self._consumer = None
        self._load_task = None
        if was_alive:
            logger.info("widget_unmounted", widget_id=self.widget_id)

    async def drain(self) -> None:
        """Wait until every queued event has been applied.

        Downloads started by those events are awaited as well.
        """
        if self._events is not None and self._alive:
            await self._events.join()
        if self._background:
            await asyncio.gather(*self._background)

    # -------------------------------------------------------------------------
    # User input
    # -------------------------------------------------------------------------

    def click_previous(self) -> None:
        self._post(Navigate(Direction.PREVIOUS))

    def click_next(self) -> None:
        self._post(Navigate(Direction.NEXT))

    def click_dot(self, index: int) -> None:
        self._post(JumpTo(index))

    def click_autoplay_toggle(self) -> None:
        self._post(ToggleAutoplay())

    def click_slide(self, item_id: str) -> None:
        self._post(OpenZoom(item_id))

    def close_zoom(self) -> None:
        self._post(CloseZoom())

    def click_download(self) -> None:
        self._post(Download())

    def click_retry(self) -> None:
        self._post(Retry())

    def touch_start(self, x: float) -> None:
        self._post(TouchStart(x))

    def touch_move(self, x: float) -> None:
        self._post(TouchMove(x))

    def touch_end(self) -> None:
        self._post(TouchEnd())

    def image_error(self, item_id: str, url: str) -> None:
        """Report that the image at ``url`` failed to load for ``item_id``."""
        self._post(ImageError(item_id, url))

    # -------------------------------------------------------------------------
    # Event processing
    # -------------------------------------------------------------------------

    def _post(self, event: WidgetEvent) -> None:
        if not self._alive or self._events is None:
            logger.debug("event_dropped_not_mounted", event_type=type(event).__name__)
            return
        self._events.put_nowait(event)

    def _queue_autoplay_tick(self, generation: int) -> None:
        self._post(AutoplayTick(generation))

    async def _consume(self, events: asyncio.Queue[WidgetEvent]) -> None:
        with widget_log_context(self.widget_id):
            while True:
                event = await events.get()
                try:
                    if self._alive:
                        self._apply(event)
                except Exception:
                    logger.exception(
                        "widget_event_failed", event_type=type(event).__name__
                    )
                finally:
                    events.task_done()

    def _apply(self, event: WidgetEvent) -> None:
        controller = self._controller
        if controller is None:
            return

        if controller.state.is_zoomed and isinstance(event, _BASE_CAROUSEL_EVENTS):
            logger.debug("input_ignored_while_zoomed", event_type=type(event).__name__)
            return

        if isinstance(event, Navigate):
            controller.advance(event.direction)
        elif isinstance(event, JumpTo):
            controller.jump_to(event.index)
        elif isinstance(event, ToggleAutoplay):
            enabled = controller.toggle_autoplay()
            logger.info("autoplay_toggled", enabled=enabled)
        elif isinstance(event, AutoplayTick):
            controller.autoplay_step(event.generation)
        elif isinstance(event, OpenZoom):
            item = controller.state.find_item(event.item_id)
            if item is not None:
                controller.open_zoom(item)
        elif isinstance(event, CloseZoom):
            controller.close_zoom()
        elif isinstance(event, TouchStart):
            self._gestures.begin(event.x)
        elif isinstance(event, TouchMove):
            self._gestures.move(event.x)
        elif isinstance(event, TouchEnd):
            direction = self._gestures.finish()
            if not controller.state.is_zoomed:
                controller.swipe(direction)
        elif isinstance(event, ImageError):
            controller.assets.report_load_error(event.item_id, event.url)
        elif isinstance(event, Download):
            self._start_download(controller)
        elif isinstance(event, Retry):
            if isinstance(controller.state.load_phase, LoadFailed):
                logger.info("gallery_reload_requested")
                self._host.reload()

    def _start_download(self, controller: CarouselController) -> None:
        request = controller.overlay.download_request()
        if request is None:
            return
        task = asyncio.create_task(self._save(request))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _save(self, request: DownloadRequest) -> None:
        try:
            await self._host.save_file(request)
        except Exception as ex:
            logger.error("download_failed", url=request.url, error=str(ex))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self) -> WidgetView:
        """Describe what the widget shows right now."""
        state = self.state
        phase = state.load_phase

        if isinstance(phase, Loading):
            return LoadingView(label=LOADING_LABEL, class_name=self.class_name)
        if isinstance(phase, LoadFailed):
            return ErrorView(
                title=ERROR_TITLE,
                message=phase.message,
                retry_label=RETRY_LABEL,
                class_name=self.class_name,
            )
        if not state.items:
            return EmptyView(
                title=EMPTY_TITLE,
                message=EMPTY_MESSAGE,
                class_name=self.class_name,
            )
        return self._render_carousel(state)

    def _render_carousel(self, state: CarouselState) -> CarouselView:
        assert self._controller is not None
        resolver = self._controller.assets
        total = state.total_items
        navigable = state.is_navigable
        shown_index = state.zoom_index if state.zoom_index is not None else state.current_index
        autoplay = self._controller.autoplay_enabled

        slides = []
        for item in state.items:
            asset = resolver.resolve(item)
            slides.append(
                SlideView(
                    item_id=item.id,
                    title=item.title,
                    description=item.description,
                    image_url=asset.url,
                    is_fallback=asset.is_fallback,
                    broken=asset.broken,
                )
            )

        dots: tuple[DotView, ...] = ()
        if navigable:
            dots = tuple(
                DotView(index=i, active=i == shown_index, label=f"Go to slide {i + 1}")
                for i in range(total)
            )

        zoom = None
        if state.zoomed_item is not None:
            item = state.zoomed_item
            asset = resolver.resolve(item)
            zoom = ZoomView(
                item_id=item.id,
                title=item.title,
                description=item.description,
                image_url=asset.url,
                broken=asset.broken,
                category=item.category,
                date_label=format_display_date(item.created_at),
                reference_label=f"ID: {item.external_reference_id}",
                download_label=DOWNLOAD_LABEL,
            )

        return CarouselView(
            title=GALLERY_TITLE,
            header_label=f"{total} {'image' if total == 1 else 'images'} available",
            slides=tuple(slides),
            current_index=shown_index,
            autoplay_enabled=autoplay,
            controls_enabled=navigable,
            dots=dots,
            autoplay_label=(
                (PAUSE_AUTOPLAY_LABEL if autoplay else START_AUTOPLAY_LABEL)
                if navigable
                else None
            ),
            counter_label=f"{shown_index + 1} of {total}" if navigable else None,
            zoom=zoom,
            class_name=self.class_name,
        )
