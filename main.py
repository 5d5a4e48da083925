"""Entry point for the gallery carousel demo.

Mounts the widget against the live gallery API in a headless host that logs
every rendered frame. A reload request from the error view tears the widget
down and mounts a fresh one, the way a browser page reload would.

Usage:
    python main.py
    GALLERY_API_BASE_URL=http://localhost:3500/api python main.py
"""

import asyncio
import os
from pathlib import Path

from src.clients.widget import CarouselView, ErrorView, GalleryCarouselWidget
from src.core.logging import configure_logging, get_logger
from src.core.overlay import DownloadRequest
from src.providers import AssetDownloader, ThumbnailsProvider

# Configure structured logging (reads ENVIRONMENT and LOG_LEVEL from env)
configure_logging()

logger = get_logger(__name__)

# How long the demo keeps each mounted widget on screen
DEMO_SECONDS = float(os.getenv("GALLERY_DEMO_SECONDS", "20"))


class HeadlessHost:
    """Host page that saves downloads to disk and records reload requests."""

    def __init__(self, download_dir: Path) -> None:
        self.reload_requested = asyncio.Event()
        self._downloader = AssetDownloader(download_dir)

    def reload(self) -> None:
        self.reload_requested.set()

    async def save_file(self, request: DownloadRequest) -> None:
        await self._downloader.save(request)


async def run_once(host: HeadlessHost) -> None:
    """Mount one widget, log its frames, then unmount it."""
    widget = GalleryCarouselWidget(ThumbnailsProvider(), host)
    await widget.mount()
    try:
        last = None
        loop = asyncio.get_running_loop()
        deadline = loop.time() + DEMO_SECONDS
        while loop.time() < deadline and not host.reload_requested.is_set():
            view = widget.render()
            if view != last:
                if isinstance(view, CarouselView):
                    logger.info(
                        "frame",
                        counter=view.counter_label,
                        slide=view.slides[view.current_index].title,
                        autoplay=view.autoplay_enabled,
                    )
                elif isinstance(view, ErrorView):
                    logger.info("frame", view="ErrorView", message=view.message)
                    # Press the retry button once, as a visitor would
                    widget.click_retry()
                else:
                    logger.info("frame", view=type(view).__name__)
                last = view
            await asyncio.sleep(0.25)
    finally:
        await widget.unmount()


async def main() -> None:
    download_dir = Path(os.getenv("GALLERY_DOWNLOAD_DIR", "downloads"))
    host = HeadlessHost(download_dir)
    await run_once(host)
    if host.reload_requested.is_set():
        host.reload_requested.clear()
        logger.info("page_reloaded")
        await run_once(host)


if __name__ == "__main__":
    asyncio.run(main())
