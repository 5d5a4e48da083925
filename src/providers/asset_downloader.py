"""Save full-resolution gallery assets to disk.

This is the host-side half of the overlay's download action: the widget
produces a ``DownloadRequest`` and the host decides where the bytes go.
"""

from __future__ import annotations

import re
from pathlib import Path

import aiohttp

from src.core.logging import get_logger
from src.core.overlay import DownloadRequest

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


class AssetDownloadError(Exception):
    """Raised when an asset cannot be fetched or written."""

    pass


def safe_filename(filename: str) -> str:
    """Strip path separators and control characters from a suggested name."""
    cleaned = re.sub(r"[\\/\x00-\x1f]", "_", filename).strip(" .")
    return cleaned or "image.jpg"


class AssetDownloader:
    """Streams assets into a directory.

    Example:
        downloader = AssetDownloader(Path("~/Downloads").expanduser())
        path = await downloader.save(DownloadRequest(url=..., filename="Cat.jpg"))
    """

    def __init__(
        self,
        directory: Path,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.directory = directory
        self._session = session

    async def save(self, request: DownloadRequest) -> Path:
        """Download ``request.url`` into ``directory/request.filename``.

        Returns:
            Path of the written file.

        Raises:
            AssetDownloadError: On a network error or non-200 response.
        """
        target = self.directory / safe_filename(request.filename)
        self.directory.mkdir(parents=True, exist_ok=True)

        try:
            if self._session is not None:
                await self._stream_to(self._session, request.url, target)
            else:
                async with aiohttp.ClientSession() as session:
                    await self._stream_to(session, request.url, target)
        except aiohttp.ClientError as ex:
            logger.error("asset_download_failed", url=request.url, error=str(ex))
            raise AssetDownloadError(f"Network error downloading asset: {ex}") from ex

        logger.info("asset_downloaded", url=request.url, path=str(target))
        return target

    async def _stream_to(
        self, session: aiohttp.ClientSession, url: str, target: Path
    ) -> None:
        async with session.get(url) as response:
            if response.status != 200:
                raise AssetDownloadError(
                    f"Asset download failed with status {response.status}"
                )
            try:
                with target.open("wb") as fh:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        fh.write(chunk)
            except BaseException:
                # No partial files left behind, including on cancellation
                target.unlink(missing_ok=True)
                raise
