"""
Persists track thumbnails to disk by streaming them through the API client.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import NamedTuple

import aiofiles

from wave_cli.api.client import WaveAPIClient
from wave_cli.exceptions import ThumbnailError
from wave_cli.models.track import WaveTrack
from wave_cli.utils.path import thumbnail_filename

log = logging.getLogger(__name__)


class SavedThumbnail(NamedTuple):
    path: Path
    written: bool  # False when an existing file was kept
    size: int


class ThumbnailDownloader:
    """Writes a track's thumbnail image into a directory."""

    def __init__(self, client: WaveAPIClient):
        self.client = client

    async def save(
        self, track: WaveTrack, destination_dir: Path, overwrite: bool = False
    ) -> SavedThumbnail:
        """
        Streams the thumbnail of ``track`` into ``destination_dir``.

        An existing file is left untouched unless ``overwrite`` is set; the
        result's ``written`` flag tells the two cases apart. A partially
        written file is removed if the transfer fails.
        """
        if not track.thumbnail:
            raise ThumbnailError(f"Track '{track}' has no thumbnail URL.")

        destination_dir = Path(destination_dir)
        destination_path = destination_dir / thumbnail_filename(track)

        path_exists = await asyncio.to_thread(destination_path.is_file)
        if path_exists and not overwrite:
            log.info("Thumbnail already exists, keeping it: %s", destination_path)
            size = await asyncio.to_thread(os.path.getsize, destination_path)
            return SavedThumbnail(destination_path, written=False, size=size)

        await asyncio.to_thread(destination_dir.mkdir, parents=True, exist_ok=True)

        bytes_written = 0
        try:
            async with aiofiles.open(destination_path, "wb") as f:
                async for chunk in self.client.stream_thumbnail(track.thumbnail):
                    await f.write(chunk)
                    bytes_written += len(chunk)
        except BaseException:
            if await asyncio.to_thread(os.path.isfile, destination_path):
                await asyncio.to_thread(os.remove, destination_path)
            raise

        log.debug(
            "Saved thumbnail '%s' (%d bytes).", destination_path.name, bytes_written
        )
        return SavedThumbnail(destination_path, written=True, size=bytes_written)
