"""
Utilities for naming and placing downloaded thumbnail files.
"""

from pathlib import PurePosixPath
from urllib.parse import urlparse

from pathvalidate import sanitize_filename

from wave_cli.models.track import WaveTrack

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif"}
DEFAULT_IMAGE_EXTENSION = "jpg"


def guess_image_extension(url: str) -> str:
    """
    Returns the image extension of a thumbnail URL, without the dot.
    Falls back to 'jpg' when the URL path carries no known image suffix.
    """
    suffix = PurePosixPath(urlparse(url).path).suffix.lstrip(".").lower()
    if suffix in IMAGE_EXTENSIONS:
        return "jpg" if suffix == "jpeg" else suffix
    return DEFAULT_IMAGE_EXTENSION


def thumbnail_filename(track: WaveTrack) -> str:
    """Builds a safe file name for a track's thumbnail."""
    ext = guess_image_extension(track.thumbnail or "")
    if track.title and track.uploader_name:
        stem = f"{track.uploader_name} - {track.title}"
    else:
        stem = track.title or track.id or "thumbnail"
    stem = sanitize_filename(stem, platform="universal").strip() or "thumbnail"
    return f"{stem}.{ext}"
