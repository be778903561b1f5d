"""
Media Layer.

This package is responsible for writing downloaded media, such as track
thumbnails, to disk.
"""

from .thumbnail import SavedThumbnail, ThumbnailDownloader

__all__ = ["SavedThumbnail", "ThumbnailDownloader"]
