"""
wave-cli: a small client for the Wave music-search API.
"""

from wave_cli.api.client import WaveAPIClient, search_tracks
from wave_cli.models.track import WaveTrack

__version__ = "0.3.1"

__all__ = ["WaveAPIClient", "WaveTrack", "__version__", "search_tracks"]
