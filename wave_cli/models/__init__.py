"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application: search results and configuration.
"""

from .config import WaveConfig
from .track import SearchResponse, WaveTrack

__all__ = ["SearchResponse", "WaveConfig", "WaveTrack"]
