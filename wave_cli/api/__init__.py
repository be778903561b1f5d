"""
Wave API Layer.

This package handles all communication with the Wave search API.
"""

from .client import WaveAPIClient, search_tracks

__all__ = ["WaveAPIClient", "search_tracks"]
