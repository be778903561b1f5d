"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class WaveCliError(Exception):
    """Base exception for all application-specific errors."""


class ApiRequestError(WaveCliError):
    """Raised when a request to the Wave API fails or returns a non-success status."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ThumbnailError(ApiRequestError):
    """Raised when a track thumbnail is missing or cannot be retrieved."""


class ResponseParseError(WaveCliError):
    """Raised when an API response body cannot be parsed into track records."""


class ConfigurationError(WaveCliError):
    """Raised for issues related to configuration loading or validation."""
