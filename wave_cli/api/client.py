"""
Async client for the Wave music-search API.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from types import TracebackType
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import ValidationError

from wave_cli.exceptions import ApiRequestError, ResponseParseError, ThumbnailError
from wave_cli.models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_SEARCH_ENDPOINT,
    DEFAULT_USER_AGENT,
    REQUEST_METHODS,
    WaveConfig,
)
from wave_cli.models.track import SearchResponse, WaveTrack

log = logging.getLogger(__name__)


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class WaveAPIClient:
    """
    Async client for the Wave JSON API.

    One search request returns a flat list of tracks; a second, optional
    request retrieves the raw bytes of a track's thumbnail image.
    """

    THUMBNAIL_CHUNK_SIZE = 65536  # 64 KB

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        search_endpoint: str = DEFAULT_SEARCH_ENDPOINT,
        request_method: str = "GET",
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initializes the API client.

        Args:
            base_url: Root of the Wave API, e.g. ``https://api.wireway.ch/wave/``.
            search_endpoint: Path of the search endpoint relative to ``base_url``.
            request_method: Default HTTP method for searches, GET or POST.
            timeout: Total timeout for a single request, in seconds.
            user_agent: Value of the User-Agent header.
        """
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.search_endpoint = search_endpoint.strip("/")
        self.request_method = self._check_method(request_method)
        self.timeout = timeout
        self.user_agent = user_agent

        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_config(cls, config: WaveConfig) -> "WaveAPIClient":
        return cls(
            base_url=config.base_url,
            search_endpoint=config.search_endpoint,
            request_method=config.request_method,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )

    @staticmethod
    def _check_method(method: str) -> str:
        method = method.upper()
        if method not in REQUEST_METHODS:
            raise ValueError(f"Unsupported request method: {method}")
        return method

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(
                    total=self.timeout, connect=min(15, self.timeout)
                ),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "WaveAPIClient":
        await self._initialize_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def api_call(
        self, endpoint: str, method: str = "GET", **params: Any
    ) -> Dict[str, Any]:
        """
        Makes an API call and returns the decoded JSON object.

        GET requests carry ``params`` in the query string, POST requests send
        them as a form body.

        Raises:
            ApiRequestError: On transport failures or a non-2xx status.
            ResponseParseError: If the body is not a JSON object.
        """
        await self._initialize_session()
        method = self._check_method(method)
        url = self.base_url + endpoint.lstrip("/")
        request_kwargs = {"params": params} if method == "GET" else {"data": params}

        start_time = time.monotonic()
        try:
            async with self._session.request(method, url, **request_kwargs) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(
                    "%s %s -> HTTP %d (%.0f ms)", method, endpoint, r.status, duration_ms
                )

                if not _is_success(r.status):
                    raise ApiRequestError(
                        f"Failed to fetch data: HTTP {r.status}", status=r.status
                    )

                try:
                    payload = await r.json(content_type=None)
                except ValueError as e:
                    log.error("Failed to parse JSON from %s: %s", endpoint, e)
                    raise ResponseParseError(
                        f"Response from {endpoint} is not valid JSON: {e}"
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug("API call to %s failed: %r", endpoint, e)
            raise ApiRequestError(f"Request to {endpoint} failed: {e}") from e

        if not isinstance(payload, dict):
            raise ResponseParseError(
                f"Expected a JSON object from {endpoint}, "
                f"got {type(payload).__name__}."
            )
        return payload

    async def search(
        self, query: str, method: Optional[str] = None, limit: Optional[int] = None
    ) -> List[WaveTrack]:
        """
        Searches the Wave API and returns the matching tracks in API order.

        Args:
            query: The search term.
            method: Overrides the client's default request method.
            limit: Keep at most this many results (``None`` or 0 keeps all).
        """
        query = (query or "").strip()
        if not query:
            raise ValueError("Search query cannot be empty.")
        if limit is not None and limit < 0:
            raise ValueError("Result limit cannot be negative (use 0 for no limit).")

        payload = await self.api_call(
            self.search_endpoint, method=method or self.request_method, q=query
        )

        try:
            response = SearchResponse.model_validate(payload)
        except ValidationError as e:
            log.error("Failed to parse search response: %s", e)
            raise ResponseParseError(
                f"Unexpected search response ({e.error_count()} validation errors)."
            ) from e

        log.debug("Search for %r returned %d items.", query, len(response.items))
        if limit:
            return response.items[:limit]
        return response.items

    async def stream_thumbnail(
        self, url: str, chunk_size: int = THUMBNAIL_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """Yields the thumbnail image at ``url`` as raw byte chunks."""
        await self._initialize_session()
        try:
            async with self._session.get(url, allow_redirects=True) as r:
                if not _is_success(r.status):
                    raise ThumbnailError(
                        f"Failed to fetch thumbnail: HTTP {r.status}", status=r.status
                    )
                async for chunk in r.content.iter_chunked(chunk_size):
                    yield chunk
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ThumbnailError(f"Thumbnail request to {url} failed: {e}") from e

    async def fetch_thumbnail(self, url: str) -> bytes:
        """Returns the full thumbnail image at ``url``."""
        chunks = [chunk async for chunk in self.stream_thumbnail(url)]
        data = b"".join(chunks)
        log.debug("Fetched thumbnail %s (%d bytes).", url, len(data))
        return data

    async def thumbnail_for(self, track: WaveTrack) -> bytes:
        if not track.thumbnail:
            raise ThumbnailError(f"Track '{track}' has no thumbnail URL.")
        return await self.fetch_thumbnail(track.thumbnail)


def search_tracks(
    query: str,
    method: Optional[str] = None,
    limit: Optional[int] = None,
    **client_options: Any,
) -> List[WaveTrack]:
    """
    Blocking one-shot search: opens a client, runs the query and closes it.

    Extra keyword arguments are passed to :class:`WaveAPIClient`.
    """

    async def _search() -> List[WaveTrack]:
        async with WaveAPIClient(**client_options) as client:
            return await client.search(query, method=method, limit=limit)

    return asyncio.run(_search())
