"""HTTP client for iTranvías API requests."""

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

import aiohttp

from coruna_buses.adapters.api_request_logger import log_api_request, log_api_response
from coruna_buses.adapters.itranvias_api.constants import DEFAULT_HEADERS
from coruna_buses.domain.errors import (
    UpstreamHttpError,
    UpstreamMalformed,
    UpstreamTimeout,
    UpstreamUnreachable,
)
from coruna_buses.domain.ports.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class ItranviasHttpClient(UpstreamClient):
    """Single-shot JSON fetcher with a bounded timeout and no retries."""

    def __init__(self, session: "ClientSession | None" = None, timeout_ms: int = 8000) -> None:
        """Initialize with an aiohttp session and a per-request timeout.

        Args:
            session: aiohttp ClientSession used for every request.
            timeout_ms: Total time allowed for one request, in milliseconds.
        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        self._timeout_ms = timeout_ms

    async def _read_object(self, response: "ClientResponse", url: str) -> dict[str, Any]:
        """Decode the response body, requiring a JSON object."""
        if not 200 <= response.status < 300:
            body = await response.text()
            logger.warning(
                f"iTranvías API returned status {response.status} for {url}: {body[:200]}"
            )
            raise UpstreamHttpError(url, response.status)

        try:
            data = await response.json(content_type=None)
        except ValueError as e:
            raise UpstreamMalformed(url, f"invalid JSON from {url}: {e}") from e

        if not isinstance(data, dict):
            kind = type(data).__name__
            raise UpstreamMalformed(url, f"expected a JSON object from {url}, got {kind}")
        return data

    async def fetch_json(self, url: str) -> dict[str, Any]:
        """Fetch a JSON object from the iTranvías API.

        Args:
            url: Fully built request URL.

        Returns:
            The decoded JSON object.

        Raises:
            UpstreamTimeout: The configured timeout elapsed.
            UpstreamHttpError: Non-2xx response.
            UpstreamMalformed: The body is not a JSON object.
            UpstreamUnreachable: Any other transport failure.
        """
        if not self._session:
            raise RuntimeError("iTranvías API requires an aiohttp session")

        log_api_request("GET", url, timeout_ms=self._timeout_ms)
        started = time.monotonic()
        try:
            async with self._session.get(
                url, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                data = await self._read_object(response, url)
                log_api_response(url, response.status, (time.monotonic() - started) * 1000)
                return data
        except asyncio.TimeoutError as e:
            logger.warning(f"Timed out after {self._timeout_ms} ms fetching {url}")
            raise UpstreamTimeout(url, f"no response within {self._timeout_ms} ms") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Error fetching {url}: {e}")
            raise UpstreamUnreachable(url, str(e)) from e
