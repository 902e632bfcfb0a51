# ABOUTME: Async HTTP client abstraction for art-collection API calls.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import asyncio
import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

QueryParams = Mapping[str, str] | Sequence[tuple[str, str]]


class ProviderFetchError(Exception):
    """Raised when a request to an art-collection provider fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for async GET operations against collection APIs."""

    async def get(self, url: str, params: QueryParams | None = None) -> Any: ...


class ArtrefHttpClient:
    """Async HTTP client with rate limiting and retry for collection API calls.

    Wraps httpx.AsyncClient with a configurable request interval and retry
    logic for transient failures (429, 5xx). Every call is independent and
    idempotent.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "artref/0.1.0"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0
        self._rate_lock = asyncio.Lock()

    async def get(self, url: str, params: QueryParams | None = None) -> Any:
        """Send a GET request with rate limiting and retry.

        Args:
            url: The URL to request.
            params: Optional query parameters; a sequence of pairs allows
                repeated keys.

        Returns:
            Parsed JSON for JSON responses, otherwise the raw response text.

        Raises:
            ProviderFetchError: On transport errors, non-retryable HTTP errors,
                malformed JSON, or exhausted retries.
        """
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            await self._rate_limit()
            try:
                response = await self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise ProviderFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return self._decode(url, response)

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise ProviderFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        raise ProviderFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    @staticmethod
    def _decode(url: str, response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response.text
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderFetchError(f"Malformed JSON from {url}: {exc}") from exc

    async def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        async with self._rate_lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval and self._last_request_time > 0:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ArtrefHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
