"""Shared HTTP access for resolver plugins: pooled client plus rate limiting."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any

import httpx

from aliasresolve.core.exceptions import RateLimitError, ResolverUnavailableError

USER_AGENT = "aliasresolve/0.1"


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_second: float = 5.0
    burst_size: int = 2
    retry_on_429: bool = True
    max_429_retries: int = 1
    backoff_base: float = 1.0
    backoff_factor: float = 2.0
    max_backoff: float = 30.0


@dataclass
class RateLimitState:
    """Tracks rate limit state for one upstream."""

    request_times: deque[float] = field(default_factory=deque)
    retry_after_until: float = 0.0
    consecutive_429s: int = 0


class AsyncRateLimiter:
    """Async sliding-window rate limiter with 429 back-off."""

    def __init__(self, config: RateLimitConfig) -> None:
        self.config = config
        self._state = RateLimitState()
        self._lock = asyncio.Lock()
        self._semaphore: asyncio.Semaphore | None = None

    async def acquire(self) -> None:
        """Acquire a permit to make a request."""
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.config.burst_size)

        async with self._semaphore:
            async with self._lock:
                await self._wait_for_permit()
                self._record_request()

    async def _wait_for_permit(self) -> None:
        """Wait until a request is permitted."""
        now = time.monotonic()

        # Still inside a 429 back-off window
        if now < self._state.retry_after_until:
            await asyncio.sleep(self._state.retry_after_until - now)
            now = time.monotonic()

        self._cleanup_old_requests(now)

        wait_time = 0.0

        if self.config.requests_per_second:
            window_start = now - 1.0
            recent = [t for t in self._state.request_times if t > window_start]
            if len(recent) >= self.config.requests_per_second:
                wait_time = max(wait_time, recent[0] + 1.0 - now)

        if wait_time > 0:
            await asyncio.sleep(wait_time)

    def _record_request(self) -> None:
        self._state.request_times.append(time.monotonic())

    def _cleanup_old_requests(self, now: float) -> None:
        """Drop request times that fell out of the one-second window."""
        cutoff = now - 1.0
        while self._state.request_times and self._state.request_times[0] < cutoff:
            self._state.request_times.popleft()

    def handle_429(self, retry_after: float | None = None) -> float:
        """Register a 429 response, returning how long to wait."""
        self._state.consecutive_429s += 1

        if retry_after:
            wait_time = min(retry_after, self.config.max_backoff)
        else:
            wait_time = min(
                self.config.backoff_base
                * self.config.backoff_factor ** (self._state.consecutive_429s - 1),
                self.config.max_backoff,
            )

        self._state.retry_after_until = time.monotonic() + wait_time
        return wait_time

    def reset_429_state(self) -> None:
        self._state.consecutive_429s = 0

    @property
    def should_retry_429(self) -> bool:
        """Whether another 429 retry should be attempted."""
        return (
            self.config.retry_on_429
            and self._state.consecutive_429s < self.config.max_429_retries
        )


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class HttpFetcher:
    """
    Rate-limited HTTP access for one upstream source.

    Plugins hold a fetcher rather than inheriting HTTP behaviour. Several
    fetchers may share one ``httpx.AsyncClient``; a fetcher only closes a
    client it created itself.
    """

    def __init__(
        self,
        source: str,
        *,
        timeout: float = 10.0,
        rate_limit: RateLimitConfig | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.source = source
        self.timeout = timeout
        self._headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if headers:
            self._headers.update(headers)
        self._client = client
        self._owns_client = client is None
        self._rate_limiter = AsyncRateLimiter(rate_limit or RateLimitConfig())

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request with rate limiting and 429 handling.

        Transport failures are raised as ``ResolverUnavailableError``; HTTP
        error statuses other than 429 are returned for the caller to inspect.
        """
        headers = {**self._headers, **kwargs.pop("headers", {})}
        kwargs.setdefault("timeout", self.timeout)

        await self._rate_limiter.acquire()
        client = self._get_client()

        while True:
            try:
                response = await client.request(method, url, headers=headers, **kwargs)
            except httpx.HTTPError as e:
                raise ResolverUnavailableError(
                    message=f"HTTP error: {e}",
                    source=self.source,
                ) from e

            if response.status_code != 429:
                self._rate_limiter.reset_429_state()
                return response

            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            if not self._rate_limiter.should_retry_429:
                raise RateLimitError(
                    message="Rate limit exceeded",
                    source=self.source,
                    retry_after=retry_after,
                )
            wait_time = self._rate_limiter.handle_429(retry_after)
            await asyncio.sleep(wait_time)

    async def get_json(self, url: str, **kwargs: Any) -> Any | None:
        """GET a JSON document; None when the upstream answers with an error status."""
        response = await self.request("GET", url, **kwargs)
        if not response.is_success:
            return None
        return response.json()

    async def post_json(self, url: str, payload: Any, **kwargs: Any) -> Any | None:
        """POST a JSON body and decode the JSON answer; None on error status."""
        response = await self.request("POST", url, json=payload, **kwargs)
        if not response.is_success:
            return None
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
