"""Async HTTP client with capped exponential-backoff retries."""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from ..core.exceptions import HTTPFetchError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({408, 425, 429, 500, 502, 503, 504})


class FetchClient:
    """Thin wrapper over one ``aiohttp.ClientSession``.

    Every request gets up to ``attempts`` tries; the delay before retry ``n``
    (0-based) is ``min(base_delay * 2**n, max_delay)``. Transport errors,
    timeouts, 429 and 5xx responses are retried, other client errors are not.
    """

    def __init__(
        self,
        attempts: int = 4,
        base_delay: float = 1.0,
        max_delay: float = 100.0,
        timeout: float = 60.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.attempts = attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.timeout = timeout
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "FetchClient":
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": "cdragon-assets crawler"},
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None

    def backoff_delay(self, attempt: int) -> float:
        return min(self.base_delay * (2**attempt), self.max_delay)

    async def get_json(self, url: str) -> Any:
        """GET ``url`` and decode the body as JSON."""
        return await self._request(url, as_json=True)

    async def get_text(self, url: str) -> str:
        """GET ``url`` and return the body as text."""
        return await self._request(url, as_json=False)

    async def _request(self, url: str, as_json: bool) -> Any:
        if self.session is None:
            raise RuntimeError("FetchClient must be used as an async context manager")

        last_error: Optional[HTTPFetchError] = None
        for attempt in range(self.attempts):
            try:
                async with self.session.get(url) as response:
                    if response.status == 200:
                        if as_json:
                            # The mirror does not always send application/json.
                            return await response.json(content_type=None)
                        return await response.text()

                    error = HTTPFetchError(url, f"HTTP {response.status}", status=response.status)
                    if response.status not in RETRYABLE_STATUSES:
                        raise error
                    last_error = error
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                last_error = HTTPFetchError(url, f"{type(e).__name__}: {e}")

            if attempt + 1 < self.attempts:
                delay = self.backoff_delay(attempt)
                logger.warning(
                    f"Attempt {attempt + 1} for {url} failed: {last_error}. "
                    f"Retrying in {delay:.1f}s..."
                )
                await asyncio.sleep(delay)

        logger.error(f"All {self.attempts} attempts failed for {url}")
        raise last_error
