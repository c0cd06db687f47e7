"""HTTP GET with bounded retries and exponential backoff on rate limiting.

Retry policy (per call, attempts ``0..max_retries``):
  - 429            → back off ``base * 2**attempt`` seconds, then retry;
                     on the last attempt raise RateLimitError
  - other non-2xx  → return None at once (treated as "not found")
  - transport error→ retry immediately, no backoff;
                     on the last attempt raise NetworkError
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

import httpx

from countrylens.config import settings
from countrylens.errors import NetworkError, RateLimitError

logger = logging.getLogger(__name__)


class RetryingFetcher:
    """Async JSON fetcher shared by every REST Countries call."""

    def __init__(
        self,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        timeout: float | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.max_retries = max(0, settings.fetch_max_retries if max_retries is None else max_retries)
        self.backoff_base = settings.backoff_base_seconds if backoff_base is None else backoff_base
        self.timeout = settings.http_timeout_seconds if timeout is None else timeout
        self._sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        return self.backoff_base * (2 ** attempt)

    async def fetch_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
        max_retries: int | None = None,
    ) -> Any | None:
        """GET ``url`` and return the decoded JSON body, or None on a non-2xx answer."""
        retries = max(0, self.max_retries if max_retries is None else max_retries)
        max_attempts = retries + 1

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(max_attempts):
                last_attempt = attempt == retries
                start = time.monotonic()
                try:
                    resp = await client.get(url, params=params)
                    elapsed_ms = int((time.monotonic() - start) * 1000)

                    if resp.status_code == 429:
                        if last_attempt:
                            logger.warning(
                                "Fetch rate-limited | attempts exhausted=%d | %dms | url=%s",
                                max_attempts, elapsed_ms, url,
                            )
                            raise RateLimitError(url)
                        delay = self.backoff_delay(attempt)
                        logger.warning(
                            "Fetch rate-limited | attempt=%d/%d | backoff=%.1fs | url=%s",
                            attempt + 1, max_attempts, delay, url,
                        )
                        await self._sleep(delay)
                        continue

                    if not resp.is_success:
                        logger.info(
                            "Fetch | status=%d | %dms | url=%s",
                            resp.status_code, elapsed_ms, url,
                        )
                        return None

                    data = resp.json()
                    logger.info("Fetch OK | status=%d | %dms | url=%s", resp.status_code, elapsed_ms, url)
                    return data

                except (httpx.TransportError, ValueError) as e:
                    elapsed_ms = int((time.monotonic() - start) * 1000)
                    logger.warning(
                        "Fetch error | attempt=%d/%d | %dms | url=%s | %s",
                        attempt + 1, max_attempts, elapsed_ms, url, str(e)[:200],
                    )
                    if last_attempt:
                        raise NetworkError(url) from e

        # Unreachable: the final attempt always returns or raises
        raise NetworkError(url)
