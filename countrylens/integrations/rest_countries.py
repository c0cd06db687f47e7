"""REST Countries v3.1 integration.

Docs: https://restcountries.com
"""

import logging
from typing import Any
from urllib.parse import quote

from countrylens.config import settings
from countrylens.errors import NotFoundError
from countrylens.services.fetcher import RetryingFetcher

logger = logging.getLogger(__name__)


class RestCountriesClient:
    """Async client for the REST Countries API."""

    def __init__(self, fetcher: RetryingFetcher | None = None, base_url: str | None = None):
        self.fetcher = fetcher or RetryingFetcher()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")

    def _url(self, *segments: str) -> str:
        path = "/".join(quote(s, safe="") for s in segments)
        return f"{self.base_url}/{path}"

    # ─── Name lists (single attempt, uncached) ───

    async def list_all_names(self) -> list[str]:
        """Common names of every country."""
        data = await self.fetcher.fetch_json(self._url("all"), params={"fields": "name"}, max_retries=0)
        return self._parse_names(data, "all")

    async def list_names_by_region(self, region: str) -> list[str]:
        """Common names of the countries in ``region`` (e.g. ``europe``)."""
        data = await self.fetcher.fetch_json(
            self._url("region", region), params={"fields": "name"}, max_retries=0,
        )
        return self._parse_names(data, f"region={region}")

    # ─── Records ───

    async def by_exact_name(self, name: str) -> list[dict[str, Any]]:
        data = await self.fetcher.fetch_json(self._url("name", name), params={"fullText": "true"})
        return data if isinstance(data, list) else []

    async def by_fuzzy_name(self, name: str) -> list[dict[str, Any]]:
        data = await self.fetcher.fetch_json(self._url("name", name))
        return data if isinstance(data, list) else []

    async def by_codes(self, codes: list[str]) -> list[dict[str, Any]]:
        if not codes:
            return []
        data = await self.fetcher.fetch_json(self._url("alpha"), params={"codes": ",".join(codes)})
        return data if isinstance(data, list) else []

    def _parse_names(self, data: Any, source: str) -> list[str]:
        if not isinstance(data, list):
            logger.warning("REST Countries | no name list | source=%s", source)
            raise NotFoundError(f"No countries found ({source})")
        names = [
            entry["name"]["common"]
            for entry in data
            if isinstance(entry, dict) and (entry.get("name") or {}).get("common")
        ]
        if not names:
            raise NotFoundError(f"No countries found ({source})")
        logger.info("REST Countries names OK | count=%d | source=%s", len(names), source)
        return names
