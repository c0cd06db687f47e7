"""Country repository — cache-or-fetch resolution of names and border codes.

Cache layout:
  - ``<lowercased query>`` and ``<lowercased common name>`` → one record
  - ``neighbors_<SORTED_CODES_JOINED_BY_UNDERSCORE>``       → list of records
"""

import logging
from typing import Iterable

from pydantic import ValidationError

from countrylens.integrations.rest_countries import RestCountriesClient
from countrylens.orchestrator.schemas import CountryRecord
from countrylens.services.cache import ExpiringCache

logger = logging.getLogger(__name__)


class CountryRepository:
    """Resolves countries through the expiring cache, falling back to the API."""

    def __init__(self, client: RestCountriesClient, cache: ExpiringCache):
        self.client = client
        self.cache = cache

    @staticmethod
    def neighbors_key(codes: Iterable[str]) -> str:
        """Order-independent cache key for a set of border codes."""
        return "neighbors_" + "_".join(sorted(codes))

    async def resolve_by_name(self, name: str) -> CountryRecord | None:
        """Exact match first, then fuzzy; the first hit wins."""
        key = name.lower()
        cached = await self._cached_record(key)
        if cached:
            return cached

        results = await self.client.by_exact_name(name)
        if not results:
            logger.info("Exact match empty — trying fuzzy | name=%s", name)
            results = await self.client.by_fuzzy_name(name)
        if not results:
            logger.info("Country not found | name=%s", name)
            return None

        record = CountryRecord.from_api(results[0])
        payload = record.model_dump(mode="json")
        await self.cache.set(key, payload)
        await self.cache.set(record.key, payload)
        logger.info("Country resolved | query=%s | country=%s", name, record.common_name)
        return record

    async def resolve_by_codes(self, codes: Iterable[str]) -> list[CountryRecord]:
        """Records for every code in one batched call; cached only when non-empty."""
        codes = sorted(set(codes))
        if not codes:
            return []

        key = self.neighbors_key(codes)
        cached = await self._cached_records(key)
        if cached:
            return cached

        records = [CountryRecord.from_api(raw) for raw in await self.client.by_codes(codes)]
        if records:
            await self.cache.set(key, [r.model_dump(mode="json") for r in records])
        logger.info("Neighbors resolved | codes=%d | records=%d", len(codes), len(records))
        return records

    async def _cached_record(self, key: str) -> CountryRecord | None:
        cached = await self.cache.get(key)
        if not cached:
            return None
        try:
            return CountryRecord.model_validate(cached)
        except ValidationError:
            logger.warning("Cached record unreadable — refetching | key=%s", key)
            await self.cache.delete(key)
            return None

    async def _cached_records(self, key: str) -> list[CountryRecord]:
        cached = await self.cache.get(key)
        if not cached:
            return []
        try:
            return [CountryRecord.model_validate(item) for item in cached]
        except (ValidationError, TypeError):
            logger.warning("Cached neighbors unreadable — refetching | key=%s", key)
            await self.cache.delete(key)
            return []
