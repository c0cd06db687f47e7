"""Search controller — runs lookups and guards the display against stale results.

Responsibilities:
  - Issue a ticket (monotonic generation) for every user action
  - Resolve countries and neighbours through the repository
  - Drop results of superseded lookups silently
  - Convert every failure into a single rendered error message

Superseded lookups are not cancelled; they run to completion and their
results are discarded. Only the current ticket may render or toggle the
loader.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable

from countrylens.errors import (
    CountryLensError,
    NotFoundError,
    RandomSearchError,
    RegionSearchError,
)
from countrylens.integrations.rest_countries import RestCountriesClient
from countrylens.orchestrator.render_port import RenderPort
from countrylens.orchestrator.schemas import LookupKind, LookupTicket
from countrylens.services.cache import ExpiringCache, country_cache
from countrylens.services.repository import CountryRepository

logger = logging.getLogger(__name__)


class SearchController:
    """Main dispatcher — maps user actions to lookups and render calls."""

    def __init__(
        self,
        repository: CountryRepository,
        client: RestCountriesClient,
        renderer: RenderPort,
        rng: random.Random | None = None,
    ):
        self.repository = repository
        self.client = client
        self.renderer = renderer
        self.current_generation = 0
        self._rng = rng or random.Random()
        self._tasks: set[asyncio.Task] = set()

    # ─── Tickets ───

    def _issue(self, kind: LookupKind, query: str | None) -> LookupTicket:
        self.current_generation += 1
        return LookupTicket(generation=self.current_generation, kind=kind, query=query)

    def is_current(self, ticket: LookupTicket) -> bool:
        return ticket.generation == self.current_generation

    def _begin(self, ticket: LookupTicket) -> None:
        logger.info("Lookup start | gen=%d | kind=%s | query=%s", ticket.generation, ticket.kind.value, ticket.query)
        self.renderer.set_loading(True)
        self.renderer.clear_results()

    # ─── Entry points ───

    async def start_lookup(self, kind: LookupKind, payload: str | None = None) -> None:
        if kind == LookupKind.BY_NAME:
            await self.lookup_by_name(payload or "")
        elif kind == LookupKind.BY_REGION:
            await self.lookup_by_region(payload or "")
        elif kind == LookupKind.RANDOM:
            await self.lookup_random()
        else:
            raise ValueError(f"Unknown lookup kind: {kind}")

    def dispatch(self, kind: LookupKind, payload: str | None = None) -> asyncio.Task:
        """Schedule a lookup without waiting for it; a newer dispatch supersedes it."""
        task = asyncio.create_task(self.start_lookup(kind, payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight lookup, superseded ones included."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ─── UI triggers ───

    def submit_search(self, text: str) -> asyncio.Task | None:
        name = text.strip().lower()
        if not name:
            return None
        return self.dispatch(LookupKind.BY_NAME, name)

    def click_random(self) -> asyncio.Task:
        return self.dispatch(LookupKind.RANDOM)

    def click_region(self, region: str) -> asyncio.Task:
        return self.dispatch(LookupKind.BY_REGION, region)

    def click_neighbor(self, name: str) -> asyncio.Task:
        return self.dispatch(LookupKind.BY_NAME, name)

    # ─── Lookups ───

    async def lookup_by_name(self, query: str) -> None:
        ticket = self._issue(LookupKind.BY_NAME, query)
        self._begin(ticket)

        try:
            record = await self.repository.resolve_by_name(query)

            if not self.is_current(ticket):
                logger.info("Lookup superseded | gen=%d | query=%s", ticket.generation, query)
                return

            if record is None:
                raise NotFoundError()

            self.renderer.render(record)

            if record.has_borders:
                neighbors = await self.repository.resolve_by_codes(record.borders)
                if not self.is_current(ticket):
                    logger.info("Neighbors superseded | gen=%d | country=%s", ticket.generation, record.common_name)
                    return
                self.renderer.render_neighbors(neighbors)
            else:
                self.renderer.hide_neighbors()

            logger.info("Lookup rendered | gen=%d | country=%s", ticket.generation, record.common_name)

        except CountryLensError as e:
            self._fail(ticket, str(e))
        except Exception as e:
            if self.is_current(ticket):
                logger.exception("Lookup failed unexpectedly | gen=%d | query=%s", ticket.generation, query)
            self._fail(ticket, str(e) or e.__class__.__name__)
        finally:
            if self.is_current(ticket):
                self.renderer.set_loading(False)

    async def lookup_by_region(self, region: str) -> None:
        await self._lookup_from_list(
            self._issue(LookupKind.BY_REGION, region),
            lambda: self.client.list_names_by_region(region),
            RegionSearchError,
        )

    async def lookup_random(self) -> None:
        await self._lookup_from_list(
            self._issue(LookupKind.RANDOM, None),
            self.client.list_all_names,
            RandomSearchError,
        )

    async def _lookup_from_list(
        self,
        ticket: LookupTicket,
        fetch_names: Callable[[], Awaitable[list[str]]],
        error_cls: type[CountryLensError],
    ) -> None:
        """Pick a random name from a fetched list and look it up by name."""
        self._begin(ticket)

        try:
            names = await fetch_names()
            picked = self._rng.choice(names)
        except Exception as e:
            error = error_cls()
            logger.warning(
                "Lookup failed | gen=%d | kind=%s | %s | cause=%s",
                ticket.generation, ticket.kind.value, error, str(e)[:200],
            )
            if self.is_current(ticket):
                self.renderer.render_error(str(error))
                self.renderer.set_loading(False)
            return

        if not self.is_current(ticket):
            logger.info("Lookup superseded | gen=%d | kind=%s", ticket.generation, ticket.kind.value)
            return

        logger.info("Lookup picked | gen=%d | kind=%s | country=%s", ticket.generation, ticket.kind.value, picked)
        await self.lookup_by_name(picked)

    def _fail(self, ticket: LookupTicket, message: str) -> None:
        if not self.is_current(ticket):
            logger.info("Error discarded for superseded lookup | gen=%d | %s", ticket.generation, message)
            return
        logger.warning("Lookup error | gen=%d | query=%s | %s", ticket.generation, ticket.query, message)
        self.renderer.render_error(message)


def build_controller(renderer: RenderPort, cache: ExpiringCache | None = None) -> SearchController:
    """Wire the default fetcher, client, cache and repository around ``renderer``."""
    client = RestCountriesClient()
    repository = CountryRepository(client, cache or country_cache)
    return SearchController(repository, client, renderer)
