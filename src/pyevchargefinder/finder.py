"""Station discovery pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from .cache import StationCache
from .exceptions import FetchTimeoutError
from .filters import annotate_compatibility, apply_filters, filter_compatible
from .models import ChargingStation, StationQuery
from .provider.base import BaseProvider
from .ranking import rank
from .util import validate_query

_LOGGER = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


class StationFinder:
    """Find, filter and rank stations around an origin.

    The cache holds the filtered candidate list for a query. Vehicle
    compatibility and sort order are applied per call on top of it, so
    queries that only differ in vehicle or sort key share a cache entry.
    """

    def __init__(
        self,
        provider: BaseProvider,
        cache: StationCache[tuple[ChargingStation, ...]] | None = None,
        *,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
    ) -> None:
        self._provider = provider
        self._cache = cache if cache is not None else StationCache()
        self._fetch_timeout = fetch_timeout

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    @property
    def cache(self) -> StationCache[tuple[ChargingStation, ...]]:
        return self._cache

    async def search(self, query: StationQuery) -> list[ChargingStation]:
        query = validate_query(query)
        candidates = await self._cache.get_or_fetch(
            query.cache_key(),
            lambda: self._fetch_candidates(query),
        )
        stations = list(candidates)
        if query.vehicle is not None:
            stations = annotate_compatibility(stations, query.vehicle)
            if query.compatible_only:
                stations = filter_compatible(stations, query.vehicle)
        return rank(stations, query.sort_by)

    async def get_station(self, station_id: str) -> ChargingStation:
        """Look up one station; detail lookups bypass the cache."""
        async with self._timeout():
            return await self._provider.get_station(station_id)

    async def _fetch_candidates(self, query: StationQuery) -> tuple[ChargingStation, ...]:
        filters = query.filters
        async with self._timeout():
            candidates = await self._provider.find_stations(
                query.latitude,
                query.longitude,
                filters.distance,
                filters,
            )
        matched = apply_filters(candidates, filters)
        _LOGGER.debug(
            "Catalog %s returned %s candidates, %s passed filters",
            self._provider.provider_id,
            len(candidates),
            len(matched),
        )
        return tuple(matched)

    @asynccontextmanager
    async def _timeout(self) -> AsyncIterator[None]:
        try:
            async with asyncio.timeout(self._fetch_timeout):
                yield
        except TimeoutError as exc:
            _LOGGER.warning("Catalog %s fetch timed out", self._provider.provider_id)
            raise FetchTimeoutError("Station catalog did not respond in time.") from exc
