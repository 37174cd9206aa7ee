"""Synthetic provider implementation.

Generates plausible stations around the origin. All randomness comes from
an injectable ``random.Random`` so results are reproducible under a seed.
Station ids embed the generation time and are not stable across queries.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

import aiohttp

from ...filters import matches_filters
from ...geo import random_point_within
from ...models import NETWORKS, STATION_STATUSES, ChargingStation, FilterSettings
from ..base import BaseProvider
from ..loader import ProviderManifest
from .const import (
    ADDRESSES,
    DETAIL_ADDRESS,
    DETAIL_LATITUDE,
    DETAIL_LONGITUDE,
    GENERATED_CONNECTORS,
    MAX_CONNECTORS,
    MAX_STATIONS,
    MIN_STATIONS,
    OPENING_HOURS,
    POWER_OPTIONS_KW,
    RADIUS_SLACK,
    STATION_NAMES,
)

_LOGGER = logging.getLogger(__name__)


class Provider(BaseProvider):
    """Provider that synthesizes stations instead of calling a directory."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        manifest: ProviderManifest,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        seed: int | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the provider."""
        super().__init__(
            session,
            manifest,
            base_url=base_url,
            api_uri=api_uri,
            timeout=timeout,
            retry_count=retry_count,
        )
        self._rng = rng if rng is not None else random.Random(seed)
        self._clock = clock or time.time

    async def _fetch_stations(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        filters: FilterSettings | None,
    ) -> list[ChargingStation]:
        generated_at = int(self._clock() * 1000)
        count = self._rng.randrange(MIN_STATIONS, MAX_STATIONS)
        stations: list[ChargingStation] = []
        for index in range(count):
            station = self._generate_station(
                index,
                generated_at,
                latitude,
                longitude,
                radius * RADIUS_SLACK,
            )
            # Hints are applied here; the finder re-applies them regardless.
            if filters is None or matches_filters(station, filters):
                stations.append(station)
        _LOGGER.debug(
            "Provider %s generated %s candidates, %s matched hints",
            self.provider_id,
            count,
            len(stations),
        )
        return stations

    async def _fetch_station(self, station_id: str) -> ChargingStation:
        return ChargingStation(
            id=station_id,
            name=f"Charging Station {station_id}",
            address=DETAIL_ADDRESS,
            latitude=DETAIL_LATITUDE,
            longitude=DETAIL_LONGITUDE,
            connector_types=frozenset({"CCS1", "Tesla", "CHAdeMO"}),
            power_kw=150,
            status="Available",
            network="Tesla Supercharger",
            opening_hours="Open 24/7",
        )

    def _generate_station(
        self,
        index: int,
        generated_at: int,
        latitude: float,
        longitude: float,
        max_distance: float,
    ) -> ChargingStation:
        rng = self._rng
        station_latitude, station_longitude, distance = random_point_within(
            rng, latitude, longitude, max_distance
        )
        return ChargingStation(
            id=f"station_{index}_{generated_at}",
            name=rng.choice(STATION_NAMES),
            address=rng.choice(ADDRESSES),
            latitude=station_latitude,
            longitude=station_longitude,
            connector_types=self._pick_connectors(),
            power_kw=rng.choice(POWER_OPTIONS_KW),
            status=rng.choice(STATION_STATUSES),
            network=rng.choice(NETWORKS),
            opening_hours=rng.choice(OPENING_HOURS),
            distance=distance,
        )

    def _pick_connectors(self) -> frozenset[str]:
        # Draws may repeat, so a station ends up with one to three connectors.
        draws = self._rng.randint(1, MAX_CONNECTORS)
        return frozenset(self._rng.choice(GENERATED_CONNECTORS) for _ in range(draws))
