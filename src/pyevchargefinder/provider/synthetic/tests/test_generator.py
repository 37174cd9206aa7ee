import random

import pytest

from pyevchargefinder.geo import haversine_miles
from pyevchargefinder.models import FilterSettings
from pyevchargefinder.provider.loader import ProviderManifest
from pyevchargefinder.provider.synthetic.api import Provider
from pyevchargefinder.provider.synthetic.const import (
    GENERATED_CONNECTORS,
    MAX_STATIONS,
    MIN_STATIONS,
    POWER_OPTIONS_KW,
)

MANIFEST = ProviderManifest(id="synthetic", name="Synthetic", stable_ids=False)
GENERATED_AT = 1_700_000_000.0


class _DummySession:
    def request(self, *args, **kwargs):
        raise RuntimeError("Synthetic provider must not make requests.")


def _provider(seed: int = 42) -> Provider:
    return Provider(_DummySession(), MANIFEST, seed=seed, clock=lambda: GENERATED_AT)


@pytest.mark.asyncio
async def test_same_seed_generates_same_stations():
    first = await _provider().find_stations(37.7749, -122.4194, 10)
    second = await _provider().find_stations(37.7749, -122.4194, 10)
    assert first == second


@pytest.mark.asyncio
async def test_injected_rng_is_used():
    provider = Provider(
        _DummySession(), MANIFEST, rng=random.Random(7), clock=lambda: GENERATED_AT
    )
    expected = await _provider(seed=7).find_stations(51.5, -0.12, 3)
    assert await provider.find_stations(51.5, -0.12, 3) == expected


@pytest.mark.asyncio
async def test_generated_stations_are_plausible():
    for seed in range(25):
        stations = await _provider(seed).find_stations(37.7749, -122.4194, 10)
        assert MIN_STATIONS <= len(stations) < MAX_STATIONS
        for index, station in enumerate(stations):
            assert station.id == f"station_{index}_1700000000000"
            assert station.distance is not None
            assert 0 <= station.distance <= 8
            measured = haversine_miles(37.7749, -122.4194, station.latitude, station.longitude)
            assert measured == pytest.approx(station.distance, rel=0.02, abs=0.01)
            assert measured <= 10
            assert station.connector_types
            assert station.connector_types <= set(GENERATED_CONNECTORS)
            assert station.power_kw in POWER_OPTIONS_KW


@pytest.mark.asyncio
async def test_filter_hints_are_applied():
    filters = FilterSettings(availability_statuses={"Available"}, min_power_output=100)
    for seed in range(10):
        stations = await _provider(seed).find_stations(37.7749, -122.4194, 10, filters)
        assert all(station.status == "Available" for station in stations)
        assert all(station.power_kw >= 100 for station in stations)


@pytest.mark.asyncio
async def test_station_detail_is_fixed():
    station = await _provider().get_station("station_3_1700000000000")
    assert station.id == "station_3_1700000000000"
    assert station.connector_types == frozenset({"CCS1", "Tesla", "CHAdeMO"})
    assert station.power_kw == 150
    assert station.network == "Tesla Supercharger"
    assert station.distance is None
