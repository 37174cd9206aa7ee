from __future__ import annotations

import pytest

from pyevchargefinder.models import ChargingStation


def make_station(
    station_id: str = "s1",
    *,
    connectors: tuple[str, ...] = ("CCS1",),
    power_kw: int = 50,
    status: str = "Available",
    network: str = "ChargePoint",
    distance: float | None = 1.0,
) -> ChargingStation:
    return ChargingStation(
        id=station_id,
        name=f"Station {station_id}",
        address="1 Main St",
        latitude=37.0,
        longitude=-122.0,
        connector_types=frozenset(connectors),
        power_kw=power_kw,
        status=status,
        network=network,
        opening_hours="Open 24/7",
        distance=distance,
    )


@pytest.fixture
def station_factory():
    return make_station
