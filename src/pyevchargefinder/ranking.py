"""Ordering of station lists.

``sorted`` is stable, so ties keep the catalog's emission order.
"""

from __future__ import annotations

from collections.abc import Iterable

from .exceptions import InvalidQueryError
from .models import ChargingStation

STATUS_PRIORITY = {"Available": 0, "Busy": 1, "Offline": 2}


def _distance_key(station: ChargingStation) -> float:
    # Missing distances sort first.
    return station.distance if station.distance is not None else 0.0


def _power_key(station: ChargingStation) -> int:
    return -station.power_kw


def _availability_key(station: ChargingStation) -> int:
    return STATUS_PRIORITY.get(station.status, len(STATUS_PRIORITY))


_SORT_KEYS = {
    "distance": _distance_key,
    "power": _power_key,
    "availability": _availability_key,
}


def rank(stations: Iterable[ChargingStation], sort_by: str = "distance") -> list[ChargingStation]:
    key = _SORT_KEYS.get(sort_by)
    if key is None:
        raise InvalidQueryError(f"Unknown sort key: {sort_by}.")
    return sorted(stations, key=key)
