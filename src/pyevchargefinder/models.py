"""Public data models."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Literal

CONNECTOR_TYPES: tuple[str, ...] = (
    "CCS1",
    "CCS2",
    "Type1",
    "Type2",
    "CHAdeMO",
    "Tesla",
    "NACS",
    "GB/T",
)
STATION_STATUSES: tuple[str, ...] = ("Available", "Busy", "Offline")
NETWORKS: tuple[str, ...] = (
    "Tesla Supercharger",
    "ChargePoint",
    "EVgo",
    "Electrify America",
    "IONITY",
    "Blink",
    "Other",
)

SortKey = Literal["distance", "power", "availability"]
SORT_KEYS: tuple[str, ...] = ("distance", "power", "availability")


def _vocabulary_sorted(values: Iterable[str], vocabulary: tuple[str, ...]) -> list[str]:
    order = {value: index for index, value in enumerate(vocabulary)}
    return sorted(values, key=lambda value: (order.get(value, len(order)), value))


@dataclass(frozen=True, slots=True)
class ProviderInfo:
    id: str
    stable_ids: bool


@dataclass(frozen=True, slots=True)
class ChargingStation:
    """A charging station as returned by a catalog.

    ``distance`` is filled in relative to the query origin and
    ``is_compatible`` relative to the requesting vehicle; neither is stored.
    """

    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    connector_types: frozenset[str]
    power_kw: int
    status: str
    network: str
    opening_hours: str
    distance: float | None = None
    is_compatible: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "connector_types", frozenset(self.connector_types))

    def with_distance(self, distance: float | None) -> ChargingStation:
        return replace(self, distance=distance)

    def with_compatibility(self, is_compatible: bool | None) -> ChargingStation:
        return replace(self, is_compatible=is_compatible)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "connectorTypes": _vocabulary_sorted(self.connector_types, CONNECTOR_TYPES),
            "powerKw": self.power_kw,
            "status": self.status,
            "network": self.network,
            "openingHours": self.opening_hours,
        }
        if self.distance is not None:
            data["distance"] = self.distance
        if self.is_compatible is not None:
            data["isCompatible"] = self.is_compatible
        return data


@dataclass(frozen=True, slots=True)
class FilterSettings:
    """Filters applied to a station search.

    An empty connector, status or network set means "any", not "none".
    """

    connector_types: frozenset[str] = frozenset()
    distance: float = 15
    availability_statuses: frozenset[str] = frozenset({"Available", "Busy"})
    min_power_output: int | None = None
    networks: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "connector_types", frozenset(self.connector_types))
        object.__setattr__(
            self, "availability_statuses", frozenset(self.availability_statuses)
        )
        object.__setattr__(self, "networks", frozenset(self.networks))


DEFAULT_FILTER_SETTINGS = FilterSettings()


@dataclass(frozen=True, slots=True)
class EvVehicle:
    name: str
    make: str
    model: str
    connector_types: frozenset[str]
    id: int | None = None
    owner_id: int | None = None
    year: int | None = None
    max_charging_rate: int | None = None
    battery_capacity: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "connector_types", frozenset(self.connector_types))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.owner_id,
            "name": self.name,
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "connectorTypes": _vocabulary_sorted(self.connector_types, CONNECTOR_TYPES),
            "maxChargingRate": self.max_charging_rate,
            "batteryCapacity": self.battery_capacity,
        }


POPULAR_VEHICLES: tuple[EvVehicle, ...] = (
    EvVehicle("Tesla Model 3", "Tesla", "Model 3", frozenset({"Tesla", "CCS1", "NACS"}),
              year=2023, max_charging_rate=250, battery_capacity=82),
    EvVehicle("Tesla Model Y", "Tesla", "Model Y", frozenset({"Tesla", "CCS1", "NACS"}),
              year=2023, max_charging_rate=250, battery_capacity=75),
    EvVehicle("Nissan Leaf", "Nissan", "Leaf", frozenset({"CHAdeMO", "Type1"}),
              year=2023, max_charging_rate=100, battery_capacity=62),
    EvVehicle("Chevrolet Bolt", "Chevrolet", "Bolt", frozenset({"CCS1"}),
              year=2023, max_charging_rate=55, battery_capacity=66),
    EvVehicle("Ford Mustang Mach-E", "Ford", "Mustang Mach-E", frozenset({"CCS1"}),
              year=2023, max_charging_rate=150, battery_capacity=91),
    EvVehicle("Hyundai IONIQ 5", "Hyundai", "IONIQ 5", frozenset({"CCS2"}),
              year=2023, max_charging_rate=220, battery_capacity=77),
    EvVehicle("Kia EV6", "Kia", "EV6", frozenset({"CCS2"}),
              year=2023, max_charging_rate=240, battery_capacity=77),
)
DEFAULT_VEHICLE = POPULAR_VEHICLES[0]


@dataclass(frozen=True, slots=True)
class StationQuery:
    latitude: float
    longitude: float
    filters: FilterSettings = field(default_factory=FilterSettings)
    vehicle: EvVehicle | None = None
    sort_by: SortKey = "distance"
    compatible_only: bool = False

    def cache_key(self) -> str:
        """Return the cache key for the catalog part of this query.

        Filter sets are sorted so logically identical queries share a key.
        Vehicle and sort order are applied after the cache and are not part
        of the key.
        """
        filters = self.filters
        min_power = "" if filters.min_power_output is None else str(filters.min_power_output)
        parts = (
            repr(float(self.latitude)),
            repr(float(self.longitude)),
            repr(float(filters.distance)),
            ",".join(sorted(filters.connector_types)),
            ",".join(sorted(filters.availability_statuses)),
            min_power,
            ",".join(sorted(filters.networks)),
        )
        return "|".join(parts)


@dataclass(frozen=True, slots=True)
class SavedLocation:
    id: int
    owner_id: int
    name: str
    station_id: str
    latitude: float
    longitude: float
    created_at: str
    connector_types: frozenset[str] = frozenset()
    notes: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "connector_types", frozenset(self.connector_types))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.owner_id,
            "name": self.name,
            "stationId": self.station_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "createdAt": self.created_at,
            "connectorTypes": _vocabulary_sorted(self.connector_types, CONNECTOR_TYPES),
            "notes": self.notes,
        }
