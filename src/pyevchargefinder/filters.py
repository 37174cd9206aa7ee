"""Station filter predicates and vehicle compatibility.

Every set-valued filter treats an empty set as a wildcard.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import ChargingStation, EvVehicle, FilterSettings


def matches_connector(station: ChargingStation, filters: FilterSettings) -> bool:
    if not filters.connector_types:
        return True
    return not station.connector_types.isdisjoint(filters.connector_types)


def matches_status(station: ChargingStation, filters: FilterSettings) -> bool:
    if not filters.availability_statuses:
        return True
    return station.status in filters.availability_statuses


def matches_power(station: ChargingStation, filters: FilterSettings) -> bool:
    if filters.min_power_output is None:
        return True
    return station.power_kw >= filters.min_power_output


def matches_network(station: ChargingStation, filters: FilterSettings) -> bool:
    if not filters.networks:
        return True
    return station.network in filters.networks


def matches_filters(station: ChargingStation, filters: FilterSettings) -> bool:
    return (
        matches_connector(station, filters)
        and matches_status(station, filters)
        and matches_power(station, filters)
        and matches_network(station, filters)
    )


def apply_filters(
    stations: Iterable[ChargingStation],
    filters: FilterSettings,
) -> list[ChargingStation]:
    return [station for station in stations if matches_filters(station, filters)]


def is_compatible(station: ChargingStation, vehicle: EvVehicle) -> bool:
    """True when the station offers at least one of the vehicle's connectors."""
    return not station.connector_types.isdisjoint(vehicle.connector_types)


def annotate_compatibility(
    stations: Iterable[ChargingStation],
    vehicle: EvVehicle,
) -> list[ChargingStation]:
    return [station.with_compatibility(is_compatible(station, vehicle)) for station in stations]


def filter_compatible(
    stations: Iterable[ChargingStation],
    vehicle: EvVehicle,
) -> list[ChargingStation]:
    return [station for station in stations if is_compatible(station, vehicle)]
