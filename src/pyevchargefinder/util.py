"""Shared utilities for validation and normalization."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from .exceptions import InvalidQueryError, ValidationError
from .models import (
    CONNECTOR_TYPES,
    NETWORKS,
    SORT_KEYS,
    STATION_STATUSES,
    FilterSettings,
    StationQuery,
)


def _coerce_float(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidQueryError(f"{field} must be a number.")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidQueryError(f"{field} must be finite.")
    return number


def validate_coordinates(latitude: Any, longitude: Any) -> tuple[float, float]:
    lat = _coerce_float(latitude, "latitude")
    lng = _coerce_float(longitude, "longitude")
    if not -90 <= lat <= 90:
        raise InvalidQueryError("latitude must be between -90 and 90.")
    if not -180 <= lng <= 180:
        raise InvalidQueryError("longitude must be between -180 and 180.")
    return lat, lng


def validate_radius(radius: Any) -> float:
    value = _coerce_float(radius, "distance")
    if value <= 0:
        raise InvalidQueryError("distance must be greater than zero.")
    return value


def validate_min_power(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidQueryError("minPower must be a number.")
    if not math.isfinite(value) or value <= 0:
        raise InvalidQueryError("minPower must be greater than zero.")
    # power_kw is whole kW, so ">= value" equals ">= ceil(value)".
    return math.ceil(value)


def normalize_choices(
    values: Iterable[str] | None,
    vocabulary: tuple[str, ...],
    field: str,
) -> frozenset[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        raise InvalidQueryError(f"{field} must be a collection of strings.")
    normalized: set[str] = set()
    for value in values:
        if not isinstance(value, str):
            raise InvalidQueryError(f"{field} must be a collection of strings.")
        stripped = value.strip()
        if not stripped:
            continue
        if stripped not in vocabulary:
            raise InvalidQueryError(f"Unknown {field} value: {stripped}.")
        normalized.add(stripped)
    return frozenset(normalized)


def parse_csv(value: str | None) -> list[str] | None:
    """Split a comma separated parameter; ``None`` when the parameter is absent."""
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def validate_filters(filters: FilterSettings) -> FilterSettings:
    if not isinstance(filters, FilterSettings):
        raise InvalidQueryError("filters must be FilterSettings.")
    return FilterSettings(
        connector_types=normalize_choices(
            filters.connector_types, CONNECTOR_TYPES, "connector type"
        ),
        distance=validate_radius(filters.distance),
        availability_statuses=normalize_choices(
            filters.availability_statuses, STATION_STATUSES, "status"
        ),
        min_power_output=validate_min_power(filters.min_power_output),
        networks=normalize_choices(filters.networks, NETWORKS, "network"),
    )


def validate_query(query: StationQuery) -> StationQuery:
    if not isinstance(query, StationQuery):
        raise InvalidQueryError("query must be a StationQuery.")
    latitude, longitude = validate_coordinates(query.latitude, query.longitude)
    if query.sort_by not in SORT_KEYS:
        raise InvalidQueryError(f"Unknown sort key: {query.sort_by}.")
    if query.compatible_only and query.vehicle is None:
        raise InvalidQueryError("compatible_only requires a vehicle.")
    return StationQuery(
        latitude=latitude,
        longitude=longitude,
        filters=validate_filters(query.filters),
        vehicle=query.vehicle,
        sort_by=query.sort_by,
        compatible_only=query.compatible_only,
    )


def require_text(value: Any, field: str) -> str:
    if value is None:
        raise ValidationError(f"{field} is required.")
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required.")
    return text


def format_utc_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        raise ValidationError("Timestamp must include timezone information.")
    normalized = value.astimezone(UTC).replace(microsecond=0)
    return normalized.isoformat().replace("+00:00", "Z")
