"""HTTP interface for station discovery, vehicles and favorites."""

from __future__ import annotations

import logging
import math
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from aiohttp import web

from .client import Client
from .config import FinderConfig
from .exceptions import (
    InvalidQueryError,
    NotFoundError,
    PyEvChargeFinderError,
    ValidationError,
)
from .finder import StationFinder
from .models import (
    CONNECTOR_TYPES,
    DEFAULT_FILTER_SETTINGS,
    EvVehicle,
    FilterSettings,
    StationQuery,
)
from .storage import InMemoryStorage
from .util import normalize_choices, parse_csv

_LOGGER = logging.getLogger(__name__)

FINDER_KEY = web.AppKey("finder", StationFinder)
STORAGE_KEY = web.AppKey("storage", InMemoryStorage)
OWNER_ID_KEY = web.AppKey("owner_id", int)

_Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def error_middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except ValidationError as exc:
        return web.json_response({"message": str(exc)}, status=400)
    except NotFoundError as exc:
        return web.json_response({"message": str(exc)}, status=404)
    except PyEvChargeFinderError:
        _LOGGER.exception("Request %s %s failed", request.method, request.path)
        return web.json_response({"message": _failure_message(request)}, status=500)


def _failure_message(request: web.Request) -> str:
    if request.path.startswith("/api/stations/"):
        return "Failed to fetch station details"
    if request.path.startswith("/api/stations"):
        return "Failed to fetch charging stations"
    return "Request failed"


def _parse_number(raw: str | None, field: str) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidQueryError(f"{field} must be a number.") from exc
    if not math.isfinite(value):
        raise InvalidQueryError(f"{field} must be finite.")
    return value


def _parse_flag(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in {"1", "true", "yes"}


def parse_station_query(params: Any) -> StationQuery:
    """Build a query from ``/api/stations`` parameters."""
    try:
        latitude = float(params["lat"])
        longitude = float(params["long"])
    except (KeyError, ValueError) as exc:
        raise InvalidQueryError("Valid latitude and longitude required") from exc
    distance = _parse_number(params.get("distance"), "distance")
    min_power = _parse_number(params.get("minPower"), "minPower")
    statuses = parse_csv(params.get("statuses"))
    filters = FilterSettings(
        connector_types=parse_csv(params.get("connectors")) or (),
        distance=DEFAULT_FILTER_SETTINGS.distance if distance is None else distance,
        availability_statuses=(
            DEFAULT_FILTER_SETTINGS.availability_statuses if statuses is None else statuses
        ),
        min_power_output=min_power,
        networks=parse_csv(params.get("networks")) or (),
    )
    vehicle = None
    vehicle_connectors = parse_csv(params.get("vehicleConnectors"))
    if vehicle_connectors is not None:
        vehicle = EvVehicle(
            name="Request vehicle",
            make="",
            model="",
            connector_types=normalize_choices(
                vehicle_connectors, CONNECTOR_TYPES, "vehicle connector"
            ),
        )
    return StationQuery(
        latitude=latitude,
        longitude=longitude,
        filters=filters,
        vehicle=vehicle,
        sort_by=params.get("sort", "distance"),
        compatible_only=_parse_flag(params.get("compatibleOnly")),
    )


async def list_stations(request: web.Request) -> web.Response:
    query = parse_station_query(request.query)
    stations = await request.app[FINDER_KEY].search(query)
    return web.json_response([station.to_dict() for station in stations])


async def get_station(request: web.Request) -> web.Response:
    station = await request.app[FINDER_KEY].get_station(request.match_info["station_id"])
    return web.json_response(station.to_dict())


async def list_vehicles(request: web.Request) -> web.Response:
    vehicles = await request.app[STORAGE_KEY].get_vehicles(request.app[OWNER_ID_KEY])
    return web.json_response([vehicle.to_dict() for vehicle in vehicles])


async def save_vehicle(request: web.Request) -> web.Response:
    data = await _read_json(request)
    if not data.get("name") or not data.get("make") or not data.get("model"):
        raise ValidationError("Vehicle name, make, and model are required")
    vehicle = EvVehicle(
        id=_optional_int(data.get("id"), "id"),
        name=str(data["name"]),
        make=str(data["make"]),
        model=str(data["model"]),
        connector_types=frozenset(_string_list(data.get("connectorTypes"))),
        year=_optional_int(data.get("year"), "year"),
        max_charging_rate=_optional_int(data.get("maxChargingRate"), "maxChargingRate"),
        battery_capacity=_optional_int(data.get("batteryCapacity"), "batteryCapacity"),
    )
    stored = await request.app[STORAGE_KEY].save_vehicle(request.app[OWNER_ID_KEY], vehicle)
    return web.json_response(stored.to_dict())


async def list_saved_locations(request: web.Request) -> web.Response:
    locations = await request.app[STORAGE_KEY].get_saved_locations(request.app[OWNER_ID_KEY])
    return web.json_response([location.to_dict() for location in locations])


async def create_saved_location(request: web.Request) -> web.Response:
    data = await _read_json(request)
    location = await _store_location(
        request,
        data,
        notes=data.get("notes"),
        message="Location name, station ID, latitude, and longitude are required",
    )
    return web.json_response(location)


async def create_favorite(request: web.Request) -> web.Response:
    data = await _read_json(request)
    location = await _store_location(
        request,
        data,
        notes=data.get("network"),
        message="Station ID, name, latitude, and longitude are required",
    )
    return web.json_response(location, status=201)


async def delete_favorite(request: web.Request) -> web.Response:
    raw_id = request.match_info["favorite_id"]
    if not raw_id.isdigit():
        raise ValidationError("Invalid favorite ID")
    await request.app[STORAGE_KEY].delete_saved_location(request.app[OWNER_ID_KEY], int(raw_id))
    return web.Response(status=204)


async def _store_location(
    request: web.Request,
    data: dict[str, Any],
    *,
    notes: Any,
    message: str,
) -> dict[str, Any]:
    required = ("name", "stationId", "latitude", "longitude")
    if any(data.get(key) in (None, "") for key in required):
        raise ValidationError(message)
    latitude = _parse_number(str(data["latitude"]), "latitude")
    longitude = _parse_number(str(data["longitude"]), "longitude")
    location = await request.app[STORAGE_KEY].create_saved_location(
        request.app[OWNER_ID_KEY],
        name=str(data["name"]),
        station_id=str(data["stationId"]),
        latitude=latitude,
        longitude=longitude,
        connector_types=_string_list(data.get("connectorTypes")),
        notes=str(notes) if notes else None,
    )
    return location.to_dict()


async def _read_json(request: web.Request) -> dict[str, Any]:
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationError("Request body must be valid JSON.") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError("connectorTypes must be a list of strings.")
    return value


def _optional_int(value: Any, field: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be an integer.") from exc


def create_app(
    finder: StationFinder,
    storage: InMemoryStorage,
    *,
    owner_id: int,
) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    app[FINDER_KEY] = finder
    app[STORAGE_KEY] = storage
    app[OWNER_ID_KEY] = owner_id
    app.router.add_get("/api/stations", list_stations)
    app.router.add_get("/api/stations/{station_id}", get_station)
    app.router.add_get("/api/vehicles", list_vehicles)
    app.router.add_post("/api/vehicles", save_vehicle)
    app.router.add_get("/api/saved-locations", list_saved_locations)
    app.router.add_post("/api/saved-locations", create_saved_location)
    app.router.add_get("/api/favorites", list_saved_locations)
    app.router.add_post("/api/favorites", create_favorite)
    app.router.add_delete("/api/favorites/{favorite_id}", delete_favorite)
    return app


async def build_app(config: FinderConfig) -> web.Application:
    """Create an application that owns its client session."""
    client = Client(retry_count=config.retry_count)
    try:
        finder = await client.create_finder(config)
    except PyEvChargeFinderError:
        await client.aclose()
        raise
    app = create_app(finder, InMemoryStorage(), owner_id=config.owner_id)

    async def _client_ctx(_app: web.Application) -> AsyncIterator[None]:
        yield
        await client.aclose()

    app.cleanup_ctx.append(_client_ctx)
    _LOGGER.info("Serving stations from provider %s", config.provider)
    return app
