"""Open Charge Map provider implementation."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ...exceptions import ConfigError, NotFoundError, ProviderError
from ...geo import haversine_miles
from ...models import ChargingStation, FilterSettings
from ..base import BaseProvider
from ..loader import ProviderManifest
from .const import (
    API_KEY_PARAM,
    CONNECTION_TYPES,
    DEFAULT_API_URI,
    DEFAULT_HEADERS,
    DEFAULT_MAX_RESULTS,
    DEFAULT_OPENING_HOURS,
    LEVEL_POWER_KW,
    OPERATOR_TITLE_HINTS,
    OPERATORS,
    POI_ENDPOINT,
    STATUS_TYPES,
    UNKNOWN_STATUS,
)

_LOGGER = logging.getLogger(__name__)


class Provider(BaseProvider):
    """Provider for the Open Charge Map POI directory."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        manifest: ProviderManifest,
        *,
        base_url: str | None = None,
        api_uri: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
        api_key: str | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> None:
        """Initialize the provider."""
        if api_uri is None:
            api_uri = DEFAULT_API_URI
        if base_url is None:
            base_url = manifest.default_base_url
        super().__init__(
            session,
            manifest,
            base_url=base_url,
            api_uri=api_uri,
            timeout=timeout,
            retry_count=retry_count,
        )
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigError("Open Charge Map requires an API key.")
        if max_results < 1:
            raise ConfigError("max_results must be at least 1.")
        self._api_key = api_key.strip()
        self._max_results = max_results

    async def _fetch_stations(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        filters: FilterSettings | None,
    ) -> list[ChargingStation]:
        params = self._build_search_params(latitude, longitude, radius, filters)
        data = await self._request_json(
            "GET",
            POI_ENDPOINT,
            params=params,
            headers=dict(DEFAULT_HEADERS),
        )
        if not isinstance(data, list):
            raise ProviderError("Provider response included invalid station data.")
        stations: list[ChargingStation] = []
        for item in data:
            station = self._map_station(item, origin=(latitude, longitude))
            if station is None:
                continue
            if station.distance is not None and station.distance > radius:
                continue
            stations.append(station)
        return stations

    async def _fetch_station(self, station_id: str) -> ChargingStation:
        if not station_id.isdigit():
            raise NotFoundError(f"Station {station_id} not found.")
        data = await self._request_json(
            "GET",
            POI_ENDPOINT,
            params={
                "output": "json",
                "chargepointid": station_id,
                "compact": "true",
                "verbose": "false",
                API_KEY_PARAM: self._api_key,
            },
            headers=dict(DEFAULT_HEADERS),
        )
        if not isinstance(data, list):
            raise ProviderError("Provider response included invalid station data.")
        for item in data:
            station = self._map_station(item, origin=None)
            if station is not None and station.id == station_id:
                return station
        raise NotFoundError(f"Station {station_id} not found.")

    def _build_search_params(
        self,
        latitude: float,
        longitude: float,
        radius: float,
        filters: FilterSettings | None,
    ) -> dict[str, str]:
        params = {
            "output": "json",
            "latitude": str(latitude),
            "longitude": str(longitude),
            "distance": str(radius),
            "distanceunit": "Miles",
            "maxresults": str(self._max_results),
            "compact": "true",
            "verbose": "false",
            API_KEY_PARAM: self._api_key,
        }
        if filters is None:
            return params
        connection_ids = sorted(
            type_id
            for type_id, names in CONNECTION_TYPES.items()
            if filters.connector_types.intersection(names)
        )
        if connection_ids:
            params["connectiontypeid"] = ",".join(str(value) for value in connection_ids)
        # "Other" cannot be expressed as operator ids, so skip the hint then.
        if filters.networks and "Other" not in filters.networks:
            operator_ids = sorted(
                operator_id
                for operator_id, network in OPERATORS.items()
                if network in filters.networks
            )
            if operator_ids:
                params["operatorid"] = ",".join(str(value) for value in operator_ids)
        if filters.min_power_output is not None:
            params["minpowerkw"] = str(filters.min_power_output)
        return params

    def _map_station(
        self,
        item: Any,
        *,
        origin: tuple[float, float] | None,
    ) -> ChargingStation | None:
        if not isinstance(item, dict):
            return None
        address_info = item.get("AddressInfo")
        if not isinstance(address_info, dict):
            return None
        latitude = self._parse_float(address_info.get("Latitude"))
        longitude = self._parse_float(address_info.get("Longitude"))
        if latitude is None or longitude is None:
            return None
        try:
            station_id = self._coerce_response_id(item.get("ID"), "station id")
        except ProviderError:
            _LOGGER.debug("Skipping station record without an id")
            return None
        connections = item.get("Connections")
        if not isinstance(connections, list):
            connections = []
        connector_types = self._map_connectors(connections)
        if not connector_types:
            _LOGGER.debug("Skipping station %s without known connectors", station_id)
            return None
        title = address_info.get("Title")
        name = str(title).strip() if title else f"Charging Station {station_id}"
        return ChargingStation(
            id=station_id,
            name=name,
            address=self._format_address(address_info),
            latitude=latitude,
            longitude=longitude,
            connector_types=connector_types,
            power_kw=self._map_power(connections),
            status=self._map_status(item.get("StatusTypeID")),
            network=self._map_network(item),
            opening_hours=self._map_opening_hours(address_info),
            distance=self._map_distance(address_info, latitude, longitude, origin),
        )

    def _map_connectors(self, connections: list[Any]) -> frozenset[str]:
        connector_types: set[str] = set()
        for connection in connections:
            if not isinstance(connection, dict):
                continue
            type_id = self._parse_int(connection.get("ConnectionTypeID"))
            if type_id is None:
                continue
            connector_types.update(CONNECTION_TYPES.get(type_id, ()))
        return frozenset(connector_types)

    def _map_power(self, connections: list[Any]) -> int:
        best = 0.0
        for connection in connections:
            if not isinstance(connection, dict):
                continue
            power = self._parse_float(connection.get("PowerKW"))
            if power is None or power <= 0:
                level = self._parse_int(connection.get("LevelID"))
                power = float(LEVEL_POWER_KW.get(level, 0)) if level is not None else 0.0
            best = max(best, power)
        if best <= 0:
            return LEVEL_POWER_KW[2]
        return max(1, round(best))

    def _map_status(self, value: Any) -> str:
        status_id = self._parse_int(value)
        if status_id is None:
            return UNKNOWN_STATUS
        return STATUS_TYPES.get(status_id, UNKNOWN_STATUS)

    def _map_network(self, item: dict[str, Any]) -> str:
        operator_id = self._parse_int(item.get("OperatorID"))
        if operator_id is not None and operator_id in OPERATORS:
            return OPERATORS[operator_id]
        operator_info = item.get("OperatorInfo")
        if isinstance(operator_info, dict):
            title = str(operator_info.get("Title") or "").lower()
            for hint, network in OPERATOR_TITLE_HINTS:
                if hint in title:
                    return network
        return "Other"

    def _map_opening_hours(self, address_info: dict[str, Any]) -> str:
        comments = address_info.get("AccessComments")
        if isinstance(comments, str) and comments.strip():
            return comments.strip()
        return DEFAULT_OPENING_HOURS

    def _map_distance(
        self,
        address_info: dict[str, Any],
        latitude: float,
        longitude: float,
        origin: tuple[float, float] | None,
    ) -> float | None:
        if origin is None:
            return None
        distance = self._parse_float(address_info.get("Distance"))
        if distance is not None and distance >= 0:
            return distance
        return haversine_miles(origin[0], origin[1], latitude, longitude)

    def _format_address(self, address_info: dict[str, Any]) -> str:
        parts = [
            address_info.get("AddressLine1"),
            address_info.get("Town"),
            address_info.get("StateOrProvince"),
            address_info.get("Postcode"),
        ]
        return ", ".join(str(part).strip() for part in parts if part and str(part).strip())

    def _parse_float(self, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int | float):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                return None
        return None

    def _parse_int(self, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None
