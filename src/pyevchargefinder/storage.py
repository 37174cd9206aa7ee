"""In-memory record store for vehicles and saved locations.

Every call takes the owning tenant explicitly; the store has no notion of
a current or default user.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import UTC, datetime

from .exceptions import NotFoundError, ValidationError
from .models import CONNECTOR_TYPES, EvVehicle, SavedLocation
from .util import format_utc_timestamp, normalize_choices, require_text, validate_coordinates

_LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryStorage:
    """Dictionary backed storage."""

    def __init__(self, *, now: Callable[[], datetime] = _utcnow) -> None:
        self._now = now
        self._vehicles: dict[int, EvVehicle] = {}
        self._locations: dict[int, SavedLocation] = {}
        self._vehicle_ids = itertools.count(1)
        self._location_ids = itertools.count(1)

    async def save_vehicle(self, owner_id: int, vehicle: EvVehicle) -> EvVehicle:
        """Create a vehicle, or update it when its id belongs to the owner."""
        owner_id = self._require_owner(owner_id)
        require_text(vehicle.name, "name")
        require_text(vehicle.make, "make")
        require_text(vehicle.model, "model")
        connector_types = normalize_choices(
            vehicle.connector_types, CONNECTOR_TYPES, "connector type"
        )
        if vehicle.id is not None:
            existing = self._vehicles.get(vehicle.id)
            if existing is None or existing.owner_id != owner_id:
                raise NotFoundError(f"Vehicle {vehicle.id} not found.")
            vehicle_id = vehicle.id
        else:
            vehicle_id = next(self._vehicle_ids)
        stored = replace(
            vehicle,
            id=vehicle_id,
            owner_id=owner_id,
            connector_types=connector_types,
        )
        self._vehicles[vehicle_id] = stored
        _LOGGER.debug("Stored vehicle %s for owner %s", vehicle_id, owner_id)
        return stored

    async def get_vehicles(self, owner_id: int) -> list[EvVehicle]:
        owner_id = self._require_owner(owner_id)
        return [vehicle for vehicle in self._vehicles.values() if vehicle.owner_id == owner_id]

    async def create_saved_location(
        self,
        owner_id: int,
        *,
        name: str,
        station_id: str,
        latitude: float,
        longitude: float,
        connector_types: Iterable[str] | None = None,
        notes: str | None = None,
    ) -> SavedLocation:
        owner_id = self._require_owner(owner_id)
        latitude, longitude = validate_coordinates(latitude, longitude)
        location_id = next(self._location_ids)
        location = SavedLocation(
            id=location_id,
            owner_id=owner_id,
            name=require_text(name, "name"),
            station_id=require_text(station_id, "station_id"),
            latitude=latitude,
            longitude=longitude,
            created_at=format_utc_timestamp(self._now()),
            connector_types=normalize_choices(
                connector_types, CONNECTOR_TYPES, "connector type"
            ),
            notes=notes or None,
        )
        self._locations[location_id] = location
        _LOGGER.debug("Stored saved location %s for owner %s", location_id, owner_id)
        return location

    async def get_saved_locations(self, owner_id: int) -> list[SavedLocation]:
        owner_id = self._require_owner(owner_id)
        return [
            location for location in self._locations.values() if location.owner_id == owner_id
        ]

    async def get_saved_location(self, owner_id: int, location_id: int) -> SavedLocation:
        owner_id = self._require_owner(owner_id)
        location = self._locations.get(location_id)
        if location is None or location.owner_id != owner_id:
            raise NotFoundError(f"Saved location {location_id} not found.")
        return location

    async def delete_saved_location(self, owner_id: int, location_id: int) -> None:
        location = await self.get_saved_location(owner_id, location_id)
        del self._locations[location.id]
        _LOGGER.debug("Deleted saved location %s for owner %s", location.id, location.owner_id)

    def _require_owner(self, owner_id: int) -> int:
        if isinstance(owner_id, bool) or not isinstance(owner_id, int):
            raise ValidationError("owner_id must be an integer.")
        return owner_id
