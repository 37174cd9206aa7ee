from datetime import UTC, datetime

import pytest

from pyevchargefinder.exceptions import InvalidQueryError, NotFoundError, ValidationError
from pyevchargefinder.models import EvVehicle
from pyevchargefinder.storage import InMemoryStorage


def _storage() -> InMemoryStorage:
    return InMemoryStorage(now=lambda: datetime(2024, 5, 1, 9, 30, tzinfo=UTC))


def _vehicle(**kwargs) -> EvVehicle:
    values = {
        "name": "Daily",
        "make": "Nissan",
        "model": "Leaf",
        "connector_types": frozenset({"CHAdeMO"}),
    }
    values.update(kwargs)
    return EvVehicle(**values)


@pytest.mark.asyncio
async def test_vehicles_are_scoped_to_owner() -> None:
    storage = _storage()
    stored = await storage.save_vehicle(1, _vehicle())
    await storage.save_vehicle(2, _vehicle(name="Other"))
    assert stored.id == 1
    assert stored.owner_id == 1
    assert await storage.get_vehicles(1) == [stored]
    assert [vehicle.name for vehicle in await storage.get_vehicles(2)] == ["Other"]


@pytest.mark.asyncio
async def test_vehicle_update_keeps_id() -> None:
    storage = _storage()
    stored = await storage.save_vehicle(1, _vehicle())
    updated = await storage.save_vehicle(1, _vehicle(id=stored.id, name="Renamed"))
    assert updated.id == stored.id
    assert [vehicle.name for vehicle in await storage.get_vehicles(1)] == ["Renamed"]


@pytest.mark.asyncio
async def test_vehicle_update_of_foreign_record_fails() -> None:
    storage = _storage()
    stored = await storage.save_vehicle(1, _vehicle())
    with pytest.raises(NotFoundError):
        await storage.save_vehicle(2, _vehicle(id=stored.id))


@pytest.mark.asyncio
async def test_vehicle_validation() -> None:
    storage = _storage()
    with pytest.raises(ValidationError):
        await storage.save_vehicle(1, _vehicle(make=" "))
    with pytest.raises(InvalidQueryError):
        await storage.save_vehicle(1, _vehicle(connector_types=frozenset({"Schuko"})))
    with pytest.raises(ValidationError):
        await storage.save_vehicle(True, _vehicle())  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_saved_location_lifecycle() -> None:
    storage = _storage()
    location = await storage.create_saved_location(
        1,
        name="Work",
        station_id="123",
        latitude=37.77,
        longitude=-122.41,
        connector_types=["CCS1"],
        notes="EVgo",
    )
    assert location.to_dict() == {
        "id": 1,
        "userId": 1,
        "name": "Work",
        "stationId": "123",
        "latitude": 37.77,
        "longitude": -122.41,
        "createdAt": "2024-05-01T09:30:00Z",
        "connectorTypes": ["CCS1"],
        "notes": "EVgo",
    }
    assert await storage.get_saved_location(1, location.id) == location
    await storage.delete_saved_location(1, location.id)
    assert await storage.get_saved_locations(1) == []
    with pytest.raises(NotFoundError):
        await storage.delete_saved_location(1, location.id)


@pytest.mark.asyncio
async def test_saved_location_of_other_owner_is_hidden() -> None:
    storage = _storage()
    location = await storage.create_saved_location(
        1, name="Home", station_id="s", latitude=0, longitude=0
    )
    assert await storage.get_saved_locations(2) == []
    with pytest.raises(NotFoundError):
        await storage.delete_saved_location(2, location.id)
    assert await storage.get_saved_locations(1) == [location]


@pytest.mark.asyncio
async def test_saved_location_rejects_bad_coordinates() -> None:
    storage = _storage()
    with pytest.raises(InvalidQueryError):
        await storage.create_saved_location(
            1, name="Nowhere", station_id="s", latitude=120, longitude=0
        )
