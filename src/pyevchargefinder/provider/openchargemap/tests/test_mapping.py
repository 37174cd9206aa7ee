import aiohttp
import pytest

from pyevchargefinder.exceptions import ConfigError, NotFoundError, SourceUnavailableError
from pyevchargefinder.models import ChargingStation, FilterSettings
from pyevchargefinder.provider.loader import ProviderManifest
from pyevchargefinder.provider.openchargemap.api import Provider
from pyevchargefinder.provider.openchargemap.const import API_KEY_PARAM

MANIFEST = ProviderManifest(
    id="openchargemap",
    name="Open Charge Map",
    stable_ids=True,
    requires_api_key=True,
    default_base_url="https://api.openchargemap.io",
)

POI_SAMPLE = {
    "ID": 12345,
    "OperatorID": 5,
    "StatusTypeID": 50,
    "AddressInfo": {
        "Title": "Civic Center Garage",
        "AddressLine1": "355 McAllister St",
        "Town": "San Francisco",
        "StateOrProvince": "CA",
        "Postcode": "94102",
        "Latitude": 37.7807,
        "Longitude": -122.4173,
        "Distance": 0.42,
        "AccessComments": "Open 24/7",
    },
    "Connections": [
        {"ConnectionTypeID": 32, "PowerKW": 150.0, "LevelID": 3},
        {"ConnectionTypeID": 1, "PowerKW": None, "LevelID": 2},
    ],
}

SPARSE_POI_SAMPLE = {
    "ID": "99",
    "OperatorInfo": {"Title": "Tesla Motors (Worldwide)"},
    "AddressInfo": {"Latitude": "37.7749", "Longitude": "-122.4194"},
    "Connections": [{"ConnectionTypeID": 27, "LevelID": 2}],
}


class _FakeResponse:
    def __init__(self, json_data: object, status: int = 200) -> None:
        self.status = status
        self._json_data = json_data

    async def json(self) -> object:
        return self._json_data


class _FakeRequestContext:
    def __init__(self, response: _FakeResponse) -> None:
        self._response = response

    async def __aenter__(self) -> _FakeResponse:
        return self._response

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class _RecordingSession:
    def __init__(self, responses: list[_FakeResponse]) -> None:
        self._responses = responses
        self.requests: list[tuple[str, dict]] = []

    def request(self, method: str, url: str, **kwargs) -> _FakeRequestContext:
        self.requests.append((url, kwargs))
        return _FakeRequestContext(self._responses[len(self.requests) - 1])


def _provider(session) -> Provider:
    return Provider(session, MANIFEST, api_key="secret")


@pytest.mark.asyncio
async def test_map_station_full_record():
    async with aiohttp.ClientSession() as session:
        provider = _provider(session)
        station = provider._map_station(POI_SAMPLE, origin=(37.7749, -122.4194))

    assert station == ChargingStation(
        id="12345",
        name="Civic Center Garage",
        address="355 McAllister St, San Francisco, CA, 94102",
        latitude=37.7807,
        longitude=-122.4173,
        connector_types=frozenset({"CCS1", "Type1"}),
        power_kw=150,
        status="Available",
        network="ChargePoint",
        opening_hours="Open 24/7",
        distance=0.42,
    )


@pytest.mark.asyncio
async def test_map_station_sparse_record_uses_fallbacks():
    async with aiohttp.ClientSession() as session:
        provider = _provider(session)
        station = provider._map_station(SPARSE_POI_SAMPLE, origin=(37.7749, -122.4194))

    assert station is not None
    assert station.name == "Charging Station 99"
    assert station.address == ""
    assert station.connector_types == frozenset({"Tesla", "NACS"})
    assert station.power_kw == 7
    assert station.status == "Available"
    assert station.network == "Tesla Supercharger"
    assert station.opening_hours == "Hours not listed"
    assert station.distance == pytest.approx(0.0)


@pytest.mark.asyncio
async def test_map_station_skips_unusable_records():
    async with aiohttp.ClientSession() as session:
        provider = _provider(session)
        no_coordinates = {**POI_SAMPLE, "AddressInfo": {"Title": "Somewhere"}}
        unknown_connectors = {**POI_SAMPLE, "Connections": [{"ConnectionTypeID": 9999}]}
        assert provider._map_station(no_coordinates, origin=None) is None
        assert provider._map_station(unknown_connectors, origin=None) is None
        assert provider._map_station("not a record", origin=None) is None
        missing_id = {key: value for key, value in POI_SAMPLE.items() if key != "ID"}
        assert provider._map_station(missing_id, origin=None) is None
        assert provider._map_station({**POI_SAMPLE, "ID": " "}, origin=None) is None


@pytest.mark.asyncio
async def test_map_status_and_network_codes():
    async with aiohttp.ClientSession() as session:
        provider = _provider(session)
        assert provider._map_status(20) == "Busy"
        assert provider._map_status("150") == "Offline"
        assert provider._map_status(0) == "Available"
        assert provider._map_network({"OperatorID": 3318}) == "Electrify America"
        assert provider._map_network({"OperatorID": 1}) == "Other"


def test_api_key_required():
    with pytest.raises(ConfigError):
        Provider(_RecordingSession([]), MANIFEST)
    with pytest.raises(ConfigError):
        Provider(_RecordingSession([]), MANIFEST, api_key="  ")


@pytest.mark.asyncio
async def test_find_stations_sends_hints_and_drops_far_records():
    far = {**POI_SAMPLE, "ID": 2, "AddressInfo": {**POI_SAMPLE["AddressInfo"], "Distance": 25}}
    session = _RecordingSession([_FakeResponse([POI_SAMPLE, far, SPARSE_POI_SAMPLE])])
    provider = _provider(session)
    filters = FilterSettings(
        connector_types={"CCS1", "NACS"},
        networks={"EVgo"},
        min_power_output=50,
    )
    stations = await provider.find_stations(37.7749, -122.4194, 10, filters)

    assert [station.id for station in stations] == ["12345", "99"]
    url, kwargs = session.requests[0]
    assert url == "https://api.openchargemap.io/v3/poi/"
    assert kwargs["params"][API_KEY_PARAM] == "secret"
    params = kwargs["params"]
    assert params["distance"] == "10.0"
    assert params["distanceunit"] == "Miles"
    assert params["connectiontypeid"] == "27,32"
    assert params["operatorid"] == "29"
    assert params["minpowerkw"] == "50"


@pytest.mark.asyncio
async def test_find_stations_skips_operator_hint_for_other_network():
    session = _RecordingSession([_FakeResponse([])])
    provider = _provider(session)
    await provider.find_stations(
        37.7749, -122.4194, 5, FilterSettings(networks={"EVgo", "Other"})
    )
    params = session.requests[0][1]["params"]
    assert "operatorid" not in params
    assert "connectiontypeid" not in params


@pytest.mark.asyncio
async def test_find_stations_unavailable_directory():
    session = _RecordingSession([_FakeResponse(None, status=503)])
    provider = _provider(session)
    with pytest.raises(SourceUnavailableError):
        await provider.find_stations(37.7749, -122.4194, 5)


@pytest.mark.asyncio
async def test_get_station_by_id():
    session = _RecordingSession([_FakeResponse([POI_SAMPLE]), _FakeResponse([])])
    provider = _provider(session)
    station = await provider.get_station("12345")
    assert station.id == "12345"
    assert station.distance is None
    assert session.requests[0][1]["params"]["chargepointid"] == "12345"
    with pytest.raises(NotFoundError):
        await provider.get_station("12346")


@pytest.mark.asyncio
async def test_get_station_rejects_non_numeric_id():
    session = _RecordingSession([])
    provider = _provider(session)
    with pytest.raises(NotFoundError):
        await provider.get_station("station_1_1700000000000")
    assert session.requests == []


@pytest.mark.asyncio
async def test_find_stations_skips_record_without_id():
    missing_id = {key: value for key, value in POI_SAMPLE.items() if key != "ID"}
    session = _RecordingSession([_FakeResponse([missing_id, SPARSE_POI_SAMPLE])])
    provider = _provider(session)
    stations = await provider.find_stations(37.7749, -122.4194, 10)
    assert [station.id for station in stations] == ["99"]
