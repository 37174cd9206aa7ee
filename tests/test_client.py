import aiohttp
import pytest

from pyevchargefinder import Client
from pyevchargefinder.config import FinderConfig
from pyevchargefinder.exceptions import ConfigError
from pyevchargefinder.provider.openchargemap import Provider as OpenChargeMapProvider
from pyevchargefinder.provider.synthetic import Provider as SyntheticProvider


@pytest.mark.asyncio
async def test_client_does_not_close_injected_session() -> None:
    session = aiohttp.ClientSession()
    client = Client(session=session)
    await client.aclose()

    assert session.closed is False
    await session.close()


@pytest.mark.asyncio
async def test_get_provider_passes_options() -> None:
    async with Client() as client:
        provider = await client.get_provider("openchargemap", api_key="secret")
    assert isinstance(provider, OpenChargeMapProvider)
    assert provider.stable_ids is True
    assert provider._build_url("/poi/") == "https://api.openchargemap.io/v3/poi/"


@pytest.mark.asyncio
async def test_create_finder_from_config() -> None:
    config = FinderConfig(cache_ttl=60, cache_max_entries=10, fetch_timeout=2, seed=7)
    async with Client() as client:
        finder = await client.create_finder(config)
    assert isinstance(finder.provider, SyntheticProvider)
    assert finder.cache.ttl == 60


@pytest.mark.asyncio
async def test_create_finder_requires_api_key() -> None:
    async with Client() as client:
        with pytest.raises(ConfigError):
            await client.create_finder(FinderConfig(provider="openchargemap"))
