import pytest

from pyevchargefinder.client import Client
from pyevchargefinder.exceptions import ProviderError
from pyevchargefinder.models import ProviderInfo


@pytest.mark.asyncio
async def test_list_providers_includes_manifests() -> None:
    async with Client() as client:
        providers = await client.list_providers()
    assert ProviderInfo(id="synthetic", stable_ids=False) in providers
    assert ProviderInfo(id="openchargemap", stable_ids=True) in providers


@pytest.mark.asyncio
async def test_get_provider_missing() -> None:
    async with Client() as client:
        with pytest.raises(ProviderError):
            await client.get_provider("missing")
