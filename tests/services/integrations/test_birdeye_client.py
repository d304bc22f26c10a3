import httpx
import pytest

from autofun_intel.config import BirdeyeConfig
from autofun_intel.services.integrations.birdeye import BirdeyeApiError, BirdeyeClient


@pytest.fixture
def settings():
    return BirdeyeConfig(api_url="https://birdeye.test", api_key="key", chain="solana")


def test_error_string_includes_details():
    error = BirdeyeApiError("failed", status_code=429, endpoint="/v1/wallet/token_list")

    assert str(error) == "failed (status_code=429, endpoint=/v1/wallet/token_list)"
    assert str(BirdeyeApiError("failed")) == "failed"


class TestBirdeyeClient:
    @pytest.mark.asyncio
    async def test_returns_data_payload(self, settings):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200, json={"success": True, "data": {"wallet": "W", "totalUsd": 1}}
            )
        )

        async with BirdeyeClient(settings, transport=transport) as client:
            data = await client.get_wallet_token_list("W")

        assert data == {"wallet": "W", "totalUsd": 1}

    @pytest.mark.asyncio
    async def test_rate_limit_raises(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(429))

        async with BirdeyeClient(settings, transport=transport) as client:
            with pytest.raises(BirdeyeApiError) as exc_info:
                await client.get_wallet_token_list("W")

        assert exc_info.value.status_code == 429
