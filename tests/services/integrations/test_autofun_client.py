import httpx
import pytest

from autofun_intel.config import AutofunApiConfig
from autofun_intel.services.integrations.autofun import AutofunApiError, AutofunClient


@pytest.fixture
def settings():
    return AutofunApiConfig(api_url="https://autofun.test", token_limit=3, message_limit=4)


class TestAutofunClient:
    @pytest.mark.asyncio
    async def test_list_tokens_accepts_bare_list(self, settings):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json=[{"mint": "M1"}])
        )

        async with AutofunClient(settings, transport=transport) as client:
            assert await client.list_tokens() == [{"mint": "M1"}]

    @pytest.mark.asyncio
    async def test_explicit_limit_wins(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"messages": []})

        async with AutofunClient(settings, transport=httpx.MockTransport(handler)) as client:
            assert await client.get_messages("M1", limit=9) == []

        assert seen[0].url.path == "/api/messages/M1"
        assert seen[0].url.params["limit"] == "9"

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, settings):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        async with AutofunClient(settings, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AutofunApiError) as exc_info:
                await client.list_tokens()

        assert exc_info.value.status_code is None
        assert exc_info.value.endpoint == "/api/tokens"
