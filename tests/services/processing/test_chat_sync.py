import httpx
import pytest

from autofun_intel.backend.models import ChatMessageFilter
from autofun_intel.config import AutofunApiConfig
from autofun_intel.services.integrations.autofun import AutofunApiError
from autofun_intel.services.processing.chat_sync import ChatSync

MESSAGES = {
    "MintA": [
        {"id": "a1", "author": "alice", "message": "gm", "timestamp": "2025-01-01T00:00:00Z"},
        {"id": "a2", "author": "bob", "message": "wagmi"},
    ],
    "MintB": {"messages": [{"id": "b1", "author": "carol", "text": "hello"}]},
}


def api_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/tokens":
        return httpx.Response(
            200, json={"tokens": [{"mint": "MintA"}, {"mint": "MintB"}, {"name": "no mint"}]}
        )
    mint = request.url.path.rsplit("/", 1)[-1]
    if mint in MESSAGES:
        return httpx.Response(200, json=MESSAGES[mint])
    return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def settings():
    return AutofunApiConfig(api_url="https://autofun.test", token_limit=10, message_limit=5)


class TestChatSync:
    @pytest.mark.asyncio
    async def test_stores_messages_for_every_token(self, runtime, settings):
        sync = ChatSync(runtime, settings=settings, transport=httpx.MockTransport(api_handler))

        stored = await sync.sync_chats()

        assert stored == 3
        [message] = runtime.backend.list_chat_messages(ChatMessageFilter(message_id="b1"))
        assert message.token_mint == "MintB"
        assert message.author == "carol"
        assert message.text == "hello"

    @pytest.mark.asyncio
    async def test_second_sync_skips_known_messages(self, runtime, settings):
        transport = httpx.MockTransport(api_handler)

        await ChatSync(runtime, settings=settings, transport=transport).sync_chats()
        again = await ChatSync(runtime, settings=settings, transport=transport).sync_chats()

        assert again == 0
        assert len(runtime.backend.list_chat_messages()) == 3

    @pytest.mark.asyncio
    async def test_failing_room_does_not_stop_others(self, runtime, settings):
        def handler(request):
            if request.url.path == "/api/messages/MintA":
                return httpx.Response(503)
            return api_handler(request)

        stored = await ChatSync(
            runtime, settings=settings, transport=httpx.MockTransport(handler)
        ).sync_chats()

        assert stored == 1
        assert runtime.backend.list_chat_messages(ChatMessageFilter(token_mint="MintA")) == []

    @pytest.mark.asyncio
    async def test_token_list_failure_propagates(self, runtime, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))

        with pytest.raises(AutofunApiError) as exc_info:
            await ChatSync(runtime, settings=settings, transport=transport).sync_chats()

        assert exc_info.value.status_code == 500
        assert exc_info.value.endpoint == "/api/tokens"

    @pytest.mark.asyncio
    async def test_passes_configured_limits(self, runtime, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return api_handler(request)

        await ChatSync(
            runtime, settings=settings, transport=httpx.MockTransport(handler)
        ).sync_chats()

        assert seen[0].url.params["limit"] == "10"
        assert seen[0].url.params["sortBy"] == "featured"
        assert seen[1].url.params["limit"] == "5"
