"""Synchronises auto.fun token chat rooms into the backend."""

from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from autofun_intel.backend.models import ChatMessageCreate, ChatMessageFilter
from autofun_intel.config import AutofunApiConfig, config
from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.integrations.autofun import AutofunApiError, AutofunClient

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)


class ChatSync:
    def __init__(
        self,
        runtime: "AgentRuntime",
        settings: Optional[AutofunApiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.runtime = runtime
        self.settings = settings or config.autofun
        self.transport = transport

    def _store_message(self, mint: str, raw: Dict[str, Any]) -> bool:
        message_id = raw.get("id")
        if not message_id:
            return False
        message_id = str(message_id)

        backend = self.runtime.backend
        if backend.list_chat_messages(ChatMessageFilter(message_id=message_id)):
            return False

        backend.create_chat_message(
            ChatMessageCreate(
                message_id=message_id,
                token_mint=mint,
                author=raw.get("author"),
                text=raw.get("message") or raw.get("text"),
                timestamp=raw.get("timestamp"),
            )
        )
        return True

    async def sync_chats(self) -> int:
        """Pull the latest messages for each featured token. Returns new message count."""
        stored = 0
        async with AutofunClient(self.settings, transport=self.transport) as client:
            tokens = await client.list_tokens()
            logger.debug(f"Syncing chat rooms for {len(tokens)} token(s)")

            for token in tokens:
                mint = token.get("mint")
                if not mint:
                    continue
                try:
                    messages = await client.get_messages(mint)
                except AutofunApiError as e:
                    # one broken room should not stop the others
                    logger.warning(
                        f"Failed to fetch chat for token {mint}: {str(e)}",
                        extra={"status_code": e.status_code},
                    )
                    continue

                for raw in messages:
                    if self._store_message(mint, raw):
                        stored += 1

        logger.info(f"Stored {stored} new chat message(s)")
        return stored
