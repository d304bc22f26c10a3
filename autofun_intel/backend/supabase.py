from typing import List, Optional

from supabase import Client

from autofun_intel.backend.abstract import AbstractBackend
from autofun_intel.backend.models import (
    UUID,
    ChatMessage,
    ChatMessageCreate,
    ChatMessageFilter,
    RawTweet,
    RawTweetBase,
    RawTweetCreate,
    RawTweetFilter,
    Task,
    TaskBase,
    TaskCreate,
    TaskFilter,
    TokenMention,
    TokenMentionCreate,
    TokenMentionFilter,
    WalletPortfolio,
    WalletPortfolioCreate,
    WalletPortfolioFilter,
)
from autofun_intel.lib.logger import configure_logger

logger = configure_logger(__name__)


class SupabaseBackend(AbstractBackend):
    def __init__(self, client: Client):
        self.client = client

    # ----------------------------------------------------------------
    # 1. TASKS
    # ----------------------------------------------------------------
    def create_task(self, new_task: TaskCreate) -> Task:
        payload = new_task.model_dump(exclude_unset=True, mode="json")
        if new_task.status is not None:
            payload["status"] = new_task.status.value
        response = self.client.table("tasks").insert(payload).execute()
        data = response.data or []
        if not data:
            raise ValueError("No data returned from task insert.")
        return Task(**data[0])

    def get_task(self, task_id: UUID) -> Optional[Task]:
        response = (
            self.client.table("tasks")
            .select("*")
            .eq("id", str(task_id))
            .maybe_single()
            .execute()
        )
        if not response or not response.data:
            return None
        return Task(**response.data)

    def list_tasks(self, filters: Optional[TaskFilter] = None) -> List[Task]:
        query = self.client.table("tasks").select("*")
        if filters:
            if filters.name is not None:
                query = query.eq("name", filters.name)
            if filters.world_id is not None:
                query = query.eq("world_id", str(filters.world_id))
            if filters.status is not None:
                query = query.eq("status", filters.status.value)
            if filters.tags:
                query = query.contains("tags", filters.tags)
        response = query.execute()
        data = response.data or []
        return [Task(**row) for row in data]

    def update_task(self, task_id: UUID, update_data: TaskBase) -> Optional[Task]:
        payload = update_data.model_dump(exclude_unset=True, mode="json")
        if not payload:
            return self.get_task(task_id)
        if "metadata" in payload:
            # metadata is a JSON column; merge instead of overwriting it
            existing = self.get_task(task_id)
            if existing is None:
                return None
            current = existing.metadata.model_dump(mode="json") if existing.metadata else {}
            payload["metadata"] = {**current, **payload["metadata"]}
        response = (
            self.client.table("tasks").update(payload).eq("id", str(task_id)).execute()
        )
        updated = response.data or []
        if not updated:
            return None
        return Task(**updated[0])

    def delete_task(self, task_id: UUID) -> bool:
        response = self.client.table("tasks").delete().eq("id", str(task_id)).execute()
        deleted = response.data or []
        return len(deleted) > 0

    # ----------------------------------------------------------------
    # 2. WALLET PORTFOLIOS
    # ----------------------------------------------------------------
    def create_wallet_portfolio(
        self, new_portfolio: WalletPortfolioCreate
    ) -> WalletPortfolio:
        payload = new_portfolio.model_dump(exclude_unset=True, mode="json")
        response = self.client.table("wallet_portfolios").insert(payload).execute()
        data = response.data or []
        if not data:
            raise ValueError("No data returned from wallet_portfolios insert.")
        return WalletPortfolio(**data[0])

    def list_wallet_portfolios(
        self, filters: Optional[WalletPortfolioFilter] = None
    ) -> List[WalletPortfolio]:
        query = self.client.table("wallet_portfolios").select("*")
        if filters:
            if filters.wallet_address is not None:
                query = query.eq("wallet_address", filters.wallet_address)
            if filters.chain is not None:
                query = query.eq("chain", filters.chain)
        response = query.execute()
        data = response.data or []
        return [WalletPortfolio(**row) for row in data]

    # ----------------------------------------------------------------
    # 3. CHAT MESSAGES
    # ----------------------------------------------------------------
    def create_chat_message(self, new_message: ChatMessageCreate) -> ChatMessage:
        payload = new_message.model_dump(exclude_unset=True, mode="json")
        response = self.client.table("chat_messages").insert(payload).execute()
        data = response.data or []
        if not data:
            raise ValueError("No data returned from chat_messages insert.")
        return ChatMessage(**data[0])

    def list_chat_messages(
        self, filters: Optional[ChatMessageFilter] = None
    ) -> List[ChatMessage]:
        query = self.client.table("chat_messages").select("*")
        if filters:
            if filters.message_id is not None:
                query = query.eq("message_id", filters.message_id)
            if filters.token_mint is not None:
                query = query.eq("token_mint", filters.token_mint)
        response = query.execute()
        data = response.data or []
        return [ChatMessage(**row) for row in data]

    # ----------------------------------------------------------------
    # 4. RAW TWEETS
    # ----------------------------------------------------------------
    def create_raw_tweet(self, new_tweet: RawTweetCreate) -> RawTweet:
        payload = new_tweet.model_dump(exclude_unset=True, mode="json")
        response = self.client.table("raw_tweets").insert(payload).execute()
        data = response.data or []
        if not data:
            raise ValueError("No data returned from raw_tweets insert.")
        return RawTweet(**data[0])

    def list_raw_tweets(self, filters: Optional[RawTweetFilter] = None) -> List[RawTweet]:
        query = self.client.table("raw_tweets").select("*")
        if filters:
            if filters.tweet_id is not None:
                query = query.eq("tweet_id", filters.tweet_id)
            if filters.is_parsed is not None:
                query = query.eq("is_parsed", filters.is_parsed)
        response = query.execute()
        data = response.data or []
        return [RawTweet(**row) for row in data]

    def update_raw_tweet(
        self, raw_tweet_id: UUID, update_data: RawTweetBase
    ) -> Optional[RawTweet]:
        payload = update_data.model_dump(exclude_unset=True, mode="json")
        if not payload:
            return None
        response = (
            self.client.table("raw_tweets")
            .update(payload)
            .eq("id", str(raw_tweet_id))
            .execute()
        )
        updated = response.data or []
        if not updated:
            return None
        return RawTweet(**updated[0])

    # ----------------------------------------------------------------
    # 5. TOKEN MENTIONS
    # ----------------------------------------------------------------
    def create_token_mention(self, new_mention: TokenMentionCreate) -> TokenMention:
        payload = new_mention.model_dump(exclude_unset=True, mode="json")
        response = self.client.table("token_mentions").insert(payload).execute()
        data = response.data or []
        if not data:
            raise ValueError("No data returned from token_mentions insert.")
        return TokenMention(**data[0])

    def list_token_mentions(
        self, filters: Optional[TokenMentionFilter] = None
    ) -> List[TokenMention]:
        query = self.client.table("token_mentions").select("*")
        if filters:
            if filters.tweet_id is not None:
                query = query.eq("tweet_id", filters.tweet_id)
            if filters.kind is not None:
                query = query.eq("kind", filters.kind.value)
            if filters.value is not None:
                query = query.eq("value", filters.value)
        response = query.execute()
        data = response.data or []
        return [TokenMention(**row) for row in data]

    # ----------------------------------------------------------------
    # 6. SYNC CURSORS
    # ----------------------------------------------------------------
    def get_sync_cursor(self, key: str) -> Optional[str]:
        response = (
            self.client.table("sync_cursors").select("*").eq("key", key).execute()
        )
        data = response.data or []
        if not data:
            return None
        return data[0].get("value")

    def set_sync_cursor(self, key: str, value: str) -> None:
        self.client.table("sync_cursors").upsert(
            {"key": key, "value": value}, on_conflict="key"
        ).execute()
        logger.debug(f"Sync cursor {key} advanced to {value}")
