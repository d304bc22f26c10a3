import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

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

M = TypeVar("M", bound=BaseModel)


class InMemoryBackend(AbstractBackend):
    """Process-local backend keeping every table in a dict keyed by id.

    Records are copied on the way in and out so callers never share state
    with the store.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[UUID, BaseModel]] = {
            "tasks": {},
            "wallet_portfolios": {},
            "chat_messages": {},
            "raw_tweets": {},
            "token_mentions": {},
        }
        self._cursors: Dict[str, str] = {}

    # ----------------------------------------------------------------
    # HELPERS
    # ----------------------------------------------------------------
    def _insert(self, table: str, model: Type[M], payload: BaseModel) -> M:
        data = payload.model_dump()
        data["id"] = uuid.uuid4()
        data["created_at"] = datetime.now()
        record = model.model_validate(data)
        self._tables[table][record.id] = record
        return record.model_copy(deep=True)

    def _get(self, table: str, record_id: UUID) -> Optional[Any]:
        record = self._tables[table].get(record_id)
        return record.model_copy(deep=True) if record else None

    def _list(self, table: str, predicate) -> List[Any]:
        return [
            record.model_copy(deep=True)
            for record in self._tables[table].values()
            if predicate(record)
        ]

    def _update(
        self, table: str, model: Type[M], record_id: UUID, update_data: BaseModel
    ) -> Optional[M]:
        existing = self._tables[table].get(record_id)
        if existing is None:
            return None
        payload = update_data.model_dump(exclude_unset=True)
        if not payload:
            return existing.model_copy(deep=True)

        merged = existing.model_dump()
        for key, value in payload.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
        record = model.model_validate(merged)
        self._tables[table][record_id] = record
        return record.model_copy(deep=True)

    def _delete(self, table: str, record_id: UUID) -> bool:
        return self._tables[table].pop(record_id, None) is not None

    # ----------------------------------------------------------------
    # TASKS
    # ----------------------------------------------------------------
    def create_task(self, new_task: TaskCreate) -> Task:
        return self._insert("tasks", Task, new_task)

    def get_task(self, task_id: UUID) -> Optional[Task]:
        return self._get("tasks", task_id)

    def list_tasks(self, filters: Optional[TaskFilter] = None) -> List[Task]:
        def matches(task: Task) -> bool:
            if not filters:
                return True
            if filters.name is not None and task.name != filters.name:
                return False
            if filters.world_id is not None and task.world_id != filters.world_id:
                return False
            if filters.status is not None and task.status != filters.status:
                return False
            if filters.tags and not task.has_tags(filters.tags):
                return False
            return True

        return self._list("tasks", matches)

    def update_task(self, task_id: UUID, update_data: TaskBase) -> Optional[Task]:
        return self._update("tasks", Task, task_id, update_data)

    def delete_task(self, task_id: UUID) -> bool:
        return self._delete("tasks", task_id)

    # ----------------------------------------------------------------
    # WALLET PORTFOLIOS
    # ----------------------------------------------------------------
    def create_wallet_portfolio(
        self, new_portfolio: WalletPortfolioCreate
    ) -> WalletPortfolio:
        return self._insert("wallet_portfolios", WalletPortfolio, new_portfolio)

    def list_wallet_portfolios(
        self, filters: Optional[WalletPortfolioFilter] = None
    ) -> List[WalletPortfolio]:
        def matches(portfolio: WalletPortfolio) -> bool:
            if not filters:
                return True
            if (
                filters.wallet_address is not None
                and portfolio.wallet_address != filters.wallet_address
            ):
                return False
            if filters.chain is not None and portfolio.chain != filters.chain:
                return False
            return True

        return self._list("wallet_portfolios", matches)

    # ----------------------------------------------------------------
    # CHAT MESSAGES
    # ----------------------------------------------------------------
    def create_chat_message(self, new_message: ChatMessageCreate) -> ChatMessage:
        return self._insert("chat_messages", ChatMessage, new_message)

    def list_chat_messages(
        self, filters: Optional[ChatMessageFilter] = None
    ) -> List[ChatMessage]:
        def matches(message: ChatMessage) -> bool:
            if not filters:
                return True
            if (
                filters.message_id is not None
                and message.message_id != filters.message_id
            ):
                return False
            if (
                filters.token_mint is not None
                and message.token_mint != filters.token_mint
            ):
                return False
            return True

        return self._list("chat_messages", matches)

    # ----------------------------------------------------------------
    # RAW TWEETS
    # ----------------------------------------------------------------
    def create_raw_tweet(self, new_tweet: RawTweetCreate) -> RawTweet:
        return self._insert("raw_tweets", RawTweet, new_tweet)

    def list_raw_tweets(self, filters: Optional[RawTweetFilter] = None) -> List[RawTweet]:
        def matches(tweet: RawTweet) -> bool:
            if not filters:
                return True
            if filters.tweet_id is not None and tweet.tweet_id != filters.tweet_id:
                return False
            if filters.is_parsed is not None and tweet.is_parsed != filters.is_parsed:
                return False
            return True

        return self._list("raw_tweets", matches)

    def update_raw_tweet(
        self, raw_tweet_id: UUID, update_data: RawTweetBase
    ) -> Optional[RawTweet]:
        return self._update("raw_tweets", RawTweet, raw_tweet_id, update_data)

    # ----------------------------------------------------------------
    # TOKEN MENTIONS
    # ----------------------------------------------------------------
    def create_token_mention(self, new_mention: TokenMentionCreate) -> TokenMention:
        return self._insert("token_mentions", TokenMention, new_mention)

    def list_token_mentions(
        self, filters: Optional[TokenMentionFilter] = None
    ) -> List[TokenMention]:
        def matches(mention: TokenMention) -> bool:
            if not filters:
                return True
            if filters.tweet_id is not None and mention.tweet_id != filters.tweet_id:
                return False
            if filters.kind is not None and mention.kind != filters.kind:
                return False
            if filters.value is not None and mention.value != filters.value:
                return False
            return True

        return self._list("token_mentions", matches)

    # ----------------------------------------------------------------
    # SYNC CURSORS
    # ----------------------------------------------------------------
    def get_sync_cursor(self, key: str) -> Optional[str]:
        return self._cursors.get(key)

    def set_sync_cursor(self, key: str, value: str) -> None:
        self._cursors[key] = value
