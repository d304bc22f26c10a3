from abc import ABC, abstractmethod
from typing import List, Optional

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


class AbstractBackend(ABC):
    # ----------- TASKS -----------
    @abstractmethod
    def create_task(self, new_task: TaskCreate) -> Task:
        pass

    @abstractmethod
    def get_task(self, task_id: UUID) -> Optional[Task]:
        pass

    @abstractmethod
    def list_tasks(self, filters: Optional[TaskFilter] = None) -> List[Task]:
        pass

    @abstractmethod
    def update_task(self, task_id: UUID, update_data: TaskBase) -> Optional[Task]:
        pass

    @abstractmethod
    def delete_task(self, task_id: UUID) -> bool:
        pass

    # ----------- WALLET PORTFOLIOS -----------
    @abstractmethod
    def create_wallet_portfolio(
        self, new_portfolio: WalletPortfolioCreate
    ) -> WalletPortfolio:
        pass

    @abstractmethod
    def list_wallet_portfolios(
        self, filters: Optional[WalletPortfolioFilter] = None
    ) -> List[WalletPortfolio]:
        pass

    # ----------- CHAT MESSAGES -----------
    @abstractmethod
    def create_chat_message(self, new_message: ChatMessageCreate) -> ChatMessage:
        pass

    @abstractmethod
    def list_chat_messages(
        self, filters: Optional[ChatMessageFilter] = None
    ) -> List[ChatMessage]:
        pass

    # ----------- RAW TWEETS -----------
    @abstractmethod
    def create_raw_tweet(self, new_tweet: RawTweetCreate) -> RawTweet:
        pass

    @abstractmethod
    def list_raw_tweets(self, filters: Optional[RawTweetFilter] = None) -> List[RawTweet]:
        pass

    @abstractmethod
    def update_raw_tweet(
        self, raw_tweet_id: UUID, update_data: RawTweetBase
    ) -> Optional[RawTweet]:
        pass

    # ----------- TOKEN MENTIONS -----------
    @abstractmethod
    def create_token_mention(self, new_mention: TokenMentionCreate) -> TokenMention:
        pass

    @abstractmethod
    def list_token_mentions(
        self, filters: Optional[TokenMentionFilter] = None
    ) -> List[TokenMention]:
        pass

    # ----------- SYNC CURSORS -----------
    @abstractmethod
    def get_sync_cursor(self, key: str) -> Optional[str]:
        """Return the stored cursor value for `key`, if any."""
        pass

    @abstractmethod
    def set_sync_cursor(self, key: str, value: str) -> None:
        pass
