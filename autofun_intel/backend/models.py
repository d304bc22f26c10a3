from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CustomBaseModel(BaseModel):
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=False,
    )


class TaskStatus(Enum):
    ACTIVE = "active"
    PENDING_REMOVAL = "pending_removal"

    def __str__(self):
        return self.value


class MentionKind(Enum):
    CASHTAG = "cashtag"
    ADDRESS = "address"
    URL = "url"

    def __str__(self):
        return self.value


#
# TASKS
#
class TaskMetadata(CustomBaseModel):
    """Scheduling metadata for a recurring task.

    All timestamps and the interval are expressed in epoch milliseconds.
    """

    model_config = ConfigDict(extra="allow")

    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    update_interval: Optional[int] = None
    last_run_at: Optional[int] = None
    requires_service: Optional[str] = None


class TaskBase(CustomBaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    world_id: Optional[UUID] = None
    metadata: Optional[TaskMetadata] = None
    tags: Optional[List[str]] = None
    status: Optional[TaskStatus] = None


class TaskCreate(TaskBase):
    status: Optional[TaskStatus] = TaskStatus.ACTIVE


class Task(TaskBase):
    id: UUID
    created_at: datetime

    def has_tags(self, tags: List[str]) -> bool:
        return set(tags).issubset(set(self.tags or []))


#
# WALLET PORTFOLIOS
#
class WalletPortfolioBase(CustomBaseModel):
    wallet_address: Optional[str] = None
    chain: Optional[str] = None
    total_usd: Optional[float] = None
    items: List[Dict[str, Any]] = Field(default_factory=list)
    synced_at: Optional[datetime] = None


class WalletPortfolioCreate(WalletPortfolioBase):
    pass


class WalletPortfolio(WalletPortfolioBase):
    id: UUID
    created_at: datetime


#
# CHAT MESSAGES
#
class ChatMessageBase(CustomBaseModel):
    message_id: Optional[str] = None
    token_mint: Optional[str] = None
    author: Optional[str] = None
    text: Optional[str] = None
    timestamp: Optional[str] = None


class ChatMessageCreate(ChatMessageBase):
    pass


class ChatMessage(ChatMessageBase):
    id: UUID
    created_at: datetime


#
# RAW TWEETS
#
class RawTweetBase(CustomBaseModel):
    tweet_id: Optional[str] = None
    author_id: Optional[str] = None
    author_username: Optional[str] = None
    text: Optional[str] = None
    created_at_twitter: Optional[str] = None
    public_metrics: Optional[Dict[str, Any]] = None
    is_parsed: Optional[bool] = False


class RawTweetCreate(RawTweetBase):
    pass


class RawTweet(RawTweetBase):
    id: UUID
    created_at: datetime


#
# TOKEN MENTIONS
#
class TokenMentionBase(CustomBaseModel):
    tweet_id: Optional[str] = None
    kind: Optional[MentionKind] = None
    value: Optional[str] = None


class TokenMentionCreate(TokenMentionBase):
    pass


class TokenMention(TokenMentionBase):
    id: UUID
    created_at: datetime


# -----------------------------------------------------
# Filter Models
# -----------------------------------------------------


class TaskFilter(CustomBaseModel):
    name: Optional[str] = None
    world_id: Optional[UUID] = None
    tags: Optional[List[str]] = None  # every tag must be present
    status: Optional[TaskStatus] = None


class WalletPortfolioFilter(CustomBaseModel):
    wallet_address: Optional[str] = None
    chain: Optional[str] = None


class ChatMessageFilter(CustomBaseModel):
    message_id: Optional[str] = None
    token_mint: Optional[str] = None


class RawTweetFilter(CustomBaseModel):
    tweet_id: Optional[str] = None
    is_parsed: Optional[bool] = None


class TokenMentionFilter(CustomBaseModel):
    tweet_id: Optional[str] = None
    kind: Optional[MentionKind] = None
    value: Optional[str] = None
