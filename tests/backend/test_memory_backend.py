"""Tests for the in-memory backend."""

from datetime import datetime
from uuid import uuid4

import pytest

from autofun_intel.backend.memory import InMemoryBackend
from autofun_intel.backend.models import (
    ChatMessageCreate,
    ChatMessageFilter,
    MentionKind,
    RawTweetBase,
    RawTweetCreate,
    RawTweetFilter,
    TaskBase,
    TaskCreate,
    TaskFilter,
    TaskMetadata,
    TaskStatus,
    TokenMentionCreate,
    TokenMentionFilter,
    WalletPortfolioCreate,
    WalletPortfolioFilter,
)


@pytest.fixture
def store():
    return InMemoryBackend()


class TestTasks:
    def test_create_assigns_id_and_created_at(self, store):
        task = store.create_task(TaskCreate(name="A", tags=["queue"]))

        assert task.id is not None
        assert isinstance(task.created_at, datetime)
        assert task.status == TaskStatus.ACTIVE
        assert store.get_task(task.id) == task

    def test_get_missing_task(self, store):
        assert store.get_task(uuid4()) is None

    def test_list_filters(self, store):
        world = uuid4()
        store.create_task(TaskCreate(name="A", world_id=world, tags=["queue", "repeat"]))
        store.create_task(TaskCreate(name="B", world_id=world, tags=["queue"]))
        store.create_task(TaskCreate(name="A", world_id=uuid4(), tags=["queue"]))

        assert len(store.list_tasks()) == 3
        assert len(store.list_tasks(TaskFilter(name="A"))) == 2
        assert len(store.list_tasks(TaskFilter(world_id=world))) == 2
        assert [t.name for t in store.list_tasks(TaskFilter(tags=["repeat"]))] == ["A"]
        assert store.list_tasks(TaskFilter(status=TaskStatus.PENDING_REMOVAL)) == []

    def test_update_merges_metadata(self, store):
        task = store.create_task(
            TaskCreate(name="A", metadata=TaskMetadata(update_interval=1000, created_at=1))
        )

        updated = store.update_task(
            task.id, TaskBase(metadata=TaskMetadata(last_run_at=5))
        )

        assert updated.name == "A"
        assert updated.metadata.update_interval == 1000
        assert updated.metadata.created_at == 1
        assert updated.metadata.last_run_at == 5

    def test_update_status(self, store):
        task = store.create_task(TaskCreate(name="A"))

        updated = store.update_task(task.id, TaskBase(status=TaskStatus.PENDING_REMOVAL))

        assert updated.status == TaskStatus.PENDING_REMOVAL
        assert updated.name == "A"

    def test_update_missing_task(self, store):
        assert store.update_task(uuid4(), TaskBase(name="x")) is None

    def test_delete(self, store):
        task = store.create_task(TaskCreate(name="A"))

        assert store.delete_task(task.id) is True
        assert store.delete_task(task.id) is False
        assert store.list_tasks() == []

    def test_returned_records_are_copies(self, store):
        task = store.create_task(TaskCreate(name="A", tags=["queue"]))
        task.tags.append("mutated")

        assert store.get_task(task.id).tags == ["queue"]


class TestRecords:
    def test_wallet_portfolios(self, store):
        store.create_wallet_portfolio(
            WalletPortfolioCreate(wallet_address="W1", chain="solana", total_usd=1.5)
        )
        store.create_wallet_portfolio(
            WalletPortfolioCreate(wallet_address="W2", chain="solana")
        )

        found = store.list_wallet_portfolios(WalletPortfolioFilter(wallet_address="W1"))

        assert len(found) == 1
        assert found[0].total_usd == 1.5

    def test_chat_messages(self, store):
        store.create_chat_message(ChatMessageCreate(message_id="m1", token_mint="T1"))
        store.create_chat_message(ChatMessageCreate(message_id="m2", token_mint="T2"))

        assert len(store.list_chat_messages(ChatMessageFilter(token_mint="T2"))) == 1
        assert store.list_chat_messages(ChatMessageFilter(message_id="m3")) == []

    def test_raw_tweets_parse_flag(self, store):
        tweet = store.create_raw_tweet(RawTweetCreate(tweet_id="1", text="hi"))
        store.create_raw_tweet(RawTweetCreate(tweet_id="2", text="yo"))

        store.update_raw_tweet(tweet.id, RawTweetBase(is_parsed=True))

        unparsed = store.list_raw_tweets(RawTweetFilter(is_parsed=False))
        assert [t.tweet_id for t in unparsed] == ["2"]
        parsed = store.list_raw_tweets(RawTweetFilter(tweet_id="1"))[0]
        assert parsed.is_parsed is True
        assert parsed.text == "hi"

    def test_token_mentions(self, store):
        store.create_token_mention(
            TokenMentionCreate(tweet_id="1", kind=MentionKind.CASHTAG, value="BONK")
        )
        store.create_token_mention(
            TokenMentionCreate(tweet_id="1", kind=MentionKind.URL, value="https://x")
        )

        cashtags = store.list_token_mentions(
            TokenMentionFilter(kind=MentionKind.CASHTAG)
        )
        assert [m.value for m in cashtags] == ["BONK"]
        assert len(store.list_token_mentions(TokenMentionFilter(tweet_id="1"))) == 2

    def test_sync_cursors(self, store):
        assert store.get_sync_cursor("twitter:since_id") is None

        store.set_sync_cursor("twitter:since_id", "10")
        store.set_sync_cursor("twitter:since_id", "12")

        assert store.get_sync_cursor("twitter:since_id") == "12"
