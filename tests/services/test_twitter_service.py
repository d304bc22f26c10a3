import threading
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from autofun_intel.config import config
from autofun_intel.services.communication.twitter_service import (
    TwitterService,
    create_twitter_service_from_config,
)


@pytest.fixture
def service():
    twitter = TwitterService(bearer_token="test_bearer")
    twitter.client = MagicMock()
    return twitter


def make_tweet(tweet_id, author_id="7"):
    return SimpleNamespace(
        id=tweet_id,
        text=f"tweet {tweet_id}",
        author_id=author_id,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        public_metrics={"like_count": 1},
    )


class TestTwitterService:
    @pytest.mark.asyncio
    async def test_search_returns_oldest_first(self, service):
        service.client.search_recent_tweets.return_value = SimpleNamespace(
            data=[make_tweet(12), make_tweet(10)],
            includes={"users": [SimpleNamespace(id=7, username="degen")]},
        )

        tweets = await service.search_recent_tweets("auto.fun", since_id="9")

        assert [t["id"] for t in tweets] == ["10", "12"]
        assert tweets[0]["author_username"] == "degen"
        assert tweets[0]["created_at"] == "2025-01-01T00:00:00+00:00"
        kwargs = service.client.search_recent_tweets.call_args.kwargs
        assert kwargs["since_id"] == "9"
        assert kwargs["expansions"] == ["author_id"]

    @pytest.mark.asyncio
    async def test_max_results_is_clamped(self, service):
        service.client.search_recent_tweets.return_value = SimpleNamespace(
            data=None, includes=None
        )

        await service.search_recent_tweets("q", max_results=500)
        assert service.client.search_recent_tweets.call_args.kwargs["max_results"] == 100

        await service.search_recent_tweets("q", max_results=1)
        assert service.client.search_recent_tweets.call_args.kwargs["max_results"] == 10

    @pytest.mark.asyncio
    async def test_empty_response(self, service):
        service.client.search_recent_tweets.return_value = SimpleNamespace(
            data=None, includes=None
        )

        assert await service.search_recent_tweets("q") == []

    @pytest.mark.asyncio
    async def test_search_runs_off_the_event_loop_thread(self, service):
        calling_threads = []

        def search(**kwargs):
            calling_threads.append(threading.get_ident())
            return SimpleNamespace(data=[make_tweet(5)], includes=None)

        service.client.search_recent_tweets.side_effect = search

        tweets = await service.search_recent_tweets("q")

        assert [t["id"] for t in tweets] == ["5"]
        assert calling_threads and calling_threads[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_requires_initialization(self):
        with pytest.raises(Exception, match="not initialized"):
            await TwitterService(bearer_token="x").search_recent_tweets("q")

    def test_initialize_creates_client(self):
        with patch(
            "autofun_intel.services.communication.twitter_service.tweepy.Client"
        ) as client_cls:
            twitter = TwitterService(bearer_token="test_bearer")
            twitter.initialize()

        assert twitter.client is client_cls.return_value
        assert client_cls.call_args.kwargs["wait_on_rate_limit"] is True


class TestCreateFromConfig:
    def test_disabled(self):
        with patch.object(config.twitter, "enabled", False):
            assert create_twitter_service_from_config() is None

    def test_missing_bearer_token(self):
        with patch.object(config.twitter, "enabled", True), patch.object(
            config.twitter, "bearer_token", ""
        ):
            assert create_twitter_service_from_config() is None

    def test_enabled(self):
        with patch.object(config.twitter, "enabled", True), patch.object(
            config.twitter, "bearer_token", "token"
        ), patch(
            "autofun_intel.services.communication.twitter_service.tweepy.Client"
        ):
            service = create_twitter_service_from_config()

        assert isinstance(service, TwitterService)
        assert service.client is not None
