import pytest

from autofun_intel.backend.models import RawTweetFilter
from autofun_intel.config import TwitterConfig
from autofun_intel.services.processing.twitter_sync import SINCE_ID_CURSOR, TwitterSync


def tweet(tweet_id, text="gm $BONK"):
    return {
        "id": tweet_id,
        "text": text,
        "author_id": "42",
        "author_username": "degen",
        "created_at": "2025-01-01T00:00:00+00:00",
        "public_metrics": {"like_count": 3},
    }


@pytest.fixture
def settings():
    return TwitterConfig(search_query="auto.fun", max_results=50)


class TestTwitterSync:
    @pytest.mark.asyncio
    async def test_stores_tweets_and_advances_cursor(
        self, twitter_runtime, twitter_service, settings
    ):
        twitter_service.search_recent_tweets.return_value = [tweet("100"), tweet("105")]

        stored = await TwitterSync(twitter_runtime, settings=settings).sync_raw_tweets()

        assert stored == 2
        twitter_service.search_recent_tweets.assert_awaited_once_with(
            query="auto.fun", since_id=None, max_results=50
        )
        backend = twitter_runtime.backend
        assert backend.get_sync_cursor(SINCE_ID_CURSOR) == "105"
        [raw] = backend.list_raw_tweets(RawTweetFilter(tweet_id="100"))
        assert raw.author_username == "degen"
        assert raw.is_parsed is False
        assert raw.public_metrics == {"like_count": 3}

    @pytest.mark.asyncio
    async def test_uses_saved_cursor(self, twitter_runtime, twitter_service, settings):
        twitter_runtime.backend.set_sync_cursor(SINCE_ID_CURSOR, "99")

        stored = await TwitterSync(twitter_runtime, settings=settings).sync_raw_tweets()

        assert stored == 0
        assert twitter_service.search_recent_tweets.await_args.kwargs["since_id"] == "99"
        assert twitter_runtime.backend.get_sync_cursor(SINCE_ID_CURSOR) == "99"

    @pytest.mark.asyncio
    async def test_skips_known_tweets(self, twitter_runtime, twitter_service, settings):
        twitter_service.search_recent_tweets.return_value = [tweet("100")]
        sync = TwitterSync(twitter_runtime, settings=settings)

        await sync.sync_raw_tweets()
        twitter_service.search_recent_tweets.return_value = [tweet("100"), tweet("101")]
        stored = await sync.sync_raw_tweets()

        assert stored == 1
        assert len(twitter_runtime.backend.list_raw_tweets()) == 2

    @pytest.mark.asyncio
    async def test_missing_service_raises(self, runtime, settings):
        with pytest.raises(RuntimeError, match="Twitter service not available"):
            await TwitterSync(runtime, settings=settings).sync_raw_tweets()

    @pytest.mark.asyncio
    async def test_service_error_propagates(
        self, twitter_runtime, twitter_service, settings
    ):
        twitter_service.search_recent_tweets.side_effect = Exception("rate limited")

        with pytest.raises(Exception, match="rate limited"):
            await TwitterSync(twitter_runtime, settings=settings).sync_raw_tweets()

        assert twitter_runtime.backend.get_sync_cursor(SINCE_ID_CURSOR) is None
