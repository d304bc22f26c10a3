"""Fetches raw tweets from Twitter into the backend."""

from typing import TYPE_CHECKING, Optional

from autofun_intel.backend.models import RawTweetCreate, RawTweetFilter
from autofun_intel.config import TwitterConfig, config
from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.communication.twitter_service import (
    TWITTER_SERVICE_NAME,
    TwitterService,
)

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)

SINCE_ID_CURSOR = "twitter:since_id"


class TwitterSync:
    def __init__(
        self, runtime: "AgentRuntime", settings: Optional[TwitterConfig] = None
    ):
        self.runtime = runtime
        self.settings = settings or config.twitter

    def _get_service(self) -> TwitterService:
        service = self.runtime.get_service(TWITTER_SERVICE_NAME)
        if service is None:
            raise RuntimeError("Twitter service not available")
        return service

    async def sync_raw_tweets(self) -> int:
        """Store tweets newer than the saved cursor. Returns the number stored."""
        service = self._get_service()
        backend = self.runtime.backend

        since_id = backend.get_sync_cursor(SINCE_ID_CURSOR)
        tweets = await service.search_recent_tweets(
            query=self.settings.search_query,
            since_id=since_id,
            max_results=self.settings.max_results,
        )

        stored = 0
        newest_id = since_id
        for tweet in tweets:
            tweet_id = tweet["id"]
            if newest_id is None or int(tweet_id) > int(newest_id):
                newest_id = tweet_id

            if backend.list_raw_tweets(RawTweetFilter(tweet_id=tweet_id)):
                continue

            backend.create_raw_tweet(
                RawTweetCreate(
                    tweet_id=tweet_id,
                    author_id=tweet.get("author_id"),
                    author_username=tweet.get("author_username"),
                    text=tweet.get("text"),
                    created_at_twitter=tweet.get("created_at"),
                    public_metrics=tweet.get("public_metrics"),
                    is_parsed=False,
                )
            )
            stored += 1

        if newest_id and newest_id != since_id:
            backend.set_sync_cursor(SINCE_ID_CURSOR, newest_id)

        logger.info(
            f"Stored {stored} raw tweet(s)",
            extra={"since_id": since_id, "newest_id": newest_id},
        )
        return stored
