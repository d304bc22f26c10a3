import asyncio
from typing import Any, Dict, List, Optional

import tweepy

from autofun_intel.config import config
from autofun_intel.lib.logger import configure_logger

logger = configure_logger(__name__)

TWITTER_SERVICE_NAME = "twitter"


class TwitterService:
    def __init__(
        self,
        bearer_token: str,
        consumer_key: str = "",
        consumer_secret: str = "",
        access_token: str = "",
        access_secret: str = "",
    ):
        """Initialize the Twitter service with API credentials."""
        self.bearer_token = bearer_token
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.access_token = access_token
        self.access_secret = access_secret
        self.client: Optional[tweepy.Client] = None

    def initialize(self) -> None:
        """Initialize the Twitter API v2 client."""
        try:
            self.client = tweepy.Client(
                bearer_token=self.bearer_token,
                consumer_key=self.consumer_key or None,
                consumer_secret=self.consumer_secret or None,
                access_token=self.access_token or None,
                access_token_secret=self.access_secret or None,
                wait_on_rate_limit=True,
            )
            logger.info("Twitter client initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Twitter client: {str(e)}")
            raise

    async def search_recent_tweets(
        self,
        query: str,
        since_id: Optional[str] = None,
        max_results: int = 100,
    ) -> List[Dict[str, Any]]:
        """Search recent tweets and return them as plain dicts, oldest first."""
        if self.client is None:
            raise Exception("Twitter client is not initialized")

        # tweepy is blocking and may sleep on rate limits
        response = await asyncio.to_thread(
            self.client.search_recent_tweets,
            query=query,
            since_id=since_id,
            max_results=max(10, min(max_results, 100)),
            tweet_fields=["author_id", "created_at", "public_metrics"],
            expansions=["author_id"],
            user_fields=["username"],
        )

        if not response or not response.data:
            return []

        users = {}
        includes = response.includes or {}
        for user in includes.get("users", []):
            users[str(user.id)] = user.username

        tweets = []
        for tweet in response.data:
            author_id = str(tweet.author_id) if tweet.author_id else None
            tweets.append(
                {
                    "id": str(tweet.id),
                    "text": tweet.text,
                    "author_id": author_id,
                    "author_username": users.get(author_id),
                    "created_at": (
                        tweet.created_at.isoformat() if tweet.created_at else None
                    ),
                    "public_metrics": tweet.public_metrics,
                }
            )

        # Twitter returns newest first
        tweets.sort(key=lambda t: int(t["id"]))
        return tweets


def create_twitter_service_from_config() -> Optional[TwitterService]:
    """Build and initialize the Twitter service, or return None when unavailable."""
    if not config.twitter.enabled:
        logger.info("Twitter integration disabled")
        return None
    if not config.twitter.bearer_token:
        logger.warning("Twitter bearer token not configured")
        return None

    service = TwitterService(
        bearer_token=config.twitter.bearer_token,
        consumer_key=config.twitter.consumer_key,
        consumer_secret=config.twitter.consumer_secret,
        access_token=config.twitter.access_token,
        access_secret=config.twitter.access_secret,
    )
    service.initialize()
    return service
