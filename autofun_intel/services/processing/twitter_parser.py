"""Extracts token mentions from stored raw tweets."""

import re
from typing import TYPE_CHECKING, List, Tuple

from autofun_intel.backend.models import (
    MentionKind,
    RawTweetBase,
    RawTweetFilter,
    TokenMentionCreate,
)
from autofun_intel.lib.logger import configure_logger

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)

BASE58 = r"[1-9A-HJ-NP-Za-km-z]"

CASHTAG_PATTERN = re.compile(r"(?<![\w$])\$([A-Za-z][A-Za-z0-9_]{0,9})\b")
ADDRESS_PATTERN = re.compile(rf"(?<![\w]){BASE58}{{32,44}}(?![\w])")
TOKEN_URL_PATTERN = re.compile(
    rf"https?://(?:www\.)?auto\.fun/token/{BASE58}{{32,44}}(?![\w])"
)


def extract_mentions(text: str) -> List[Tuple[MentionKind, str]]:
    """Return the unique (kind, value) mentions found in a tweet, in text order.

    Cashtags are upper-cased. Addresses embedded in auto.fun URLs are
    reported both as the URL and as the address.
    """
    if not text:
        return []

    found: List[Tuple[int, MentionKind, str]] = []
    for match in CASHTAG_PATTERN.finditer(text):
        found.append((match.start(), MentionKind.CASHTAG, match.group(1).upper()))
    for match in TOKEN_URL_PATTERN.finditer(text):
        found.append((match.start(), MentionKind.URL, match.group(0)))
    for match in ADDRESS_PATTERN.finditer(text):
        found.append((match.start(), MentionKind.ADDRESS, match.group(0)))

    mentions: List[Tuple[MentionKind, str]] = []
    for _, kind, value in sorted(found, key=lambda item: item[0]):
        if (kind, value) not in mentions:
            mentions.append((kind, value))
    return mentions


class TwitterParser:
    def __init__(self, runtime: "AgentRuntime"):
        self.runtime = runtime

    async def parse_tweets(self) -> int:
        """Parse every unparsed raw tweet. Returns the number of tweets parsed."""
        backend = self.runtime.backend
        tweets = backend.list_raw_tweets(RawTweetFilter(is_parsed=False))
        if not tweets:
            logger.debug("No unparsed tweets")
            return 0

        mention_count = 0
        for tweet in tweets:
            for kind, value in extract_mentions(tweet.text or ""):
                backend.create_token_mention(
                    TokenMentionCreate(tweet_id=tweet.tweet_id, kind=kind, value=value)
                )
                mention_count += 1
            backend.update_raw_tweet(tweet.id, RawTweetBase(is_parsed=True))

        logger.info(
            f"Parsed {len(tweets)} tweet(s)",
            extra={"mentions": mention_count},
        )
        return len(tweets)
