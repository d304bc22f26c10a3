import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

from autofun_intel.lib.logger import configure_logger

logger = configure_logger(__name__)

load_dotenv()


def _split_env(name: str, default: str = "") -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class DatabaseConfig:
    backend: str = os.getenv("AUTOFUN_BACKEND", "memory")
    url: str = os.getenv("AUTOFUN_SUPABASE_URL", "")
    service_key: str = os.getenv("AUTOFUN_SUPABASE_SERVICE_KEY", "")


@dataclass
class AgentConfig:
    agent_id: str = os.getenv(
        "AUTOFUN_AGENT_ID", "00000000-0000-0000-0000-000000000000"
    )
    name: str = os.getenv("AUTOFUN_AGENT_NAME", "autofun-intel")


@dataclass
class TwitterConfig:
    enabled: bool = os.getenv("AUTOFUN_TWITTER_ENABLED", "true").lower() == "true"
    bearer_token: str = os.getenv("AUTOFUN_TWITTER_BEARER_TOKEN", "")
    consumer_key: str = os.getenv("AUTOFUN_TWITTER_CONSUMER_KEY", "")
    consumer_secret: str = os.getenv("AUTOFUN_TWITTER_CONSUMER_SECRET", "")
    access_token: str = os.getenv("AUTOFUN_TWITTER_ACCESS_TOKEN", "")
    access_secret: str = os.getenv("AUTOFUN_TWITTER_ACCESS_SECRET", "")
    search_query: str = os.getenv(
        "AUTOFUN_TWITTER_SEARCH_QUERY", "(auto.fun OR #autofun) -is:retweet"
    )
    max_results: int = int(os.getenv("AUTOFUN_TWITTER_MAX_RESULTS", "100"))


@dataclass
class BirdeyeConfig:
    api_url: str = os.getenv("AUTOFUN_BIRDEYE_API_URL", "https://public-api.birdeye.so")
    api_key: str = os.getenv("AUTOFUN_BIRDEYE_API_KEY", "")
    chain: str = os.getenv("AUTOFUN_BIRDEYE_CHAIN", "solana")
    wallet_addresses: List[str] = field(
        default_factory=lambda: _split_env("AUTOFUN_WALLET_ADDRESSES")
    )
    request_timeout: float = float(os.getenv("AUTOFUN_BIRDEYE_TIMEOUT_SECONDS", "30"))


@dataclass
class AutofunApiConfig:
    api_url: str = os.getenv("AUTOFUN_API_URL", "https://api.auto.fun")
    token_limit: int = int(os.getenv("AUTOFUN_CHAT_TOKEN_LIMIT", "50"))
    message_limit: int = int(os.getenv("AUTOFUN_CHAT_MESSAGE_LIMIT", "50"))
    request_timeout: float = float(os.getenv("AUTOFUN_API_TIMEOUT_SECONDS", "30"))


@dataclass
class SchedulerConfig:
    enabled: bool = os.getenv("AUTOFUN_SCHEDULER_ENABLED", "true").lower() == "true"
    tick_interval_seconds: int = int(
        os.getenv("AUTOFUN_SCHEDULER_TICK_INTERVAL_SECONDS", "10")
    )

    # Interval overrides keyed by job name, lower-cased

    # autofun_intel_sync_wallet job
    autofun_intel_sync_wallet_interval_seconds: int = int(
        os.getenv("AUTOFUN_SYNC_WALLET_INTERVAL_SECONDS", "300")
    )

    # autofun_intel_sync_raw_autofun_chat job
    autofun_intel_sync_raw_autofun_chat_interval_seconds: int = int(
        os.getenv("AUTOFUN_SYNC_CHAT_INTERVAL_SECONDS", "300")
    )

    # autofun_intel_sync_raw_tweets job
    autofun_intel_sync_raw_tweets_interval_seconds: int = int(
        os.getenv("AUTOFUN_SYNC_TWEETS_INTERVAL_SECONDS", "900")
    )

    # autofun_intel_intel_parse_tweets job
    autofun_intel_intel_parse_tweets_interval_seconds: int = int(
        os.getenv("AUTOFUN_PARSE_TWEETS_INTERVAL_SECONDS", "86400")
    )


@dataclass
class Config:
    db: DatabaseConfig = field(default_factory=DatabaseConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    twitter: TwitterConfig = field(default_factory=TwitterConfig)
    birdeye: BirdeyeConfig = field(default_factory=BirdeyeConfig)
    autofun: AutofunApiConfig = field(default_factory=AutofunApiConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)

    @classmethod
    def load(cls) -> "Config":
        """Load and validate configuration"""
        config = cls()
        if config.scheduler.tick_interval_seconds <= 0:
            raise ValueError("AUTOFUN_SCHEDULER_TICK_INTERVAL_SECONDS must be positive")
        logger.info("Configuration loaded successfully")
        return config


# Global configuration instance
config = Config.load()
