from dataclasses import dataclass, field
from unittest.mock import patch

import pytest

from autofun_intel.config import BirdeyeConfig, Config, SchedulerConfig


def test_default_job_intervals() -> None:
    scheduler = SchedulerConfig()
    assert scheduler.autofun_intel_sync_wallet_interval_seconds == 300
    assert scheduler.autofun_intel_sync_raw_autofun_chat_interval_seconds == 300
    assert scheduler.autofun_intel_sync_raw_tweets_interval_seconds == 900
    assert scheduler.autofun_intel_intel_parse_tweets_interval_seconds == 86400


def test_wallet_addresses_from_env() -> None:
    with patch.dict("os.environ", {"AUTOFUN_WALLET_ADDRESSES": " W1, ,W2 "}):
        assert BirdeyeConfig().wallet_addresses == ["W1", "W2"]


def test_load_rejects_non_positive_tick() -> None:
    @dataclass
    class ZeroTickConfig(Config):
        scheduler: SchedulerConfig = field(
            default_factory=lambda: SchedulerConfig(tick_interval_seconds=0)
        )

    with pytest.raises(ValueError):
        ZeroTickConfig.load()
