"""Wallet portfolio synchronisation from Birdeye."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

import httpx

from autofun_intel.backend.models import WalletPortfolioCreate
from autofun_intel.config import BirdeyeConfig, config
from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.integrations.birdeye import BirdeyeClient

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)


class WalletSync:
    def __init__(
        self,
        runtime: "AgentRuntime",
        settings: Optional[BirdeyeConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.runtime = runtime
        self.settings = settings or config.birdeye
        self.transport = transport

    async def sync_wallet(self) -> int:
        """Snapshot every configured wallet's portfolio. Returns the snapshot count."""
        addresses = self.settings.wallet_addresses
        if not addresses:
            logger.debug("No wallet addresses configured, nothing to sync")
            return 0

        synced = 0
        async with BirdeyeClient(self.settings, transport=self.transport) as client:
            for address in addresses:
                data = await client.get_wallet_token_list(address)
                self.runtime.backend.create_wallet_portfolio(
                    WalletPortfolioCreate(
                        wallet_address=address,
                        chain=self.settings.chain,
                        total_usd=data.get("totalUsd"),
                        items=data.get("items") or [],
                        synced_at=datetime.now(),
                    )
                )
                synced += 1
                logger.debug(
                    "Wallet portfolio synced",
                    extra={
                        "wallet": address,
                        "total_usd": data.get("totalUsd"),
                        "token_count": len(data.get("items") or []),
                    },
                )

        logger.info(f"Synced {synced} wallet portfolio(s)")
        return synced
