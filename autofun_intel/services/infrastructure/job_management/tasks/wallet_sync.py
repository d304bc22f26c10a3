"""Wallet sync task."""

from autofun_intel.services.infrastructure.job_management.base import (
    BaseTask,
    JobContext,
    RunnerResult,
)
from autofun_intel.services.infrastructure.job_management.decorators import job
from autofun_intel.services.processing.wallet_sync import WalletSync


@job(
    "AUTOFUN_INTEL_SYNC_WALLET",
    description="Sync wallet from Birdeye",
    interval_seconds=300,  # 5 minutes
    order=10,
    failure_log_level="error",
    failure_message="Failed to sync wallet",
)
class WalletSyncTask(BaseTask):
    async def _execute_impl(self, context: JobContext) -> RunnerResult:
        synced = await WalletSync(context.runtime).sync_wallet()
        return RunnerResult(success=True, message=f"Synced {synced} wallet(s)")
