"""auto.fun chat sync task."""

from autofun_intel.services.infrastructure.job_management.base import (
    BaseTask,
    JobContext,
    RunnerResult,
)
from autofun_intel.services.infrastructure.job_management.decorators import job
from autofun_intel.services.processing.chat_sync import ChatSync


@job(
    "AUTOFUN_INTEL_SYNC_RAW_AUTOFUN_CHAT",
    description="Check autofun chat rooms",
    interval_seconds=300,  # 5 minutes
    order=20,
    failure_log_level="debug",
    failure_message="Failed to sync tokens",
)
class ChatSyncTask(BaseTask):
    async def _execute_impl(self, context: JobContext) -> RunnerResult:
        stored = await ChatSync(context.runtime).sync_chats()
        return RunnerResult(success=True, message=f"Stored {stored} chat message(s)")
