"""Raw tweet sync task.

Owns the twitter service group: when the service disappears its validator
removes this task and every other task that needs twitter.
"""

from autofun_intel.services.communication.twitter_service import TWITTER_SERVICE_NAME
from autofun_intel.services.infrastructure.job_management.base import (
    BaseTask,
    JobContext,
    RunnerResult,
)
from autofun_intel.services.infrastructure.job_management.decorators import job
from autofun_intel.services.processing.twitter_sync import TwitterSync


@job(
    "AUTOFUN_INTEL_SYNC_RAW_TWEETS",
    description="Sync raw tweets from Twitter",
    interval_seconds=900,  # 15 minutes
    order=30,
    requires_service=TWITTER_SERVICE_NAME,
    owns_service_group=True,
    failure_log_level="error",
    failure_message="Failed to sync raw tweets",
)
class TweetSyncTask(BaseTask):
    async def _execute_impl(self, context: JobContext) -> RunnerResult:
        stored = await TwitterSync(context.runtime).sync_raw_tweets()
        return RunnerResult(success=True, message=f"Stored {stored} raw tweet(s)")
