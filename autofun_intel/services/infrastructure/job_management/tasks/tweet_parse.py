"""Tweet parsing task."""

from autofun_intel.services.communication.twitter_service import TWITTER_SERVICE_NAME
from autofun_intel.services.infrastructure.job_management.base import (
    BaseTask,
    JobContext,
    RunnerResult,
)
from autofun_intel.services.infrastructure.job_management.decorators import job
from autofun_intel.services.processing.twitter_parser import TwitterParser


@job(
    "AUTOFUN_INTEL_INTEL_PARSE_TWEETS",
    description="Parse tweets",
    interval_seconds=60 * 60 * 24,  # 24 hours
    order=40,
    requires_service=TWITTER_SERVICE_NAME,
    dependencies=["AUTOFUN_INTEL_SYNC_RAW_TWEETS"],
    failure_log_level="error",
    failure_message="Failed to parse tweets",
)
class TweetParseTask(BaseTask):
    async def _execute_impl(self, context: JobContext) -> RunnerResult:
        parsed = await TwitterParser(context.runtime).parse_tweets()
        return RunnerResult(success=True, message=f"Parsed {parsed} tweet(s)")
