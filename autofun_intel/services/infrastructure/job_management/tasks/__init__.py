"""Recurring intel tasks.

Tasks are discovered and registered through the @job decorator. To add one,
create a module here and decorate a BaseTask subclass:

    @job(
        "AUTOFUN_INTEL_MY_JOB",
        description="Does something useful",
        interval_seconds=120,
        order=50,
    )
    class MyJobTask(BaseTask):
        async def _execute_impl(self, context: JobContext) -> RunnerResult:
            ...
"""

__all__ = []
