"""Startup service wiring the runtime, the intel tasks and the scheduler."""

import asyncio
import signal
import sys
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from autofun_intel.backend.factory import backend
from autofun_intel.backend.models import Task
from autofun_intel.config import config
from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.communication.twitter_service import (
    TWITTER_SERVICE_NAME,
    create_twitter_service_from_config,
)
from autofun_intel.services.infrastructure.job_management.registrar import (
    register_tasks,
)
from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)

TICK_JOB_ID = "agent_runtime_tick"

shutdown_event = asyncio.Event()


def signal_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logger.info(
        "Shutdown signal received - initiating graceful shutdown",
        extra={"signal": signum, "event_type": "shutdown_signal"},
    )
    shutdown_event.set()


def build_runtime() -> AgentRuntime:
    """Create the agent runtime and register the optional services."""
    runtime = AgentRuntime(backend=backend, agent_id=config.agent.agent_id)
    try:
        twitter_service = create_twitter_service_from_config()
    except Exception as e:
        logger.error(
            "Twitter service unavailable",
            extra={"error": str(e), "event_type": "service_init_error"},
        )
        twitter_service = None
    if twitter_service is not None:
        runtime.register_service(TWITTER_SERVICE_NAME, twitter_service)
    return runtime


class StartupService:
    """Service to manage worker startup and shutdown."""

    def __init__(
        self,
        runtime: Optional[AgentRuntime] = None,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        self.runtime = runtime
        self.scheduler = scheduler or AsyncIOScheduler()
        self.tasks: List[Task] = []

    async def register_tasks(self) -> List[Task]:
        if self.runtime is None:
            self.runtime = build_runtime()
        self.tasks = await register_tasks(self.runtime)
        return self.tasks

    def init_scheduler(self) -> bool:
        """Schedule the runtime tick and start the scheduler. Returns False when disabled."""
        if not config.scheduler.enabled:
            logger.info(
                "Scheduler disabled - tasks registered but not run",
                extra={"event_type": "scheduler_disabled"},
            )
            return False

        self.scheduler.add_job(
            self.runtime.tick,
            "interval",
            seconds=config.scheduler.tick_interval_seconds,
            id=TICK_JOB_ID,
            max_instances=1,  # Prevent overlapping ticks
            misfire_grace_time=60,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            "Job scheduler started successfully",
            extra={
                "tick_interval_seconds": config.scheduler.tick_interval_seconds,
                "event_type": "scheduler_started",
            },
        )
        return True

    async def init_background_tasks(self) -> None:
        logger.info(
            "Starting autofun intel background services",
            extra={"event_type": "service_startup"},
        )
        await self.register_tasks()
        if self.init_scheduler():
            # run once straight away so immediate tasks do not wait a full tick
            await self.runtime.tick()

    async def shutdown(self) -> None:
        logger.info("Initiating shutdown sequence", extra={"event_type": "shutdown_start"})
        try:
            if self.scheduler and self.scheduler.running:
                self.scheduler.shutdown(wait=False)
                logger.info(
                    "Job scheduler stopped", extra={"event_type": "scheduler_stopped"}
                )
        except Exception as e:
            logger.error(
                "Error during shutdown",
                extra={"error": str(e), "event_type": "shutdown_error"},
                exc_info=True,
            )
        logger.info("Shutdown complete", extra={"event_type": "shutdown_complete"})


startup_service = StartupService()


async def run() -> None:
    """Start background services using the global startup service."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)
    await startup_service.init_background_tasks()
    logger.info(
        "Autofun intel services running - Press Ctrl+C to stop",
        extra={"event_type": "services_running"},
    )


async def shutdown() -> None:
    await startup_service.shutdown()


async def run_standalone():
    """Run the startup service until a shutdown signal arrives."""
    try:
        await run()
        await shutdown_event.wait()
    except KeyboardInterrupt:
        logger.info(
            "Received keyboard interrupt", extra={"event_type": "keyboard_interrupt"}
        )
    except Exception as e:
        logger.error(
            "Critical error in standalone mode",
            extra={"error": str(e), "event_type": "critical_error"},
            exc_info=True,
        )
        sys.exit(1)
    finally:
        await shutdown()


if __name__ == "__main__":
    asyncio.run(run_standalone())
