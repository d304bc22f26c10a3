"""Teardown of tasks that depend on an optional runtime service."""

from typing import TYPE_CHECKING, List

from autofun_intel.backend.models import TaskBase, TaskStatus
from autofun_intel.lib.logger import configure_logger

from .decorators import JobRegistry

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)


async def retire_service_group(runtime: "AgentRuntime", service_name: str) -> List[str]:
    """Remove every task whose job requires `service_name`.

    Each task is marked PENDING_REMOVAL before it is deleted, so a tick that
    races the teardown will purge rather than run it. Safe to call repeatedly.
    Returns the names of the removed tasks.
    """
    removed: List[str] = []
    for metadata in JobRegistry.list_service_group(service_name):
        tasks = await runtime.get_tasks_by_name(metadata.name)
        for task in tasks:
            await runtime.update_task(
                task.id, TaskBase(status=TaskStatus.PENDING_REMOVAL)
            )
            await runtime.delete_task(task.id)
            removed.append(task.name)

    if removed:
        logger.info(
            f"Removed {len(removed)} task(s) after {service_name} service went away",
            extra={"tasks": removed, "event_type": "service_group_retired"},
        )
    return removed
