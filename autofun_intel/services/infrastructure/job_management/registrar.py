"""Registers the recurring intel tasks with an agent runtime."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union
from uuid import UUID

from autofun_intel.backend.models import Task, TaskCreate, TaskMetadata, TaskStatus
from autofun_intel.lib.logger import configure_logger

from .auto_discovery import discover_and_register_tasks
from .base import BaseTask, JobContext, RunnerResult, TaskWorker
from .decorators import JobMetadata, JobRegistry

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)

# Any task carrying all of these tags belongs to this registrar
REGISTRAR_TAGS = ["queue", "repeat", "autofun"]


def build_worker(metadata: JobMetadata) -> TaskWorker:
    """Bind a job's task instance to the runtime's worker callbacks."""
    instance: BaseTask = JobRegistry.get_instance(metadata.job_type)

    async def validate(runtime: "AgentRuntime", task: Optional[Task] = None) -> bool:
        return await instance.validate(JobContext(runtime=runtime, task=task))

    async def execute(
        runtime: "AgentRuntime",
        options: Optional[Dict[str, Any]] = None,
        task: Optional[Task] = None,
    ) -> RunnerResult:
        return await instance.execute(
            JobContext(runtime=runtime, task=task, options=options or {})
        )

    return TaskWorker(name=metadata.name, validate=validate, execute=execute)


async def _purge_stale_tasks(runtime: "AgentRuntime") -> int:
    tasks = await runtime.get_tasks(REGISTRAR_TAGS)
    for task in tasks:
        await runtime.delete_task(task.id)
    return len(tasks)


async def register_tasks(
    runtime: "AgentRuntime", world_id: Optional[Union[UUID, str]] = None
) -> List[Task]:
    """Clear previously registered intel tasks and register them again.

    Jobs that need a service are only registered when the runtime currently
    provides it. Never raises: failures are logged and the remaining jobs
    are still registered. Returns the created tasks.
    """
    # intel data is global for the agent, whatever world the caller is in
    if world_id is not None and str(world_id) != str(runtime.agent_id):
        logger.debug(f"Ignoring world {world_id}, tasks are scoped to the agent")
    world_id = runtime.agent_id

    try:
        discover_and_register_tasks()
    except Exception as e:
        logger.error(f"Failed to discover intel tasks: {str(e)}", exc_info=True)

    try:
        purged = await _purge_stale_tasks(runtime)
        if purged:
            logger.debug(f"Deleted {purged} previously registered task(s)")
    except Exception as e:
        logger.error(f"Failed to clear existing tasks: {str(e)}", exc_info=True)

    created: List[Task] = []
    missing_services: Dict[str, List[str]] = {}

    for metadata in JobRegistry.list_enabled_jobs().values():
        service = metadata.requires_service
        try:
            if service and runtime.get_service(service) is None:
                missing_services.setdefault(service, []).append(metadata.name)
                continue

            runtime.register_task_worker(build_worker(metadata))
            interval_ms = JobRegistry.get_interval_seconds(metadata) * 1000
            task = await runtime.create_task(
                TaskCreate(
                    name=metadata.name,
                    description=metadata.description,
                    world_id=world_id,
                    metadata=TaskMetadata(
                        update_interval=interval_ms,
                        requires_service=service,
                    ),
                    tags=list(metadata.tags),
                    status=TaskStatus.ACTIVE,
                )
            )
            created.append(task)
        except Exception as e:
            logger.error(
                f"Failed to register task {metadata.name}: {str(e)}", exc_info=True
            )

    for service, names in missing_services.items():
        logger.warning(
            f"{service} service not found, skipping creation of {', '.join(names)}",
            extra={"event_type": "service_missing"},
        )

    logger.info(
        f"Registered {len(created)} intel task(s)",
        extra={
            "tasks": [task.name for task in created],
            "event_type": "tasks_registered",
        },
    )
    return created
