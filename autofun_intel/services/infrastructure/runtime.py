"""Agent runtime hosting the task queue, task workers and optional services."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from autofun_intel.backend.abstract import AbstractBackend
from autofun_intel.backend.models import (
    Task,
    TaskBase,
    TaskCreate,
    TaskFilter,
    TaskMetadata,
    TaskStatus,
)
from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.infrastructure.job_management.base import TaskWorker

logger = configure_logger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class TickResult:
    """Summary of a single scheduling pass."""

    executed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


class AgentRuntime:
    """Host for recurring tasks.

    Tasks are persisted through the backend; workers and services live in
    memory for the lifetime of the process. `tick` performs one pass over
    the queue: no retries, no backoff, tasks run sequentially.
    """

    def __init__(
        self,
        backend: AbstractBackend,
        agent_id: Union[UUID, str],
        services: Optional[Dict[str, Any]] = None,
    ):
        self.backend = backend
        self.agent_id = agent_id if isinstance(agent_id, UUID) else UUID(str(agent_id))
        self._workers: Dict[str, TaskWorker] = {}
        self._services: Dict[str, Any] = dict(services or {})

    # ----------------------------------------------------------------
    # TASKS
    # ----------------------------------------------------------------
    async def get_tasks(self, tags: List[str]) -> List[Task]:
        """Return tasks carrying every one of the given tags."""
        return self.backend.list_tasks(TaskFilter(tags=list(tags)))

    async def get_tasks_by_name(self, name: str) -> List[Task]:
        return self.backend.list_tasks(TaskFilter(name=name))

    async def create_task(self, new_task: TaskCreate) -> Task:
        stamp = now_ms()
        metadata = new_task.metadata or TaskMetadata()
        if metadata.created_at is None:
            metadata.created_at = stamp
        if metadata.updated_at is None:
            metadata.updated_at = stamp
        new_task.metadata = metadata
        if new_task.world_id is None:
            new_task.world_id = self.agent_id

        task = self.backend.create_task(new_task)
        logger.debug(
            f"Created task {task.name}",
            extra={"task_id": str(task.id), "event_type": "task_created"},
        )
        return task

    async def update_task(self, task_id: UUID, update_data: TaskBase) -> Optional[Task]:
        return self.backend.update_task(task_id, update_data)

    async def delete_task(self, task_id: UUID) -> bool:
        deleted = self.backend.delete_task(task_id)
        logger.debug(
            "Deleted task" if deleted else "Task already gone",
            extra={"task_id": str(task_id), "event_type": "task_deleted"},
        )
        return deleted

    # ----------------------------------------------------------------
    # WORKERS
    # ----------------------------------------------------------------
    def register_task_worker(self, worker: TaskWorker) -> None:
        if worker.name in self._workers:
            logger.debug(f"Replacing task worker {worker.name}")
        self._workers[worker.name] = worker

    def get_task_worker(self, name: str) -> Optional[TaskWorker]:
        return self._workers.get(name)

    # ----------------------------------------------------------------
    # SERVICES
    # ----------------------------------------------------------------
    def register_service(self, name: str, service: Any) -> None:
        self._services[name] = service
        logger.info(f"Service registered: {name}", extra={"event_type": "service_up"})

    def unregister_service(self, name: str) -> None:
        if self._services.pop(name, None) is not None:
            logger.info(
                f"Service unregistered: {name}", extra={"event_type": "service_down"}
            )

    def get_service(self, name: str) -> Optional[Any]:
        return self._services.get(name)

    # ----------------------------------------------------------------
    # SCHEDULING
    # ----------------------------------------------------------------
    def _is_due(self, task: Task, now: int) -> bool:
        metadata = task.metadata or TaskMetadata()
        if "immediate" in (task.tags or []) and metadata.last_run_at is None:
            return True
        last_run = metadata.last_run_at or metadata.updated_at or metadata.created_at or 0
        return now - last_run >= (metadata.update_interval or 0)

    async def tick(self, now: Optional[int] = None) -> TickResult:
        """Run every due queued task of this agent once."""
        now = now if now is not None else now_ms()
        result = TickResult()

        tasks = self.backend.list_tasks(
            TaskFilter(world_id=self.agent_id, tags=["queue"])
        )
        for task in tasks:
            if task.status == TaskStatus.PENDING_REMOVAL:
                await self.delete_task(task.id)
                result.removed.append(task.name)
                continue

            if not self._is_due(task, now):
                continue

            worker = self._workers.get(task.name)
            if worker is None:
                logger.debug(f"No worker registered for task {task.name}")
                result.skipped.append(task.name)
                continue

            # an earlier validator in this pass may have removed the task
            if self.backend.get_task(task.id) is None:
                continue

            try:
                should_run = await worker.validate(self, task)
            except Exception as e:
                logger.error(
                    f"Validation raised for task {task.name}: {str(e)}", exc_info=True
                )
                should_run = False

            if not should_run:
                result.skipped.append(task.name)
                continue

            try:
                await worker.execute(self, {}, task)
            except Exception as e:
                logger.error(
                    f"Worker for task {task.name} raised: {str(e)}", exc_info=True
                )

            if "repeat" in (task.tags or []):
                await self.update_task(
                    task.id,
                    TaskBase(metadata=TaskMetadata(updated_at=now, last_run_at=now)),
                )
            else:
                await self.delete_task(task.id)
            result.executed.append(task.name)

        if result.executed or result.removed:
            logger.debug(
                "Tick complete",
                extra={
                    "executed": result.executed,
                    "skipped": result.skipped,
                    "removed": result.removed,
                    "event_type": "tick",
                },
            )
        return result
