import logging
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Optional

from autofun_intel.backend.models import Task
from autofun_intel.lib.logger import configure_logger, resolve_level

if TYPE_CHECKING:
    from autofun_intel.services.infrastructure.runtime import AgentRuntime

logger = configure_logger(__name__)


@dataclass
class RunnerResult:
    """Base class for runner operation results."""

    success: bool
    message: str
    error: Optional[Exception] = None


class JobType:
    """Job types keyed by task name, registered at import time by the @job decorator."""

    _job_types: Dict[str, "JobType"] = {}

    def __init__(self, value: str):
        self._value = value.lower()
        self._name = value.upper()

    @property
    def value(self) -> str:
        return self._value

    @property
    def name(self) -> str:
        return self._name

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"JobType.{self._name}"

    def __eq__(self, other) -> bool:
        if isinstance(other, JobType):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other.lower()
        return False

    def __hash__(self) -> int:
        return hash(self._value)

    @classmethod
    def get_or_create(cls, job_type: str) -> "JobType":
        """Get existing job type or create new one."""
        normalized = job_type.lower()
        if normalized not in cls._job_types:
            cls._job_types[normalized] = cls(normalized)
        return cls._job_types[normalized]


@dataclass
class JobContext:
    """Context information for a single validate/execute call."""

    runtime: "AgentRuntime"
    task: Optional[Task] = None
    options: Dict[str, Any] = field(default_factory=dict)
    execution_id: str = field(default_factory=lambda: uuid.uuid4().hex)


ValidateFn = Callable[["AgentRuntime", Optional[Task]], Awaitable[bool]]
ExecuteFn = Callable[
    ["AgentRuntime", Dict[str, Any], Optional[Task]], Awaitable[Optional[RunnerResult]]
]


@dataclass
class TaskWorker:
    """The validate/execute pair the runtime invokes for a task name."""

    name: str
    validate: ValidateFn
    execute: ExecuteFn


class BaseTask(ABC):
    """Base class for all intel jobs.

    Subclasses implement `_execute_impl` (usually a one-line call into a
    processing delegate) and optionally override the validation hooks.
    """

    # Set from job metadata by the @job decorator
    failure_log_level: str = "error"
    failure_message: str = "Task execution failed"
    requires_service: Optional[str] = None
    owns_service_group: bool = False

    @property
    def task_name(self) -> str:
        """Get the task name for logging purposes."""
        return self.__class__.__name__

    def _log_task_start(self, context: JobContext) -> float:
        logger.debug(
            f"Starting task: {self.task_name}",
            extra={"execution_id": context.execution_id},
        )
        return time.time()

    def _log_task_completion(
        self, context: JobContext, result: RunnerResult, start_time: float
    ) -> None:
        duration = time.time() - start_time
        logger.info(
            f"Completed task: {self.task_name} in {duration:.2f}s - "
            f"{'success' if result.success else 'failure'}",
            extra={
                "task_name": self.task_name,
                "execution_id": context.execution_id,
                "event_type": "task_complete",
            },
        )

    async def validate(self, context: JobContext) -> bool:
        """Validate that the task can be executed.

        Runs the resource check and then the task-specific check. Any
        exception raised while validating is logged and treated as a skip.
        """
        try:
            if not await self._validate_resources(context):
                logger.debug(f"{self.task_name}: Resource validation failed")
                return False

            if not await self._validate_task_specific(context):
                logger.debug(f"{self.task_name}: Task-specific validation failed")
                return False

            return True
        except Exception as e:
            logger.error(
                f"Error in validation for {self.task_name}: {str(e)}", exc_info=True
            )
            return False

    async def _validate_resources(self, context: JobContext) -> bool:
        """Check that the required service is still registered with the runtime.

        When it is gone, the owner of the service group removes every task
        in the group; other members only report that they cannot run.
        """
        if not self.requires_service:
            return True
        if context.runtime.get_service(self.requires_service) is not None:
            return True

        if self.owns_service_group:
            from .service_groups import retire_service_group

            logger.debug(
                f"{self.requires_service} service not available, "
                f"removing {self.requires_service} tasks"
            )
            await retire_service_group(context.runtime, self.requires_service)
        return False

    async def _validate_task_specific(self, context: JobContext) -> bool:
        """Validate task-specific conditions."""
        return True

    async def execute(self, context: JobContext) -> RunnerResult:
        """Run the task, logging and suppressing any failure from the delegate."""
        start_time = self._log_task_start(context)
        try:
            result = await self._execute_impl(context)
            if result is None:
                result = RunnerResult(success=True, message="Task completed")
        except Exception as e:
            logger.log(
                resolve_level(self.failure_log_level),
                f"{self.failure_message}: {str(e)}",
                extra={
                    "task_name": self.task_name,
                    "execution_id": context.execution_id,
                    "event_type": "task_error",
                },
                exc_info=resolve_level(self.failure_log_level) >= logging.ERROR,
            )
            result = RunnerResult(
                success=False,
                message=f"Error executing task: {str(e)}",
                error=e,
            )
        self._log_task_completion(context, result, start_time)
        return result

    @abstractmethod
    async def _execute_impl(self, context: JobContext) -> Optional[RunnerResult]:
        """Implementation of task execution logic.
        This method should be implemented by subclasses."""
        pass
