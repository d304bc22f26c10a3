"""Job registration decorators and metadata system."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Type, TypeVar

from autofun_intel.config import config
from autofun_intel.lib.logger import configure_logger

from .base import BaseTask, JobType

logger = configure_logger(__name__)

T = TypeVar("T", bound=BaseTask)

# Tags carried by every recurring intel task
DEFAULT_TAGS = ["queue", "repeat", "autofun", "immediate"]


@dataclass
class JobMetadata:
    """Metadata for job configuration and registration."""

    job_type: JobType
    name: str
    description: str = ""

    enabled: bool = True
    interval_seconds: int = 60
    # Registration order within the registrar
    order: int = 100

    # Optional capability the job needs, looked up through the runtime
    requires_service: Optional[str] = None
    # The owner of a service group tears the whole group down when the
    # service disappears
    owns_service_group: bool = False
    dependencies: List[str] = field(default_factory=list)

    failure_log_level: str = "error"
    failure_message: str = "Task execution failed"
    tags: List[str] = field(default_factory=lambda: list(DEFAULT_TAGS))


class JobRegistry:
    """Registry of job task classes and their metadata."""

    _jobs: Dict[JobType, Type[BaseTask]] = {}
    _metadata: Dict[JobType, JobMetadata] = {}
    _instances: Dict[JobType, BaseTask] = {}

    @classmethod
    def register(
        cls,
        name: str,
        description: str = "",
        **kwargs,
    ) -> Callable[[Type[T]], Type[T]]:
        """Decorator to register a job task with metadata.

        Example:
            @JobRegistry.register(
                "AUTOFUN_INTEL_SOMETHING",
                description="Does something",
                interval_seconds=120,
            )
            class SomethingTask(BaseTask):
                pass
        """

        def decorator(task_class: Type[T]) -> Type[T]:
            job_enum = JobType.get_or_create(name)
            meta = JobMetadata(
                job_type=job_enum,
                name=name,
                description=description or (task_class.__doc__ or "").strip(),
                **kwargs,
            )

            task_class.failure_log_level = meta.failure_log_level
            task_class.failure_message = meta.failure_message
            task_class.requires_service = meta.requires_service
            task_class.owns_service_group = meta.owns_service_group

            cls._jobs[job_enum] = task_class
            cls._metadata[job_enum] = meta
            cls._instances.pop(job_enum, None)

            logger.debug(
                f"Registered job: {job_enum} -> {task_class.__name__} "
                f"(enabled: {meta.enabled}, interval: {meta.interval_seconds}s)"
            )

            return task_class

        return decorator

    @classmethod
    def get_task_class(cls, job_type: JobType) -> Optional[Type[BaseTask]]:
        return cls._jobs.get(job_type)

    @classmethod
    def get_metadata_by_name(cls, name: str) -> Optional[JobMetadata]:
        """Look up a job by task name without registering a new job type."""
        return cls._metadata.get(JobType(name))

    @classmethod
    def get_instance(cls, job_type: JobType) -> Optional[BaseTask]:
        """Get or create a task instance for a job type."""
        if job_type not in cls._instances:
            task_class = cls.get_task_class(job_type)
            if task_class:
                cls._instances[job_type] = task_class()
        return cls._instances.get(job_type)

    @classmethod
    def list_jobs(cls) -> Dict[JobType, JobMetadata]:
        """List all registered jobs in registration order."""
        ordered = sorted(cls._metadata.items(), key=lambda item: item[1].order)
        return dict(ordered)

    @classmethod
    def list_enabled_jobs(cls) -> Dict[JobType, JobMetadata]:
        return {
            job_type: metadata
            for job_type, metadata in cls.list_jobs().items()
            if metadata.enabled
        }

    @classmethod
    def list_service_group(cls, service_name: str) -> List[JobMetadata]:
        """List jobs that depend on the given service."""
        return [
            metadata
            for metadata in cls.list_jobs().values()
            if metadata.requires_service == service_name
        ]

    @classmethod
    def get_interval_seconds(cls, metadata: JobMetadata) -> int:
        """Get job interval, checking config overrides."""
        config_attr = f"{metadata.job_type.value}_interval_seconds"
        return getattr(config.scheduler, config_attr, metadata.interval_seconds)

    @classmethod
    def validate_dependencies(cls) -> List[str]:
        """Validate job dependencies and return any issues."""
        issues = []
        all_job_types = set(cls._jobs.keys())

        for job_type, metadata in cls._metadata.items():
            for dep in metadata.dependencies:
                if JobType.get_or_create(dep) not in all_job_types:
                    issues.append(f"Job {job_type} depends on unregistered job: {dep}")

        for service_name in {
            m.requires_service for m in cls._metadata.values() if m.requires_service
        }:
            owners = [
                m.name for m in cls.list_service_group(service_name) if m.owns_service_group
            ]
            if len(owners) != 1:
                issues.append(
                    f"Service group {service_name} must have exactly one owner, found {owners}"
                )

        return issues


def job(
    name: str,
    description: str = "",
    **kwargs,
) -> Callable[[Type[T]], Type[T]]:
    """Convenience decorator for job registration.

    Example:
        @job("AUTOFUN_INTEL_MY_JOB", description="My job", interval_seconds=30)
        class MyJobTask(BaseTask):
            pass
    """
    return JobRegistry.register(name=name, description=description, **kwargs)
