"""Job management for the autofun intel worker.

This module provides:
- Job definitions registered with the @job decorator
- Auto-discovery of job tasks
- Worker bindings handed to the agent runtime
- Service-group teardown for jobs depending on optional services
"""

from .auto_discovery import discover_and_register_tasks, get_task_summary
from .base import BaseTask, JobContext, JobType, RunnerResult, TaskWorker
from .decorators import DEFAULT_TAGS, JobMetadata, JobRegistry, job

__all__ = [
    # Core classes
    "BaseTask",
    "JobContext",
    "JobType",
    "RunnerResult",
    "TaskWorker",
    # Decorators and metadata
    "DEFAULT_TAGS",
    "JobMetadata",
    "JobRegistry",
    "job",
    # Auto-discovery
    "discover_and_register_tasks",
    "get_task_summary",
]
