"""Auto-discovery module for job tasks."""

import importlib
from pathlib import Path

from autofun_intel.lib.logger import configure_logger

from .decorators import JobRegistry

logger = configure_logger(__name__)

TASKS_PACKAGE = "autofun_intel.services.infrastructure.job_management.tasks"


def discover_and_register_tasks() -> None:
    """Import every module in the tasks directory so their @job decorators run."""
    tasks_dir = Path(__file__).parent / "tasks"
    if not tasks_dir.exists():
        logger.warning(f"Tasks directory not found: {tasks_dir}")
        return

    for file_path in sorted(tasks_dir.glob("*.py")):
        if file_path.name.startswith("__"):
            continue

        full_module_name = f"{TASKS_PACKAGE}.{file_path.stem}"
        try:
            importlib.import_module(full_module_name)
        except ImportError as e:
            logger.warning(f"Failed to import task module {full_module_name}: {str(e)}")

    registered_tasks = JobRegistry.list_jobs()
    if not registered_tasks:
        logger.warning("No job tasks were discovered and registered")
        return

    logger.debug(f"Discovered {len(registered_tasks)} job tasks")

    for issue in JobRegistry.validate_dependencies():
        logger.warning(f"Job dependency issue: {issue}")


def get_task_summary() -> dict:
    """Get a summary of all discovered tasks."""
    registered_tasks = JobRegistry.list_jobs()
    enabled_tasks = JobRegistry.list_enabled_jobs()

    return {
        "total_tasks": len(registered_tasks),
        "enabled_tasks": len(enabled_tasks),
        "disabled_tasks": len(registered_tasks) - len(enabled_tasks),
        "tasks": [
            {
                "name": metadata.name,
                "description": metadata.description,
                "interval_seconds": JobRegistry.get_interval_seconds(metadata),
                "requires_service": metadata.requires_service,
                "enabled": metadata.enabled,
            }
            for metadata in registered_tasks.values()
        ],
        "dependency_issues": JobRegistry.validate_dependencies(),
    }
