#!/usr/bin/env python3
"""
CLI script for running intel tasks on demand.

Usage:
    python run_task.py list                    # List all available tasks
    python run_task.py run <task_name>         # Run a specific task once
"""

import argparse
import asyncio
import json
from datetime import datetime
from typing import List, Optional

from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.infrastructure.job_management import (
    JobRegistry,
    discover_and_register_tasks,
    get_task_summary,
)
from autofun_intel.services.infrastructure.job_management.registrar import (
    register_tasks,
)
from autofun_intel.services.infrastructure.runtime import AgentRuntime
from autofun_intel.services.infrastructure.startup_service import build_runtime

logger = configure_logger(__name__)


class TaskCLI:
    """Command-line interface for task management."""

    def __init__(self, runtime: Optional[AgentRuntime] = None):
        self.runtime = runtime

    def setup_argparser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="CLI tool for running intel tasks on demand",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    python run_task.py list
    python run_task.py list --format json
    python run_task.py run AUTOFUN_INTEL_SYNC_WALLET
            """,
        )

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        list_parser = subparsers.add_parser("list", help="List all available tasks")
        list_parser.add_argument(
            "--format",
            choices=["table", "json"],
            default="table",
            help="Output format (default: table)",
        )

        run_parser = subparsers.add_parser("run", help="Run a specific task once")
        run_parser.add_argument("task_name", help="Name of the task to run")
        run_parser.add_argument(
            "--timeout", type=int, default=300, help="Timeout in seconds (default: 300)"
        )

        return parser

    def print_table(self, headers: List[str], rows: List[List[str]], title: str = None):
        """Print data in table format."""
        if title:
            print(f"\n{title}")
            print("=" * len(title))

        if not rows:
            print("No data available")
            return

        col_widths = [len(header) for header in headers]
        for row in rows:
            for i, cell in enumerate(row):
                col_widths[i] = max(col_widths[i], len(str(cell)))

        header_row = " | ".join(
            header.ljust(col_widths[i]) for i, header in enumerate(headers)
        )
        print(f"\n{header_row}")
        print("-" * len(header_row))

        for row in rows:
            print(
                " | ".join(str(cell).ljust(col_widths[i]) for i, cell in enumerate(row))
            )

        print()

    def list_tasks(self, args) -> None:
        """List all available tasks."""
        discover_and_register_tasks()
        summary = get_task_summary()

        if args.format == "json":
            print(json.dumps(summary, indent=2))
            return

        rows = [
            [
                task["name"],
                "✓ Enabled" if task["enabled"] else "✗ Disabled",
                f"{task['interval_seconds']}s",
                task["requires_service"] or "-",
                task["description"],
            ]
            for task in summary["tasks"]
        ]
        self.print_table(
            ["Task Name", "Status", "Interval", "Requires", "Description"],
            rows,
            f"Available Tasks ({len(rows)} total)",
        )

    async def run_task(self, args) -> bool:
        """Register tasks on the runtime and run one worker's validate/execute once."""
        if self.runtime is None:
            self.runtime = build_runtime()

        await register_tasks(self.runtime)
        worker = self.runtime.get_task_worker(args.task_name)
        if worker is None:
            metadata = JobRegistry.get_metadata_by_name(args.task_name)
            if metadata is not None and metadata.requires_service:
                print(
                    f"Task '{args.task_name}' requires the "
                    f"{metadata.requires_service} service, which is not available."
                )
            else:
                print(f"Task '{args.task_name}' is not registered.")
                print("Use 'python run_task.py list' to see available tasks.")
            return False

        tasks = await self.runtime.get_tasks_by_name(args.task_name)
        task = tasks[0] if tasks else None

        print(f"Running task: {args.task_name}")
        start_time = datetime.now()
        try:
            if not await worker.validate(self.runtime, task):
                print("Validation failed, task skipped")
                return False
            result = await asyncio.wait_for(
                worker.execute(self.runtime, {}, task), timeout=args.timeout
            )
        except asyncio.TimeoutError:
            print(f"\nTask timed out after {args.timeout} seconds")
            return False

        duration = (datetime.now() - start_time).total_seconds()
        if result.success:
            print(f"\nTask completed in {duration:.2f} seconds: {result.message}")
        else:
            print(f"\nTask failed after {duration:.2f} seconds: {result.message}")
        return result.success

    async def main(self, argv: Optional[List[str]] = None) -> None:
        parser = self.setup_argparser()
        args = parser.parse_args(argv)

        if not args.command:
            parser.print_help()
            return

        if args.command == "list":
            self.list_tasks(args)
        elif args.command == "run":
            await self.run_task(args)


if __name__ == "__main__":
    cli = TaskCLI()
    asyncio.run(cli.main())
