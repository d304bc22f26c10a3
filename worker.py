"""Worker entrypoint running the intel background services."""

import asyncio
import sys

from autofun_intel.config import config
from autofun_intel.lib.logger import configure_logger
from autofun_intel.services.infrastructure.startup_service import run_standalone

# Configure module logger
logger = configure_logger(__name__)

# Load configuration
_ = config


async def main():
    """Main worker function that runs all background services."""
    logger.info(f"Starting {config.agent.name} worker...")

    try:
        # Registers the intel tasks with the agent runtime and drives the
        # runtime tick until SIGINT/SIGTERM
        await run_standalone()

    except KeyboardInterrupt:
        logger.info("Worker interrupted by user")
    except Exception as e:
        logger.error(f"Critical error in worker: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("Worker shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
