"""
Script to run the sync and transform pipeline once for every catalogued repository

Exit codes:
    0  every repository synced and every schema transformed
    1  at least one repository or schema failed
    2  the repository catalogue is missing or invalid
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.exceptions import ConfigError
from core.logging import setup_logging
from core.ssh import setup_ssh_key
from core.database import engine
from ingestion.pipeline import PipelineService

logger = logging.getLogger(__name__)


async def run_pipeline() -> int:
    """Run the pipeline and map its outcome to an exit code"""
    service = PipelineService()

    try:
        result = await service.run()
    except ConfigError as e:
        logger.error(f"Invalid repository catalogue: {e.message}")
        return 2
    finally:
        await engine.dispose()

    counts = result.summary
    logger.info(
        f"Sync: {counts.sync.succeeded}/{counts.sync.total} succeeded, "
        f"Transform: {counts.transform.succeeded}/{counts.transform.total} succeeded "
        f"({counts.transform.skipped} skipped)"
    )
    return 0 if result.success else 1


if __name__ == "__main__":
    setup_logging()
    setup_ssh_key()
    sys.exit(asyncio.run(run_pipeline()))
