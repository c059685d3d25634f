"""
Logging configuration
"""

import logging
import sys
from typing import Optional
from core.config import settings

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "apscheduler", "asyncio")


def setup_logging(level: Optional[str] = None):
    """Configure process-wide logging to stdout (LOG_LEVEL unless overridden)"""
    level_name = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured at {level_name} level")
