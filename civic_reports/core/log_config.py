"""
Logging setup. Services use logging.getLogger(__name__); this only
configures the root handler once at startup.
"""

import logging
from typing import Optional

from civic_reports.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    logging.getLogger(__name__).debug(f"Logging configured at {level_name}")
