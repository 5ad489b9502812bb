import logging
import sys
from typing import Optional

import structlog

from lightbnb.config import settings

def configure_logging(level: Optional[str] = None) -> None:
    """Render structlog events to stderr, dropping anything below ``level``
    (``settings.LOG_LEVEL`` when not given). Calling it again just swaps the level filter.
    """
    level = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
