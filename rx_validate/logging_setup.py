"""Structured logging configuration"""

import logging
import sys
from typing import Optional

import structlog

from rx_validate.config import settings


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None, force: bool = False) -> None:
    """
    Configure stdlib logging and structlog; log lines go to stderr.

    Without ``force`` an application that already configured the root
    logger keeps its handlers.
    """
    level = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        stream=sys.stderr,
        force=force,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
