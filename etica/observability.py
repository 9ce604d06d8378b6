"""
Logging setup.

The library itself only calls ``structlog.get_logger``; applications that
embed it call ``configure_logging`` once at startup.
"""

import logging
from typing import Any, Optional

import structlog

from etica.config import settings


def add_app_info(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Stamp every event with the library name and version."""
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    return event_dict


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Install the structlog processor chain on top of stdlib logging.

    Args:
        level: Log level name, defaults to ``ETICA_LOG_LEVEL``
        fmt: ``"json"`` or ``"console"``, defaults to ``ETICA_LOG_FORMAT``
    """
    level_name = (level or settings.log_level).upper()
    fmt = (fmt or settings.log_format).lower()

    logging.basicConfig(format="%(message)s", level=getattr(logging, level_name, logging.INFO))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_app_info,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if fmt == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
