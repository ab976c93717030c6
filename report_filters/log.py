"""
Structured Logging

Every module logs through structlog with an event name plus keyword
context, e.g. ``logger.debug("filter_group_added", group_count=2)``.

Library modules only call ``get_logger(__name__)``. Handlers, levels and the
renderer are set up once by the host application via ``configure_logging``.
Until then events go through the stdlib root logger, so anything below
WARNING stays silent.
"""

import logging
import sys
from typing import Optional

import structlog

from report_filters.config import FilterSettings, get_settings


_PKG_LOGGER_NAME = "report_filters"
_CONFIGURED = False


def _processors(json_logs: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


structlog.configure(
    processors=_processors(json_logs=True),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(
    settings: Optional[FilterSettings] = None,
    force: bool = False,
) -> None:
    """
    Configure stdlib handlers and the structlog renderer.

    Args:
        settings: Settings to read level and format from.
                  Defaults to the cached application settings.
        force: Reconfigure even if already configured.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    settings = settings or get_settings()
    level = getattr(logging, settings.effective_log_level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=force,
    )
    logging.getLogger(_PKG_LOGGER_NAME).setLevel(level)

    structlog.configure(processors=_processors(settings.json_logs))
    _CONFIGURED = True


def get_logger(name: str = _PKG_LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the stdlib logger ``name``."""
    return structlog.get_logger(name)
