"""structlog setup for the Finsight engine."""

import logging
from typing import Optional

import structlog

from .config import FinsightConfig


def configure_logging(config: Optional[FinsightConfig] = None) -> None:
    """
    Configure structlog from the root configuration.

    Records below ``config.log_level`` are dropped by the bound logger.
    JSON rendering is used when ``config.log_json`` is set, console
    rendering otherwise.

    Args:
        config: Root configuration (default: loaded from the environment)
    """
    config = config or FinsightConfig()
    level = getattr(logging, config.log_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
