"""structlog configuration."""

from __future__ import annotations

import logging
import sys

import structlog

from framekit.core.models.config import LoggingConfig


def configure_logging(config: LoggingConfig | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        config: Level and renderer settings. Defaults to LoggingConfig().
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if config.json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
