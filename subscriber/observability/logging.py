"""
Structured logging configuration using structlog.

Application code logs through ``structlog.get_logger(__name__)`` with
keyword context. Records from third-party libraries that use the standard
library (httpx, deepl) go through the same renderer, so a run produces a
single consistent stream on stderr; stdout is left to CLI output.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from subscriber.config.settings import get_settings

# Libraries that log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "deepl")

_handler: logging.Handler | None = None


def setup_logging(level: str | None = None) -> None:
    """
    Configure structlog and route standard library logging through it.

    Production renders one JSON object per line; every other environment
    gets colored console output.

    Args:
        level: Log level name overriding the configured one

    Usage:
        setup_logging()
        logger = structlog.get_logger(__name__)
        logger.info("New item found", source_url="https://...", title="...")
    """
    settings = get_settings()
    level = level or settings.log_level

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Processor
    if settings.is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    # Repeated setup replaces the handler instead of stacking another one
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = handler
    root.addHandler(handler)
    root.setLevel(getattr(logging, level))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
