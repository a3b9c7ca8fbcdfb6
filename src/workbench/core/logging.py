from collections.abc import Iterator
from contextlib import contextmanager
import logging
import sys
from typing import Any

import structlog

from workbench.core.config import settings


def setup_logging(level: int | None = None) -> None:
    """Configure stdlib logging and structlog for the workbench.

    Local runs get colored console output, every other environment emits
    one JSON object per line.
    """
    if level is None:
        level = logging.DEBUG if settings.DEBUG else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    processors: list[Any]
    if settings.ENVIRONMENT == "local":
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


@contextmanager
def bound_context(**values: Any) -> Iterator[None]:
    """Attach key/value pairs to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
