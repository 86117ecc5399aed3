"""structlog setup shared by the library and the command line."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import Processor

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# urllib3 logs every connection at DEBUG; keep it out of our output.
NOISY_LOGGERS = ("urllib3",)


def resolve_level(level: str) -> int:
    """Map a level name onto its :mod:`logging` constant."""
    try:
        return LOG_LEVELS[level.lower()]
    except KeyError:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.") from None


def configure_logging(
    level: str = "info",
    *,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog events through stdlib logging to stderr."""
    level_value = resolve_level(level)
    logging.basicConfig(level=level_value, format="%(message)s", stream=stream or sys.stderr)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.INFO))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


__all__ = ["configure_logging", "resolve_level", "LOG_LEVELS"]
