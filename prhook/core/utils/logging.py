"""
Structured logging utilities.

Configures structlog for the process and provides a context manager for
timed operation logging.
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Any

import structlog

from prhook.core.config.logging_config import LoggingConfig

logger = structlog.get_logger()


def configure_logging(logging_config: LoggingConfig) -> None:
    """
    Route stdlib logging and structlog through one handler.

    Args:
        logging_config: Level and renderer ("console" or "json") to use.
    """
    level = getattr(logging, logging_config.level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )

    renderer: Any
    if logging_config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation completion and errors with timing information.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"repo": "PROJ/repo", "pr": "123"})
        **context: Additional context to include in logs

    Example:
        async with log_operation("merge_refresh", repo=repo, pr=pr_id):
            await pull_request_service.can_merge(...)
    """
    start_time = time.time()
    log = logger.bind(operation=operation, **(subject_ids or {}), **context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        log.error("operation_failed", error=str(e), latency_ms=latency_ms)
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        log.debug("operation_completed", latency_ms=latency_ms)
