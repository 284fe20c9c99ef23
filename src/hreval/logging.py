"""Logging utilities for the evaluation pipelines.

Pipelines bind ``component`` and ``request_id`` as context variables for the
duration of a request, so events emitted by the gateway and other
collaborators carry them without explicit arguments.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog JSON output routed through stdlib logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def request_context(component: str, request_id: str) -> AbstractContextManager[None]:
    """Bind the request's log context; previous values are restored on exit."""
    return structlog.contextvars.bound_contextvars(component=component, request_id=request_id)
