"""Structured logging for the REST services: structlog rendered through stdlib.

Services emit events such as ``rest.find.failed`` with ``service`` and
``operation`` bound. :func:`setup_logging` renders those on a handler attached
to the ``pagerest`` logger only, so an application's own root configuration is
left alone.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

LOGGER_NAME = "pagerest"
FORMATS = ("console", "json")

# rendered right after the event name, in this order
_CALL_CONTEXT_KEYS = ("service", "operation")


def order_call_context(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Move ``event``, ``service`` and ``operation`` to the front of the event."""
    ordered: dict[str, Any] = {}
    for key in ("event", *_CALL_CONTEXT_KEYS):
        if key in event_dict:
            ordered[key] = event_dict.pop(key)
    ordered.update(event_dict)
    return ordered


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.environ.get("PAGEREST_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def _resolve_format(fmt: str | None) -> str:
    if fmt is None:
        fmt = os.environ.get("PAGEREST_LOG_FORMAT", "console")
    fmt = fmt.strip().lower()
    if fmt not in FORMATS:
        raise ValueError(f"log format must be one of {FORMATS}, got {fmt!r}")
    return fmt


def setup_logging(
    level: str | int | None = None,
    fmt: str | None = None,
    *,
    stream: Any = None,
) -> logging.Handler:
    """Configure structlog and a handler on the ``pagerest`` logger.

    *level* and *fmt* fall back to ``PAGEREST_LOG_LEVEL`` (default INFO) and
    ``PAGEREST_LOG_FORMAT`` (``console`` | ``json``, default console). Calling
    it again replaces the handler installed by the previous call.

    Returns the installed handler. Raises ``ValueError`` for an unknown level
    or format.
    """
    log_level = _resolve_level(level)
    log_format = _resolve_format(fmt)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(sort_keys=False)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                order_call_context,
                renderer,
            ],
        )
    )
    handler.set_name("pagerest")

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if existing.get_name() == "pagerest":
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
    return handler
