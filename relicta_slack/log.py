"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import re
import sys

import structlog

# The path of a Slack webhook URL is its secret.
_WEBHOOK_SECRET = re.compile(r"(hooks\.slack\.com/services/)[\w/\-]+", re.IGNORECASE)


def _redact_webhooks(
    _logger: structlog.types.WrappedLogger,
    _method: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key, value in list(event_dict.items()):
        if isinstance(value, str) and _WEBHOOK_SECRET.search(value):
            event_dict[key] = _WEBHOOK_SECRET.sub(r"\1***", value)
    return event_dict


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structlog on top of a stderr stdlib handler."""
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_webhooks,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def use_stdlib_logging() -> None:
    """Hand events to stdlib logging unrendered; the host's handlers decide where they go."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _redact_webhooks,
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# structlog's own default prints to stdout, which plugin hosts may own.
if not structlog.is_configured():
    use_stdlib_logging()
