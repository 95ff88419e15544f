"""Structured logging for the sprint namer.

Every line goes through structlog. Production emits JSON, development a
colored console. Two things are added on top of the usual processor chain:

- ``redact_sensitive`` masks credentials (automations token, Notion token,
  webhook signatures) and truncates long free-form values such as upstream
  response bodies.
- ``request_context`` binds a request id for the duration of a request, so
  lines logged by handlers and by the background jobs they schedule can be
  correlated.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor

REDACTED = "[redacted]"

# Keys whose values are credentials. Matched case-insensitively, with dashes
# treated as underscores so raw header names match too.
SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "automations_token",
        "notion_api_token",
        "webhook_verification_token",
        "x_notion_automations_token",
        "notion_signature",
        "x_notion_signature",
        "signature",
        "secret",
        "token",
    }
)

MAX_VALUE_LENGTH = 500

_configured = False


def redact_sensitive(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential values and truncate oversized strings.

    A credential that is absent (None) is left as None, so a log line still
    shows whether one was presented.
    """
    for key, value in list(event_dict.items()):
        if key == "event":
            continue
        if key.lower().replace("-", "_") in SENSITIVE_KEYS:
            if value is not None:
                event_dict[key] = REDACTED
        elif isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            event_dict[key] = f"{value[:MAX_VALUE_LENGTH]}...[truncated {len(value)} chars]"
    return event_dict


def configure_logging(level: str = "INFO", format: str = "json") -> None:
    """Configure structlog and route stdlib logging to stdout.

    Args:
        level: Log level name. Unknown names fall back to INFO.
        format: "json" for production, anything else for a colored console.
    """
    global _configured

    log_level = getattr(logging, level.upper(), logging.INFO)

    # uvicorn and httpx log through stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    logging.getLogger().setLevel(log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_sensitive,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format.lower() == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger, configuring logging with defaults on first use."""
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)  # type: ignore[no-any-return]


@contextmanager
def request_context(request_id: str, **values: object) -> Iterator[None]:
    """Bind ``request_id`` (plus any extra values) to log lines inside the block.

    Previously bound values are restored on exit. Tasks created inside the
    block copy the context, so background jobs keep the request id.

    Example:
        ```python
        with request_context("req-123"):
            logger.info("Request handled")  # carries request_id="req-123"
        ```
    """
    with structlog.contextvars.bound_contextvars(request_id=request_id, **values):
        yield
