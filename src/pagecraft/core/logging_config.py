"""
Structured Logging Configuration
structlog on top of stdlib logging, console or JSON output.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

# Event keys that may carry raw model output or upstream bodies
PREVIEW_KEYS = ("content_preview", "body")
PREVIEW_LIMIT = 500

# Event keys that must never reach a log sink
SECRET_KEYS = frozenset({"api_key", "authorization", "token"})


def clip_previews(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Cap raw model text in log events and mask credentials."""
    for key in PREVIEW_KEYS:
        value = event_dict.get(key)
        if not isinstance(value, str):
            continue
        if len(value) > PREVIEW_LIMIT:
            value = f"{value[:PREVIEW_LIMIT]}... [{len(value) - PREVIEW_LIMIT} more chars]"
        # Unpaired surrogates cannot be written to a UTF-8 sink
        event_dict[key] = value.encode("utf-8", "backslashreplace").decode("utf-8")
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structured logging for the service.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_logs: Emit one JSON object per line instead of console output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    # uvicorn logs through the same handler
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            clip_previews,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module logger; call as ``logger = get_logger(__name__)``."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind request-scoped keys (request id, operation) for the duration of a block.

    Nested contexts restore the outer values on exit.
    """

    def __init__(self, **kwargs: Any) -> None:
        self.context = kwargs
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
