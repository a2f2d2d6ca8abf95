from __future__ import annotations

import logging
from typing import Any, Dict

OBSERVABILITY_LOGGER = "github_actions_mcp.observability"

# LogRecord attributes that must not be overwritten through `extra`.
RESERVED_LOG_KEYS = frozenset(
    {
        "name",
        "msg",
        "message",
        "args",
        "asctime",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit one structured event.
    - `event` becomes the log message; `fields` land on the record via `extra`.
    - Keys colliding with LogRecord attributes are dropped.
    """
    log = logger or logging.getLogger(OBSERVABILITY_LOGGER)
    log.log(level, event, extra=_clean_fields(fields))


__all__ = ["log_event", "OBSERVABILITY_LOGGER", "RESERVED_LOG_KEYS"]
