"""Logging helpers scoped to the catch_async logger.

The orchestrator sets a fresh call id for every invocation, so all lines
emitted while one call retries can be grouped. `attach_handler` lets a host
application see those lines with the id in them; it only touches the package
logger and never the root logger or its handlers.
"""

from __future__ import annotations

import logging
import sys
import uuid
from typing import IO, Optional
import contextvars

PACKAGE_LOGGER = "catch_async"

# Call id context variable (set by the orchestrator for each invocation)
call_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "call_id", default="-"
)

CALL_ID_FORMAT = "[%(asctime)s] %(levelname)s %(name)s call=%(call_id)s: %(message)s"


def new_call_id() -> str:
    return uuid.uuid4().hex[:12]


def coerce_level(level: int | str | None) -> int:
    """Map a level name or number to a logging level; None means WARNING.

    Raises ValueError for names the logging module does not know.
    """
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).upper().strip())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


class CallIdFilter(logging.Filter):
    """Stamp every record with the id of the catch_async call that emitted it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.call_id = call_id_var.get()
        return True


def attach_handler(
    level: int | str | None = logging.DEBUG,
    stream: Optional[IO[str]] = None,
    fmt: Optional[str] = None,
) -> logging.Handler:
    """Send catch_async log lines to `stream` (stderr by default), tagged with the call id.

    Calling it again replaces the handler installed by the previous call.
    Returns the installed handler so callers can detach it with `detach_handler`.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    detach_handler()

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.addFilter(CallIdFilter())
    handler.setFormatter(logging.Formatter(fmt or CALL_ID_FORMAT))
    handler._catch_async_handler = True  # type: ignore[attr-defined]

    package_logger.setLevel(coerce_level(level))
    package_logger.addHandler(handler)
    return handler


def detach_handler() -> None:
    """Remove the handler installed by `attach_handler`, if any."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(package_logger.handlers):
        if getattr(h, "_catch_async_handler", False):
            package_logger.removeHandler(h)
