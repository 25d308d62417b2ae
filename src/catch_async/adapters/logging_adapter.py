import logging
from typing import Any, Callable

from catch_async.core.interfaces.logging import LoggingPort
from catch_async.core.logging_config import PACKAGE_LOGGER, coerce_level


class LoggingAdapter(LoggingPort):
    """Concrete logging adapter.

    Delegates to Python's logging. It intentionally does NOT add its own
    handlers so that the host application (or `attach_handler`) controls
    sinks. The call id is stamped by the handler filter; we simply emit.
    """

    def __init__(self, name: str = PACKAGE_LOGGER, log_level: int | str = logging.WARNING):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(coerce_level(log_level))
        # Let records reach whatever handlers the host application installed
        self.logger.propagate = True
        self.logger.debug("Initialized logger name=%s level=%s", name, self.logger.level)

    def info(self, msg: str, *args):
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args):
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args):
        self.logger.error(msg, *args)

    def debug(self, msg: str, *args):
        self.logger.debug(msg, *args)


def attempt_logger(port: LoggingPort, level: str = "warning") -> Callable[[Any, int], None]:
    """Build a `logger` hook that reports failed attempts through `port`."""
    emit = getattr(port, level.lower(), None)
    if not callable(emit):
        raise ValueError(f"Unsupported log level for attempt logger: {level!r}")

    def log_attempt(error: Any, attempt: int) -> None:
        emit("[catch:hook] attempt %s failed: %r", attempt, error)

    return log_attempt
