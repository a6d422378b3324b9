from __future__ import annotations

import logging
from typing import Callable, Optional

ErrorHandler = Callable[[Exception], None]


class StatsDClientError(Exception):
    """Raised when the client cannot start; also routed to handlers for post-close sends."""


def logging_error_handler(logger: Optional[logging.Logger] = None) -> ErrorHandler:
    """Error handler that reports dropped metrics through `logging`."""

    log = logger or logging.getLogger("blocking_statsd")

    def handle(exc: Exception) -> None:
        log.warning("StatsD metric dropped: %r", exc)

    return handle
