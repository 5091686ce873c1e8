"""Logging configuration for the application.

Every record carries the current request id (set by the request-id
middleware), the authenticated user id and, when tracing is on, the trace
id, so log lines from one request can be correlated.
"""

import logging
import sys

from app.core.config import get_settings
from app.shared.context import get_current_actor_id, get_request_id
from app.shared.telemetry.tracing import get_trace_id

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(request_id)s user=%(user_id)s trace=%(trace_id)s] %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Inject request_id, user_id and trace_id into log records ("-" when unknown)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.user_id = get_current_actor_id() or "-"
        record.trace_id = get_trace_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging on stdout.

    Level is DEBUG when settings.debug is True, otherwise LOG_LEVEL.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
