"""Logging configuration for the application.

Every record is stamped with the active span's trace id so the pipeline's
per-branch warnings (search fallbacks, model failures, timeouts) can be
joined to the request that produced them.
"""

import logging
import sys

from opentelemetry import trace

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [trace=%(trace_id)s] - %(message)s"

# Per-call chatter from the model transport and the MySQL driver
_QUIET_LOGGERS = ("httpx", "httpcore", "aiomysql")


class TraceContextFilter(logging.Filter):
    """Set record.trace_id to the current span's trace id, or "-" outside a span."""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        record.trace_id = (
            format(span_context.trace_id, "032x") if span_context.is_valid else "-"
        )
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO; the
    service's own "app" loggers follow the same level. Output goes to
    stdout through a handler carrying TraceContextFilter.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(TraceContextFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
    logging.getLogger("app").setLevel(log_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
