"""Logging configuration: stdout handler with request id and actor on every record."""

import logging
import sys

from permgraph.core.config import get_settings
from permgraph.shared.context import actor_label, get_request_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [req=%(request_id)s actor=%(actor)s] %(message)s"


class RequestContextFilter(logging.Filter):
    """Copy the request id and acting administrator from contextvars onto the record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.actor = actor_label()
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. SQLAlchemy
    engine output is kept at WARNING unless database_echo is set.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        handlers=[handler],
        force=True,
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
