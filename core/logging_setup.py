"""
Todo API Logging Setup

Console logging for the service process:
- One stream handler on the root logger
- Request id (from core.request_context) stamped on every record
- Safe to call more than once (uvicorn reload, tests)
"""
import logging
import sys

from core.request_context import get_request_id

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | [%(request_id)s] %(message)s"

_HANDLER_NAME = "todo-api-console"


class RequestIdFilter(logging.Filter):
    """Attach the current request id (or '-') to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure the root logger once; later calls only adjust the level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(RequestIdFilter())
        root.addHandler(handler)

    return root
