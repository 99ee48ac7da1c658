"""
Structured logging - JSON formatter and root logger setup.

JSONFormatter renders one JSON object per record and surfaces the
"context" extra used by the request logger. setup_logging() is called
from the application lifespan.
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("context", "method", "path", "error_type")


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


_CONSOLE_HANDLER_NAME = "pie-api-console"


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """
    Configure the root logger for the application.

    Safe to call more than once: the console handler installed by an
    earlier call is reused with the new format instead of being added again.
    """
    handler = next((h for h in logging.root.handlers if h.get_name() == _CONSOLE_HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_CONSOLE_HANDLER_NAME)
        logging.root.addHandler(handler)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
