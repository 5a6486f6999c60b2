import json
import logging
from datetime import datetime, timezone
from typing import Optional

from homestock.config import get_settings

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_PLAIN_DATEFMT = "%Y-%m-%dT%H:%M:%S"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def resolve_level(name: Optional[str]) -> int:
    if not name:
        return logging.INFO
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: Optional[str] = None, *, json_output: Optional[bool] = None) -> None:
    """Configure the root logger once for scripts and embedding applications.

    Explicit arguments win over ``LOG_LEVEL`` / ``LOG_JSON`` from settings.
    """
    settings = get_settings()
    use_json = settings.LOG_JSON if json_output is None else json_output

    handler = logging.StreamHandler()
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_PLAIN_FORMAT, datefmt=_PLAIN_DATEFMT))

    root = logging.getLogger()
    root.setLevel(resolve_level(level or settings.LOG_LEVEL))
    root.handlers.clear()
    root.addHandler(handler)


__all__ = ["JsonFormatter", "resolve_level", "setup_logging"]
