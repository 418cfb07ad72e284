"""Structured logging configuration for the calculation service."""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional

SERVICE_LOGGER_PREFIX = "elcalc-"

# LogRecord extras copied into the JSON line when present
_EXTRA_FIELDS = (
    "calculation_id",
    "request_id",
    "duration_ms",
    "http_method",
    "http_path",
    "http_status",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value
        return json.dumps(log_entry, ensure_ascii=False)


class _ServiceLevelFilter(logging.Filter):
    """
    Lets the calculation loggers ("elcalc-*") run at their own level while
    third-party libraries stay at the root level, so LOG_LEVEL=INFO with
    ELCALC_LOG_LEVEL=DEBUG shows skipped point kinds without uvicorn noise.
    """
    def __init__(self, level: int, service_level: int):
        super().__init__()
        self.level = level
        self.service_level = service_level

    def filter(self, record):
        if record.name.startswith(SERVICE_LOGGER_PREFIX):
            return record.levelno >= self.service_level
        return record.levelno >= self.level


def _level(name: Optional[str], default: int) -> int:
    if not name:
        return default
    return getattr(logging, name.upper(), default)


def setup_logging(level: str = "INFO", json_output: bool = True, service_level: Optional[str] = None):
    """Configure root logging; ``json_output=False`` gives a readable dev format."""
    root_level = _level(level, logging.INFO)
    own_level = _level(service_level, root_level)

    root = logging.getLogger()
    root.setLevel(min(root_level, own_level))

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
        ))
    handler.addFilter(_ServiceLevelFilter(root_level, own_level))

    root.handlers = [handler]

    for name in ["uvicorn.access", "httpcore", "httpx", "multipart"]:
        logging.getLogger(name).setLevel(logging.WARNING)
