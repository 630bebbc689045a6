"""
Logging setup for the MentorHub API.

Development gets a readable single-line format; production (or ``LOG_JSON=true``)
gets one JSON object per line so log shippers can parse it.
"""

import json
import logging
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from app.core.config import settings

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "exc_info", "exc_text",
    "thread", "threadName", "message", "taskName", "request_id",
}


def get_request_id() -> str:
    return request_id_var.get() or ""


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


class JSONFormatter(logging.Formatter):
    """One JSON document per record, including any ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info and record.exc_info[0]:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or "-"
        return super().format(record)


class PortalLogger(logging.Logger):
    def log_request(self, method: str, path: str, status_code: int, duration_ms: float) -> None:
        self.info(
            f"HTTP {method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": duration_ms,
            },
        )

    def log_auth_event(self, event: str, success: bool, user_email: str | None = None,
                       reason: str | None = None) -> None:
        level = logging.INFO if success else logging.WARNING
        self.log(
            level,
            f"Auth {event}: {'success' if success else 'failed'}"
            + (f" - {user_email}" if user_email else "")
            + (f" - {reason}" if reason else ""),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "user_email": user_email,
            },
        )


def setup_logging() -> PortalLogger:
    logging.setLoggerClass(PortalLogger)
    log = logging.getLogger("mentorhub")
    log.__class__ = PortalLogger
    log.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    log.handlers.clear()
    log.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json or settings.environment == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            ContextualFormatter("%(asctime)s | %(levelname)-8s | [%(request_id)s] | %(name)s | %(message)s")
        )
    log.addHandler(handler)
    return log


logger = setup_logging()
