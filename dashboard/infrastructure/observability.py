"""Structured Logging — one stream handler, JSON or key=value text, carrying action context.

Invariants:
    - Every line carries timestamp, level, logger, message and the service name
    - Action context (operation, target_id, error_code, outcome, view_key, path) is
      emitted only when the caller set it through extra=
    - setup_logging is idempotent: calling it again replaces the handler it installed
      instead of stacking a second one
    - Library chatter (sqlalchemy.engine, httpx) is held at WARNING

Design Decisions:
    - stdlib logging with a hand-written JSON formatter, no logging dependency
    - The text format keeps the same context as key=value pairs so a storage fault
      reads the same in development and production
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "acme-dashboard"

CONTEXT_FIELDS = (
    "operation", "target_id", "error_code", "outcome", "view_key", "path",
)

QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def action_context(record: logging.LogRecord) -> dict[str, object]:
    """The subset of CONTEXT_FIELDS set on this record."""
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
            **action_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with action context appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = action_context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the dashboard's root handler. Returns the handler."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "dashboard_handler", False):
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.dashboard_handler = True
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
