"""Structured Logging — formatters that surface mutation context on every record.

Invariants:
    - Every record carries timestamp (event time), level, logger name and message
    - MUTATION_FIELDS (document_id, operation, item_id, reason, error_code, path)
      appear only when set on the record
    - setup_logging is idempotent: calling it again replaces the flowedit handler

Design Decisions:
    - stdlib logging with `extra=`: call sites stay plain logger.info(...)
    - json for log shipping, text for local runs; chosen by settings.log_format
"""

import json
import logging
from datetime import datetime, timezone

MUTATION_FIELDS: tuple[str, ...] = (
    "document_id", "operation", "item_id", "reason", "error_code", "path",
)

_HANDLER_NAME = "flowedit"


def mutation_context(record: logging.LogRecord) -> dict:
    """Mutation extras present on `record`, in MUTATION_FIELDS order."""
    context = {}
    for key in MUTATION_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            context[key] = value
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **mutation_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with mutation extras appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = mutation_context(record)
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            line = f"{line} [{pairs}]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the flowedit handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
