"""Structured JSON logging configuration.

Account context passed through ``extra`` is grouped under an "account"
key so merge and resolution events can be filtered on one field.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

# extra attribute -> key inside the "account" object
ACCOUNT_FIELDS = {
    "account_id": "id",
    "display_name": "display_name",
    "newly_created": "newly_created",
    "provider": "provider",
}
MERGE_FIELDS = {
    "donor_id": "donor_id",
    "discarded_provider": "discarded_provider",
}


def _collect(record: logging.LogRecord, fields: dict[str, str]) -> dict:
    values = {}
    for attr, key in fields.items():
        val = getattr(record, attr, None)
        if val is not None:
            values[key] = val
    return values


class JsonFormatter(logging.Formatter):
    """Emit one JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        account = _collect(record, ACCOUNT_FIELDS)
        if account:
            log_entry["account"] = account
        merge = _collect(record, MERGE_FIELDS)
        if merge:
            log_entry["merge"] = merge
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO") -> None:
    """Attach a JSON stderr handler to the "signin" logger tree."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger("signin")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False
