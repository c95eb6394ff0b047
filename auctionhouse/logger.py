"""Structured JSON logging for the service."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}


class JsonFormatter(logging.Formatter):
    """Render a log record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created).astimezone()
        stamp = (
            moment.strftime("%Y-%m-%dT%H:%M:%S.")
            + f"{int(record.msecs):03d}"
            + moment.strftime("%z")
        )
        entry: dict[str, Any] = {
            "level": _LEVEL_NAMES.get(record.levelno, record.levelname.lower()),
            "time": stamp,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}) or {})
        return json.dumps(entry, default=str)


_logger = logging.getLogger("auctionhouse")
if not _logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(JsonFormatter())
    _logger.addHandler(_handler)
_logger.setLevel(logging.INFO)
_logger.propagate = False


def info(message: str, **kwargs: Any) -> None:
    """Log an informational message with extra structured fields."""
    _logger.info(message, extra={"fields": dict(kwargs)})


def error(message: str, err: BaseException | None, **kwargs: Any) -> None:
    """Log an error message, attaching the error under the "error" key."""
    fields = dict(kwargs)
    if err is not None:
        fields["error"] = str(err)
    _logger.error(message, extra={"fields": fields})