"""
Logging configuration for the PDF render service.

Installs one stdout handler (human-readable or JSON lines for CloudWatch)
and provides a request-scoped adapter that tags records with the
platform request id.
"""

import json
import logging
import sys
from typing import Optional


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    Messages are serialized with json.dumps, so quotes and newlines in
    engine errors (e.g. `waiting until "networkidle"`) stay valid JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            data["request_id"] = request_id
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


class RequestLogger(logging.LoggerAdapter):
    """
    Adapter that attaches the request id to every record.

    The id is prefixed to the message for the plain format and exposed
    as `request_id` on the record for the JSON format.
    """

    def process(self, msg, kwargs):
        request_id = self.extra.get("request_id")
        kwargs.setdefault("extra", {})["request_id"] = request_id
        if request_id:
            msg = f"[req:{request_id[:8]}] {msg}"
        return msg, kwargs


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Install the service's stdout handler on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: "simple" for development, "json" for log aggregation
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Lambda pre-installs a handler on the root logger; replace it
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str, request_id: Optional[str] = None) -> RequestLogger:
    """Get a logger tagged with the platform request id (if any)."""
    return RequestLogger(logging.getLogger(name), {"request_id": request_id})
