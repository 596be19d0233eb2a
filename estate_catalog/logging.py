"""Logging setup for estate-catalog.

Store commands attach catalog context to their records with
``extra={"property_id": ..., "viewer_id": ..., "action_type": ...}``; the JSON
formatter lifts those keys into the emitted document.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONTEXT_FIELDS = ("property_id", "provider_id", "viewer_id", "action_type")

# Client libraries that are chatty at INFO
QUIET_LOGGERS = ("confluent_kafka", "psycopg", "faker")


class JsonFormatter(logging.Formatter):
    """One JSON document per record, catalog context included."""

    def format(self, record: logging.LogRecord) -> str:
        document: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                document[name] = value
        if record.exc_info:
            document["exception"] = self.formatException(record.exc_info)
        return json.dumps(document, default=str)


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route all logging to a single stream handler.

    Parameters
    ----------
    level : str
        Level name; unknown names fall back to INFO.
    format_type : str
        ``"standard"`` (human-readable lines) or ``"json"``.
    stream : TextIO | None
        Destination, stdout by default.

    Returns
    -------
    logging.Handler
        The installed handler.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    logging.getLogger("estate_catalog").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
