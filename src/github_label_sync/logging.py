"""Structured logging configuration.

Records are rendered one JSON object per line on stderr, since stdout carries the
command output (label JSON, status lines).
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, TextIO

# Everything a bare LogRecord carries; whatever else shows up came in through `extra=`.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Formats a record as a single JSON line; `extra=` fields are nested under ``extra``."""

    converter = time.gmtime

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        record.message = record.getMessage()
        stamp = f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}Z"

        doc: dict[str, Any] = dict(
            time=stamp,
            level=record.levelname,
            logger=record.name,
            thread=record.threadName,
            message=record.message,
        )
        fields = _extra_fields(record)
        if fields:
            doc["extra"] = fields
        if record.exc_info:
            doc["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            doc["stack"] = self.formatStack(record.stack_info)

        return json.dumps(doc, ensure_ascii=False, default=str)


def configure_logging(level: str, stream: TextIO | None = None) -> None:
    """Send all records to `stream` (stderr by default) as JSON, at `level` and above."""

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    # Reconfiguring replaces the previous handler rather than stacking a second one.
    for old in root.handlers[:]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs every connection at DEBUG; keep it out of label output.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.WARNING))
