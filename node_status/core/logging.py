"""Log formatting for the node status services: JSON lines for collectors, key=value text for terminals."""

import json
import logging
import sys
from typing import Any

from node_status.core.time_utils import utc_now

_STANDARD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}
_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# Loggers that emit one line per outbound request.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to a record."""

    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One compact JSON object per record, tagged with the emitting service."""

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._service:
            payload["service"] = self._service

        fields = record_fields(record)
        if fields:
            payload["context"] = fields
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True, separators=(",", ":"), default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with extras appended as ``key=value`` pairs."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = record_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{line} | {pairs}"


def configure_logging(level: str = "INFO", json_logs: bool = True, service: str | None = None) -> None:
    """Install a single stdout handler on the root logger; later calls are no-ops."""

    root = logging.getLogger()
    if getattr(root, "_node_status_configured", False):
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter(service) if json_logs else KeyValueFormatter())

    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    setattr(root, "_node_status_configured", True)
