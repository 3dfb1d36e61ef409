from __future__ import annotations

import logging
import os
import socket
import sys
import time
from typing import Literal

from platform_core.json_utils import JSONValue, dump_json_str
from platform_core.request_context import request_id_var

LogFormat = Literal["json", "text"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Structured fields picked up from ``extra=`` on every record when present.
_STANDARD_FIELDS: tuple[str, ...] = (
    "covenant_count",
    "reading_count",
    "breached_count",
    "loan_count",
    "unclassified_count",
    "rule_count",
    "gap_count",
    "policy",
    "point_count",
    "control_value",
)


def _json_field(record: logging.LogRecord, field_name: str) -> tuple[bool, JSONValue]:
    """Return (found, value) for a JSON-compatible attribute on the record."""
    if field_name not in record.__dict__:
        return False, None
    raw: object = record.__dict__[field_name]
    if isinstance(raw, (dict, list, str, int, float, bool)) or raw is None:
        value: JSONValue = raw
        return True, value
    return False, None


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Carries a UTC timestamp, level, logger name and message, the static
    fields given at construction, the current request id, any configured
    extra fields and the standard structured fields found on the record.
    """

    def __init__(
        self,
        *,
        static_fields: dict[str, str],
        extra_field_names: list[str],
    ) -> None:
        super().__init__()
        self._static = static_fields
        self._extra_fields = extra_field_names

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, JSONValue] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in self._static.items():
            payload[key] = value

        rid = request_id_var.get()
        if rid != "":
            payload["request_id"] = rid

        for field_name in (*self._extra_fields, *_STANDARD_FIELDS):
            if field_name in payload:
                continue
            found, field_value = _json_field(record, field_name)
            if found:
                payload[field_name] = field_value

        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)

        return dump_json_str(payload, compact=False)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for local development.

    Format: [timestamp] [LEVEL] [logger] key=value ... message
    """

    def __init__(self, *, extra_fields: list[str]) -> None:
        super().__init__()
        self._extra_fields = extra_fields

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        parts: list[str] = [f"[{timestamp}]", f"[{record.levelname}]", f"[{record.name}]"]
        for field_name in (*self._extra_fields, *_STANDARD_FIELDS):
            found, field_value = _json_field(record, field_name)
            if found:
                parts.append(f"{field_name}={field_value}")
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info is not None:
            line = line + "\n" + self.formatException(record.exc_info)
        return line


def _compute_instance_id() -> str:
    host = socket.gethostname().split(".")[0]
    return f"{host}-{os.getpid()}"


_LEVELS: dict[LogLevel, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(
    *,
    level: LogLevel,
    format_mode: LogFormat,
    service_name: str,
    instance_id: str | None,
    extra_fields: list[str] | None,
) -> logging.Logger:
    """Configure the root logger for a service.

    Existing root handlers are removed so repeated calls (tests, app
    factories) never stack handlers.

    Args:
        level: Minimum level emitted.
        format_mode: "json" for deployed services, "text" for a terminal.
        service_name: Added to every JSON record as ``service``.
        instance_id: Added as ``instance_id``; hostname-pid when None.
        extra_fields: Additional record attributes to emit when present.

    Returns:
        The configured root logger.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_LEVELS[level])

    static_fields: dict[str, str] = {
        "service": service_name,
        "instance_id": instance_id if instance_id is not None else _compute_instance_id(),
    }
    extra_field_names = extra_fields if extra_fields is not None else []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    if format_mode == "json":
        handler.setFormatter(
            JsonFormatter(static_fields=static_fields, extra_field_names=extra_field_names)
        )
    else:
        handler.setFormatter(TextFormatter(extra_fields=extra_field_names))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root


# Exposed for typed test utilities.
stdlib_logging = logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (typically ``__name__``)."""
    return logging.getLogger(name)


__all__ = [
    "JsonFormatter",
    "LogFormat",
    "LogLevel",
    "TextFormatter",
    "get_logger",
    "setup_logging",
    "stdlib_logging",
]
