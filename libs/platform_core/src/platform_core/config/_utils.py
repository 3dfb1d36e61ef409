from __future__ import annotations

import math
import os
from typing import Literal

# Must match platform_core.logging.LogLevel
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(RuntimeError):
    """Raised when an environment variable holds an unusable value."""


def _optional_env_str(key: str) -> str | None:
    value = os.getenv(key)
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed == "":
        return None
    return trimmed


def _parse_str(key: str, default: str) -> str:
    val = _optional_env_str(key)
    return val if val is not None else default


def _parse_float(key: str, default: float) -> float:
    val = _optional_env_str(key)
    if val is None:
        return default
    try:
        parsed = float(val)
    except ValueError as exc:
        raise ConfigError(f"Env var {key} must be a number, got {val!r}") from exc
    if not math.isfinite(parsed):
        raise ConfigError(f"Env var {key} must be finite, got {val!r}")
    return parsed


def _parse_int(key: str, default: int) -> int:
    val = _optional_env_str(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ConfigError(f"Env var {key} must be an integer, got {val!r}") from exc


def _parse_log_level(key: str, default: LogLevel) -> LogLevel:
    val = _optional_env_str(key)
    if val is None:
        return default
    upper_val = val.upper()
    if upper_val == "DEBUG":
        return "DEBUG"
    if upper_val == "INFO":
        return "INFO"
    if upper_val == "WARNING":
        return "WARNING"
    if upper_val == "ERROR":
        return "ERROR"
    if upper_val == "CRITICAL":
        return "CRITICAL"
    raise ConfigError(
        f"Env var {key} must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL; got {val!r}"
    )


__all__ = [
    "ConfigError",
    "LogLevel",
    "_optional_env_str",
    "_parse_float",
    "_parse_int",
    "_parse_log_level",
    "_parse_str",
]
