from __future__ import annotations

from typing import Literal, TypedDict

from ._utils import ConfigError, LogLevel, _parse_float, _parse_int, _parse_log_level, _parse_str

ThresholdOperator = Literal[">=", ">", "<=", "<"]


class CovenantMonitorLoggingConfig(TypedDict, total=True):
    """Logging configuration."""

    level: LogLevel
    format: Literal["json", "text"]


class CovenantMonitorScenarioConfig(TypedDict, total=True):
    """Baseline for the collection-efficiency scenario projection."""

    baseline_control: float
    baseline_a: float
    coefficient_a: float
    operator_a: ThresholdOperator
    threshold_a: float
    baseline_b: float
    coefficient_b: float
    operator_b: ThresholdOperator
    threshold_b: float
    precision: int


class CovenantMonitorSettings(TypedDict, total=True):
    """Configuration for covenant-monitor-api."""

    app_env: Literal["dev", "prod"]
    logging: CovenantMonitorLoggingConfig
    scenario: CovenantMonitorScenarioConfig


def _parse_operator(key: str, default: ThresholdOperator) -> ThresholdOperator:
    raw = _parse_str(key, default)
    if raw in (">=", "≥"):
        return ">="
    if raw == ">":
        return ">"
    if raw in ("<=", "≤"):
        return "<="
    if raw == "<":
        return "<"
    raise ConfigError(f"Env var {key} must be one of >=, >, <=, <; got {raw!r}")


def load_covenant_monitor_settings() -> CovenantMonitorSettings:
    """Load covenant-monitor settings from environment variables.

    Environment variables:
        APP_ENV: dev/prod (default: dev)
        LOGGING__LEVEL: Log level (default: INFO)
        LOGGING__FORMAT: json/text (default: json)
        SCENARIO__BASELINE_CONTROL: Baseline collection efficiency (default: 98.2)
        SCENARIO__BASELINE_A: Baseline PAR 30 (default: 5.2)
        SCENARIO__COEFFICIENT_A: PAR 30 sensitivity (default: 2)
        SCENARIO__OPERATOR_A / SCENARIO__THRESHOLD_A: PAR 30 limit (default: <= 5)
        SCENARIO__BASELINE_B: Baseline CRAR (default: 14.7)
        SCENARIO__COEFFICIENT_B: CRAR sensitivity (default: 0.5)
        SCENARIO__OPERATOR_B / SCENARIO__THRESHOLD_B: CRAR limit (default: >= 15)
        SCENARIO__PRECISION: Decimal places of projections (default: 1)
    """
    format_str = _parse_str("LOGGING__FORMAT", "json").lower()
    if format_str not in ("json", "text"):
        raise ConfigError(f"Env var LOGGING__FORMAT must be json or text; got {format_str!r}")
    log_format: Literal["json", "text"] = "text" if format_str == "text" else "json"

    logging_cfg: CovenantMonitorLoggingConfig = {
        "level": _parse_log_level("LOGGING__LEVEL", "INFO"),
        "format": log_format,
    }

    precision = _parse_int("SCENARIO__PRECISION", 1)
    if precision < 0:
        raise ConfigError("Env var SCENARIO__PRECISION must be non-negative")

    scenario_cfg: CovenantMonitorScenarioConfig = {
        "baseline_control": _parse_float("SCENARIO__BASELINE_CONTROL", 98.2),
        "baseline_a": _parse_float("SCENARIO__BASELINE_A", 5.2),
        "coefficient_a": _parse_float("SCENARIO__COEFFICIENT_A", 2.0),
        "operator_a": _parse_operator("SCENARIO__OPERATOR_A", "<="),
        "threshold_a": _parse_float("SCENARIO__THRESHOLD_A", 5.0),
        "baseline_b": _parse_float("SCENARIO__BASELINE_B", 14.7),
        "coefficient_b": _parse_float("SCENARIO__COEFFICIENT_B", 0.5),
        "operator_b": _parse_operator("SCENARIO__OPERATOR_B", ">="),
        "threshold_b": _parse_float("SCENARIO__THRESHOLD_B", 15.0),
        "precision": precision,
    }

    app_env_str = _parse_str("APP_ENV", "dev")
    app_env: Literal["dev", "prod"] = "prod" if app_env_str == "prod" else "dev"

    return {
        "app_env": app_env,
        "logging": logging_cfg,
        "scenario": scenario_cfg,
    }


__all__ = [
    "CovenantMonitorLoggingConfig",
    "CovenantMonitorScenarioConfig",
    "CovenantMonitorSettings",
    "ThresholdOperator",
    "load_covenant_monitor_settings",
]
