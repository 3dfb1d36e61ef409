from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from platform_core.json_utils import (
    JSONObject,
    JSONTypeError,
    JSONValue,
    narrow_json_to_dict,
    narrow_json_to_list,
    optional_str,
    require_float,
    require_int,
    require_str,
)

from .models import (
    AlertSeverity,
    AlertTrend,
    Bucket,
    CovenantDefinition,
    CovenantReading,
    EarlyWarningAlert,
    LoanLevelRow,
    ProvisioningRule,
    ReadingStatus,
    ReportingFrequency,
    ThresholdOperator,
    TrendPoint,
    ValueFormat,
)
from .validation import require_iso_date, validate_loan

_T = TypeVar("_T")


def _require_operator(data: JSONObject, key: str) -> ThresholdOperator:
    """Extract a threshold operator; the unicode forms are accepted as aliases."""
    value = require_str(data, key)
    if value in (">=", "≥"):
        return ">="
    if value == ">":
        return ">"
    if value in ("<=", "≤"):
        return "<="
    if value == "<":
        return "<"
    raise JSONTypeError(f"Invalid ThresholdOperator: {value}")


def _require_format(data: JSONObject, key: str) -> ValueFormat:
    value = require_str(data, key)
    if value == "percent":
        return "percent"
    if value == "ratio":
        return "ratio"
    if value == "number":
        return "number"
    raise JSONTypeError(f"Invalid ValueFormat: {value}")


def _require_frequency(data: JSONObject, key: str) -> ReportingFrequency:
    value = require_str(data, key)
    if value == "monthly":
        return "monthly"
    if value == "quarterly":
        return "quarterly"
    if value == "annually":
        return "annually"
    raise JSONTypeError(f"Invalid ReportingFrequency: {value}")


def _require_reading_status(data: JSONObject, key: str) -> ReadingStatus:
    value = require_str(data, key)
    if value == "compliant":
        return "compliant"
    if value == "watch":
        return "watch"
    if value == "breached":
        return "breached"
    raise JSONTypeError(f"Invalid ReadingStatus: {value}")


def _require_bucket(data: JSONObject, key: str) -> Bucket:
    value = require_str(data, key)
    if value == "normal":
        return "normal"
    if value == "watch":
        return "watch"
    if value == "substandard":
        return "substandard"
    if value == "doubtful":
        return "doubtful"
    if value == "loss":
        return "loss"
    raise JSONTypeError(f"Invalid Bucket: {value}")


def _require_severity(data: JSONObject, key: str) -> AlertSeverity:
    value = require_str(data, key)
    if value == "info":
        return "info"
    if value == "warning":
        return "warning"
    if value == "critical":
        return "critical"
    raise JSONTypeError(f"Invalid AlertSeverity: {value}")


def _require_alert_trend(data: JSONObject, key: str) -> AlertTrend:
    value = require_str(data, key)
    if value == "improving":
        return "improving"
    if value == "stable":
        return "stable"
    if value == "deteriorating":
        return "deteriorating"
    raise JSONTypeError(f"Invalid AlertTrend: {value}")


def decode_covenant_definition(data: JSONObject) -> CovenantDefinition:
    """Decode CovenantDefinition from JSON dict. Raises on invalid data."""
    return CovenantDefinition(
        id=require_str(data, "id"),
        metric=require_str(data, "metric"),
        operator=_require_operator(data, "operator"),
        threshold=require_float(data, "threshold"),
        format=_require_format(data, "format"),
        frequency=_require_frequency(data, "frequency"),
    )


def decode_covenant_reading(data: JSONObject) -> CovenantReading:
    """Decode CovenantReading from JSON dict. Raises on invalid data or a non ISO date."""
    return CovenantReading(
        covenant_id=require_str(data, "covenant_id"),
        date=require_iso_date(require_str(data, "date"), "date"),
        value=require_float(data, "value"),
        status=_require_reading_status(data, "status"),
    )


def decode_provisioning_rule(data: JSONObject) -> ProvisioningRule:
    """Decode ProvisioningRule from JSON dict. Rule-set consistency is checked by RuleSet."""
    return ProvisioningRule(
        bucket=_require_bucket(data, "bucket"),
        dpd_min=require_int(data, "dpd_min"),
        dpd_max=require_int(data, "dpd_max"),
        provision_percent=require_float(data, "provision_percent"),
    )


def decode_loan(data: JSONObject) -> LoanLevelRow:
    """Decode LoanLevelRow from JSON dict. Negative balance or DPD raises ValidationError."""
    return validate_loan(
        LoanLevelRow(
            loan_id=require_str(data, "loan_id"),
            current_balance=require_float(data, "current_balance"),
            dpd_as_of_reporting_date=require_int(data, "dpd_as_of_reporting_date"),
        )
    )


def decode_alert(data: JSONObject) -> EarlyWarningAlert:
    """Decode EarlyWarningAlert from JSON dict. Raises on invalid data."""
    alert = EarlyWarningAlert(
        id=require_str(data, "id"),
        metric=require_str(data, "metric"),
        severity=_require_severity(data, "severity"),
        trend=_require_alert_trend(data, "trend"),
        message=require_str(data, "message"),
    )
    predicted = optional_str(data, "predicted_breach_date")
    if predicted is not None:
        alert["predicted_breach_date"] = require_iso_date(predicted, "predicted_breach_date")
    return alert


def decode_trend_point(data: JSONObject) -> TrendPoint:
    return TrendPoint(
        date=require_iso_date(require_str(data, "date"), "date"),
        value=require_float(data, "value"),
    )


def decode_list(raw: JSONValue, item_decoder: Callable[[JSONObject], _T]) -> list[_T]:
    """Decode a JSON array of objects with ``item_decoder``."""
    return [item_decoder(narrow_json_to_dict(item)) for item in narrow_json_to_list(raw)]


__all__ = [
    "decode_alert",
    "decode_covenant_definition",
    "decode_covenant_reading",
    "decode_list",
    "decode_loan",
    "decode_provisioning_rule",
    "decode_trend_point",
]
