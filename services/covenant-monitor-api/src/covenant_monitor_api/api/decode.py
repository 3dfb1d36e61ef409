"""HTTP request body parsing for covenant-monitor-api.

Parses raw request bytes into strictly-typed engine records using
platform_core.json_utils and the covenant_engine decoders. Every decoding
or validation failure surfaces as AppError(INVALID_INPUT).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypedDict, TypeVar

from covenant_engine import (
    CovenantDefinition,
    CovenantReading,
    EarlyWarningAlert,
    LoanLevelRow,
    RuleSet,
    TrendPoint,
    ValidationError,
    decode_alert,
    decode_covenant_definition,
    decode_covenant_reading,
    decode_list,
    decode_loan,
    decode_provisioning_rule,
    decode_trend_point,
)
from covenant_engine.timeseries import PeriodGranularity
from covenant_engine.validation import validate_ascending
from platform_core.errors import AppError, ErrorCode
from platform_core.json_utils import (
    InvalidJsonError,
    JSONObject,
    JSONTypeError,
    load_json_bytes,
    optional_str,
    require_dict,
    require_float,
    require_list,
)

_T = TypeVar("_T")


class CovenantsRequest(TypedDict, total=True):
    """Body of /covenants/evaluate and /covenants/history."""

    covenants: list[CovenantDefinition]
    readings: list[CovenantReading]


class ProvisioningRequest(TypedDict, total=True):
    """Body of /provisioning/summary; policies keep request order and are validated."""

    loans: list[LoanLevelRow]
    policies: dict[str, RuleSet]


class TrendRequest(TypedDict, total=True):
    actuals: list[TrendPoint]
    projections: list[TrendPoint]
    threshold: float
    granularity: PeriodGranularity


class ScenarioRequest(TypedDict, total=True):
    control: float


def _parse(body: bytes, build: Callable[[JSONObject], _T]) -> _T:
    try:
        raw = load_json_bytes(body)
    except InvalidJsonError as exc:
        raise AppError(ErrorCode.INVALID_JSON, str(exc)) from exc
    try:
        if not isinstance(raw, dict):
            raise JSONTypeError("Request body must be a JSON object")
        return build(raw)
    except (JSONTypeError, ValidationError) as exc:
        raise AppError(ErrorCode.INVALID_INPUT, str(exc)) from exc


def _build_covenants(data: JSONObject) -> CovenantsRequest:
    return CovenantsRequest(
        covenants=decode_list(require_list(data, "covenants"), decode_covenant_definition),
        readings=decode_list(require_list(data, "readings"), decode_covenant_reading),
    )


def _build_provisioning(data: JSONObject) -> ProvisioningRequest:
    raw_policies = require_dict(data, "policies")
    if not raw_policies:
        raise JSONTypeError("Field 'policies' must name at least one policy")
    policies: dict[str, RuleSet] = {}
    for name, raw_rules in raw_policies.items():
        policies[name] = RuleSet.from_rules(decode_list(raw_rules, decode_provisioning_rule))
    return ProvisioningRequest(
        loans=decode_list(require_list(data, "loans"), decode_loan),
        policies=policies,
    )


def _granularity(data: JSONObject) -> PeriodGranularity:
    value = optional_str(data, "granularity")
    if value is None or value == "month":
        return "month"
    if value == "day":
        return "day"
    if value == "year":
        return "year"
    raise JSONTypeError(f"Invalid granularity: {value}")


def _build_trend(data: JSONObject) -> TrendRequest:
    actuals = decode_list(require_list(data, "actuals"), decode_trend_point)
    projections = decode_list(require_list(data, "projections"), decode_trend_point)
    validate_ascending(actuals, "actuals")
    validate_ascending(projections, "projections")
    return TrendRequest(
        actuals=actuals,
        projections=projections,
        threshold=require_float(data, "threshold"),
        granularity=_granularity(data),
    )


def _build_alerts(data: JSONObject) -> list[EarlyWarningAlert]:
    return decode_list(require_list(data, "alerts"), decode_alert)


def parse_covenants_request(body: bytes) -> CovenantsRequest:
    """Expects: {"covenants": [...], "readings": [...]}"""
    return _parse(body, _build_covenants)


def parse_provisioning_request(body: bytes) -> ProvisioningRequest:
    """Expects: {"loans": [...], "policies": {"<name>": [rules...], ...}}"""
    return _parse(body, _build_provisioning)


def parse_trend_request(body: bytes) -> TrendRequest:
    """Expects: {"actuals": [...], "projections": [...], "threshold": n, "granularity"?: str}"""
    return _parse(body, _build_trend)


def parse_scenario_request(body: bytes) -> ScenarioRequest:
    """Expects: {"control": n}"""
    return _parse(body, lambda data: ScenarioRequest(control=require_float(data, "control")))


def parse_alerts_request(body: bytes) -> list[EarlyWarningAlert]:
    """Expects: {"alerts": [...]}"""
    return _parse(body, _build_alerts)


__all__ = [
    "CovenantsRequest",
    "ProvisioningRequest",
    "ScenarioRequest",
    "TrendRequest",
    "parse_alerts_request",
    "parse_covenants_request",
    "parse_provisioning_request",
    "parse_scenario_request",
    "parse_trend_request",
]
