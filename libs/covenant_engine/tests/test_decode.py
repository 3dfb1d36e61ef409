"""Tests for covenant_engine.decode module."""

from __future__ import annotations

import pytest
from platform_core.json_utils import JSONObject, JSONTypeError

from covenant_engine.decode import (
    _require_bucket,
    _require_operator,
    decode_alert,
    decode_covenant_definition,
    decode_covenant_reading,
    decode_list,
    decode_loan,
    decode_provisioning_rule,
    decode_trend_point,
)
from covenant_engine.validation import ValidationError


class TestRequireOperator:
    def test_ascii_operators(self) -> None:
        for op in (">=", ">", "<=", "<"):
            data: JSONObject = {"operator": op}
            assert _require_operator(data, "operator") == op

    def test_unicode_aliases(self) -> None:
        assert _require_operator({"operator": "≥"}, "operator") == ">="
        assert _require_operator({"operator": "≤"}, "operator") == "<="

    def test_invalid(self) -> None:
        with pytest.raises(JSONTypeError, match="Invalid ThresholdOperator"):
            _require_operator({"operator": "=="}, "operator")


def test_require_bucket_invalid() -> None:
    with pytest.raises(JSONTypeError, match="Invalid Bucket"):
        _require_bucket({"bucket": "written_off"}, "bucket")


class TestDecodeCovenantDefinition:
    def test_valid(self) -> None:
        data: JSONObject = {
            "id": "c1",
            "metric": "CRAR",
            "operator": "≥",
            "threshold": 15,
            "format": "percent",
            "frequency": "quarterly",
        }
        result = decode_covenant_definition(data)
        assert result == {
            "id": "c1",
            "metric": "CRAR",
            "operator": ">=",
            "threshold": 15.0,
            "format": "percent",
            "frequency": "quarterly",
        }
        assert type(result["threshold"]) is float

    def test_missing_field(self) -> None:
        data: JSONObject = {"id": "c1", "metric": "CRAR", "operator": ">="}
        with pytest.raises(JSONTypeError, match="Missing required field 'threshold'"):
            decode_covenant_definition(data)

    def test_invalid_frequency(self) -> None:
        data: JSONObject = {
            "id": "c1",
            "metric": "CRAR",
            "operator": ">=",
            "threshold": 15,
            "format": "percent",
            "frequency": "weekly",
        }
        with pytest.raises(JSONTypeError, match="Invalid ReportingFrequency"):
            decode_covenant_definition(data)


class TestDecodeCovenantReading:
    def test_valid(self) -> None:
        data: JSONObject = {
            "covenant_id": "c1",
            "date": "2024-09-30",
            "value": 14.7,
            "status": "breached",
        }
        result = decode_covenant_reading(data)
        assert result["status"] == "breached"
        assert result["value"] == 14.7

    def test_bad_date(self) -> None:
        data: JSONObject = {
            "covenant_id": "c1",
            "date": "Sep 2024",
            "value": 14.7,
            "status": "breached",
        }
        with pytest.raises(ValidationError, match="ISO date"):
            decode_covenant_reading(data)

    def test_bool_value_rejected(self) -> None:
        data: JSONObject = {
            "covenant_id": "c1",
            "date": "2024-09-30",
            "value": True,
            "status": "compliant",
        }
        with pytest.raises(JSONTypeError, match="finite number"):
            decode_covenant_reading(data)


class TestDecodeProvisioningRule:
    def test_valid(self) -> None:
        data: JSONObject = {
            "bucket": "loss",
            "dpd_min": 91,
            "dpd_max": 9999,
            "provision_percent": 100,
        }
        assert decode_provisioning_rule(data) == {
            "bucket": "loss",
            "dpd_min": 91,
            "dpd_max": 9999,
            "provision_percent": 100.0,
        }

    def test_float_bound_rejected(self) -> None:
        data: JSONObject = {
            "bucket": "loss",
            "dpd_min": 91.5,
            "dpd_max": 9999,
            "provision_percent": 100,
        }
        with pytest.raises(JSONTypeError, match="must be an integer"):
            decode_provisioning_rule(data)


class TestDecodeLoan:
    def test_valid(self) -> None:
        data: JSONObject = {
            "loan_id": "L1",
            "current_balance": 100000,
            "dpd_as_of_reporting_date": 0,
        }
        result = decode_loan(data)
        assert result["current_balance"] == 100000.0

    def test_negative_dpd(self) -> None:
        data: JSONObject = {
            "loan_id": "L1",
            "current_balance": 1,
            "dpd_as_of_reporting_date": -1,
        }
        with pytest.raises(ValidationError, match="negative days past due"):
            decode_loan(data)


class TestDecodeAlert:
    def test_without_predicted_date(self) -> None:
        data: JSONObject = {
            "id": "a1",
            "metric": "PAR 30",
            "severity": "warning",
            "trend": "deteriorating",
            "message": "PAR 30 rising",
        }
        result = decode_alert(data)
        assert "predicted_breach_date" not in result

    def test_with_predicted_date(self) -> None:
        data: JSONObject = {
            "id": "a1",
            "metric": "PAR 30",
            "severity": "critical",
            "trend": "deteriorating",
            "message": "PAR 30 rising",
            "predicted_breach_date": "2025-03-31",
        }
        assert decode_alert(data)["predicted_breach_date"] == "2025-03-31"

    def test_null_predicted_date(self) -> None:
        data: JSONObject = {
            "id": "a1",
            "metric": "PAR 30",
            "severity": "info",
            "trend": "stable",
            "message": "steady",
            "predicted_breach_date": None,
        }
        assert "predicted_breach_date" not in decode_alert(data)

    def test_invalid_severity(self) -> None:
        data: JSONObject = {
            "id": "a1",
            "metric": "PAR 30",
            "severity": "urgent",
            "trend": "stable",
            "message": "steady",
        }
        with pytest.raises(JSONTypeError, match="Invalid AlertSeverity"):
            decode_alert(data)


class TestDecodeList:
    def test_decodes_each_item(self) -> None:
        raw: list[JSONObject] = [
            {"date": "2024-08-31", "value": 4.6},
            {"date": "2024-09-30", "value": 5},
        ]
        points = decode_list(list(raw), decode_trend_point)
        assert points == [
            {"date": "2024-08-31", "value": 4.6},
            {"date": "2024-09-30", "value": 5.0},
        ]

    def test_not_a_list(self) -> None:
        with pytest.raises(JSONTypeError, match="Expected JSON array"):
            decode_list({"date": "2024-09-30"}, decode_trend_point)

    def test_item_not_object(self) -> None:
        with pytest.raises(JSONTypeError, match="Expected JSON object"):
            decode_list(["2024-09-30"], decode_trend_point)
