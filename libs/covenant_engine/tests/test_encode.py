"""Tests for covenant_engine.encode module."""

from __future__ import annotations

from platform_core.json_utils import dump_json_str, load_json_str

from covenant_engine.encode import (
    content_key,
    encode_alert,
    encode_covenant_evaluation,
    encode_history_row,
    encode_merged_trend,
    encode_policy_summaries,
    encode_portfolio_summary,
)
from covenant_engine.models import (
    BucketSummary,
    CovenantEvaluation,
    EarlyWarningAlert,
    Headroom,
    HistoryRow,
    MergedTrend,
    MergedTrendPoint,
    PortfolioSummary,
)


def _summary() -> PortfolioSummary:
    return PortfolioSummary(
        buckets=[
            BucketSummary(
                bucket="loss",
                loan_count=1,
                total_balance=50000.0,
                provision_percent=100.0,
                provision_amount=50000,
                portfolio_percent=100.0,
            )
        ],
        total_loan_count=1,
        total_balance=50000.0,
        total_provision=50000,
    )


class TestEncodeCovenantEvaluation:
    def test_with_headroom(self) -> None:
        evaluation = CovenantEvaluation(
            covenant_id="c1",
            metric="CRAR",
            status="breached",
            latest_date="2024-09-30",
            latest_value=14.7,
            previous_value=15.2,
            trend="down",
            good_trend=False,
            headroom=Headroom(value=-0.3, label="-0.3"),
        )
        result = encode_covenant_evaluation(evaluation)
        assert result["status"] == "breached"
        assert result["headroom"] == {"value": -0.3, "label": "-0.3"}

    def test_no_data_is_null(self) -> None:
        evaluation = CovenantEvaluation(
            covenant_id="c1",
            metric="CRAR",
            status=None,
            latest_date=None,
            latest_value=None,
            previous_value=None,
            trend="stable",
            good_trend=False,
            headroom=None,
        )
        encoded = dump_json_str(encode_covenant_evaluation(evaluation))
        assert '"status":null' in encoded
        assert '"headroom":null' in encoded


def test_encode_portfolio_summary() -> None:
    result = encode_portfolio_summary(_summary())
    assert result["total_provision"] == 50000
    buckets = result["buckets"]
    assert isinstance(buckets, list)
    assert buckets[0] == {
        "bucket": "loss",
        "loan_count": 1,
        "total_balance": 50000.0,
        "provision_percent": 100.0,
        "provision_amount": 50000,
        "portfolio_percent": 100.0,
    }


def test_encode_policy_summaries_keeps_order() -> None:
    result = encode_policy_summaries({"nbfi": _summary(), "lender": _summary()})
    names = [entry["policy"] for entry in result if isinstance(entry, dict)]
    assert names == ["nbfi", "lender"]


def test_encode_merged_trend_nulls() -> None:
    trend = MergedTrend(
        points=[MergedTrendPoint(period="2024-09", actual=None, projected=5.0)],
        threshold=5.0,
    )
    encoded = dump_json_str(encode_merged_trend(trend))
    assert encoded == (
        '{"points":[{"period":"2024-09","actual":null,"projected":5.0}],"threshold":5.0}'
    )


def test_encode_history_row() -> None:
    row = HistoryRow(date="2024-09-30", period="2024-09", values={"crar": 14.7, "par30": None})
    assert encode_history_row(row) == {
        "date": "2024-09-30",
        "period": "2024-09",
        "values": {"crar": 14.7, "par30": None},
    }


class TestEncodeAlert:
    def test_adds_direction(self) -> None:
        alert = EarlyWarningAlert(
            id="a1",
            metric="PAR 30",
            severity="warning",
            trend="improving",
            message="PAR 30 easing",
        )
        result = encode_alert(alert)
        assert result["direction"] == "up"
        assert "predicted_breach_date" not in result

    def test_keeps_predicted_date(self) -> None:
        alert = EarlyWarningAlert(
            id="a1",
            metric="PAR 30",
            severity="critical",
            trend="deteriorating",
            message="PAR 30 rising",
            predicted_breach_date="2025-03-31",
        )
        result = encode_alert(alert)
        assert result["direction"] == "down"
        assert result["predicted_breach_date"] == "2025-03-31"


class TestContentKey:
    def test_key_order_independent(self) -> None:
        assert content_key({"a": 1, "b": [1, 2]}) == content_key({"b": [1, 2], "a": 1})

    def test_content_sensitive(self) -> None:
        assert content_key({"a": 1}) != content_key({"a": 2})

    def test_sha256_hex(self) -> None:
        key = content_key([])
        assert len(key) == 64
        assert key == "4f53cda18c2baa0c0354bb5f9a3ecbe5ed12ab4d8e11ba873c2f11161202b945"

    def test_encoded_summary_round_trips(self) -> None:
        encoded = encode_portfolio_summary(_summary())
        assert load_json_str(dump_json_str(encoded)) == encoded
