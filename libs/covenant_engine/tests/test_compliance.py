"""Tests for covenant_engine.compliance module."""

from __future__ import annotations

import pytest

from covenant_engine.compliance import (
    breached_covenants,
    classify_trend,
    evaluate_covenant,
    evaluate_covenants,
    is_good_trend,
    satisfies,
)
from covenant_engine.models import (
    CovenantDefinition,
    CovenantReading,
    ReadingStatus,
    ThresholdOperator,
)
from covenant_engine.readings import build_reading_index
from covenant_engine.validation import ValidationError


def _covenant(
    cov_id: str, metric: str, operator: ThresholdOperator, threshold: float
) -> CovenantDefinition:
    return CovenantDefinition(
        id=cov_id,
        metric=metric,
        operator=operator,
        threshold=threshold,
        format="percent",
        frequency="quarterly",
    )


def _reading(
    cov_id: str, date: str, value: float, status: ReadingStatus = "compliant"
) -> CovenantReading:
    return CovenantReading(covenant_id=cov_id, date=date, value=value, status=status)


class TestSatisfies:
    def test_gte(self) -> None:
        assert satisfies(">=", 15.0, 15.0) is True
        assert satisfies(">=", 14.9, 15.0) is False

    def test_gt(self) -> None:
        assert satisfies(">", 15.0, 15.0) is False
        assert satisfies(">", 15.1, 15.0) is True

    def test_lte(self) -> None:
        assert satisfies("<=", 5.0, 5.0) is True
        assert satisfies("<=", 5.1, 5.0) is False

    def test_lt(self) -> None:
        assert satisfies("<", 5.0, 5.0) is False
        assert satisfies("<", 4.9, 5.0) is True


class TestClassifyTrend:
    def test_missing_previous_is_stable(self) -> None:
        assert classify_trend(_reading("c1", "2024-06-30", 1.0), None) == "stable"

    def test_missing_latest_is_stable(self) -> None:
        assert classify_trend(None, None) == "stable"

    def test_up(self) -> None:
        latest = _reading("c1", "2024-06-30", 2.0)
        previous = _reading("c1", "2024-03-31", 1.0)
        assert classify_trend(latest, previous) == "up"

    def test_down(self) -> None:
        latest = _reading("c1", "2024-06-30", 1.0)
        previous = _reading("c1", "2024-03-31", 2.0)
        assert classify_trend(latest, previous) == "down"

    def test_equal_is_stable(self) -> None:
        latest = _reading("c1", "2024-06-30", 1.0)
        previous = _reading("c1", "2024-03-31", 1.0)
        assert classify_trend(latest, previous) == "stable"


class TestIsGoodTrend:
    def test_minimum_covenant_rising(self) -> None:
        assert is_good_trend(">=", "up") is True
        assert is_good_trend(">", "down") is False

    def test_maximum_covenant_falling(self) -> None:
        assert is_good_trend("<=", "down") is True
        assert is_good_trend("<", "up") is False

    def test_stable_never_good(self) -> None:
        assert is_good_trend(">=", "stable") is False
        assert is_good_trend("<=", "stable") is False


class TestEvaluateCovenant:
    def test_no_readings_is_no_data(self) -> None:
        result = evaluate_covenant(_covenant("c1", "CRAR", ">=", 15.0), build_reading_index([]))
        assert result["status"] is None
        assert result["latest_date"] is None
        assert result["latest_value"] is None
        assert result["previous_value"] is None
        assert result["trend"] == "stable"
        assert result["good_trend"] is False
        assert result["headroom"] is None

    def test_breached_minimum_covenant(self) -> None:
        readings = [
            _reading("c1", "2024-06-30", 15.2),
            _reading("c1", "2024-09-30", 14.7, "breached"),
        ]
        result = evaluate_covenant(
            _covenant("c1", "CRAR", ">=", 15.0), build_reading_index(readings)
        )
        assert result["status"] == "breached"
        assert result["latest_date"] == "2024-09-30"
        assert result["latest_value"] == 14.7
        assert result["previous_value"] == 15.2
        assert result["trend"] == "down"
        assert result["good_trend"] is False
        headroom = result["headroom"]
        assert headroom is not None
        assert headroom["value"] == pytest.approx(-0.3)
        assert headroom["label"] == "-0.3"

    def test_status_taken_from_reading(self) -> None:
        # Upstream status is surfaced even when it disagrees with the threshold.
        readings = [_reading("c1", "2024-09-30", 4.0, "watch")]
        result = evaluate_covenant(
            _covenant("c1", "PAR 30", "<=", 5.0), build_reading_index(readings)
        )
        assert result["status"] == "watch"


class TestEvaluateCovenants:
    def test_order_follows_covenants(self) -> None:
        covenants = [
            _covenant("c2", "PAR 30", "<=", 5.0),
            _covenant("c1", "CRAR", ">=", 15.0),
            _covenant("c3", "OSS", ">=", 110.0),
        ]
        readings = [
            _reading("c1", "2024-09-30", 16.0),
            _reading("c2", "2024-09-30", 6.0, "breached"),
        ]
        results = evaluate_covenants(covenants, readings)
        assert [r["covenant_id"] for r in results] == ["c2", "c1", "c3"]
        assert results[2]["status"] is None

    def test_empty_covenants(self) -> None:
        assert evaluate_covenants([], [_reading("c1", "2024-09-30", 1.0)]) == []

    def test_invalid_date_rejected(self) -> None:
        with pytest.raises(ValidationError, match="ISO date"):
            evaluate_covenants(
                [_covenant("c1", "CRAR", ">=", 15.0)],
                [_reading("c1", "30/09/2024", 1.0)],
            )


class TestBreachedCovenants:
    def test_filters_breached_in_order(self) -> None:
        covenants = [
            _covenant("c1", "CRAR", ">=", 15.0),
            _covenant("c2", "PAR 30", "<=", 5.0),
            _covenant("c3", "OSS", ">=", 110.0),
        ]
        readings = [
            _reading("c1", "2024-09-30", 14.0, "breached"),
            _reading("c2", "2024-09-30", 4.0, "compliant"),
            _reading("c3", "2024-09-30", 100.0, "breached"),
        ]
        breached = breached_covenants(evaluate_covenants(covenants, readings))
        assert [e["covenant_id"] for e in breached] == ["c1", "c3"]
