"""Tests for covenant_engine.timeseries module."""

from __future__ import annotations

import pytest

from covenant_engine.models import TrendPoint
from covenant_engine.timeseries import merge_trend, period_key
from covenant_engine.validation import ValidationError


def _point(date: str, value: float) -> TrendPoint:
    return TrendPoint(date=date, value=value)


class TestPeriodKey:
    def test_default_month(self) -> None:
        assert period_key("2024-09-30") == "2024-09"

    def test_day_and_year(self) -> None:
        assert period_key("2024-09-30", "day") == "2024-09-30"
        assert period_key("2024-09-30", "year") == "2024"


class TestMergeTrend:
    def test_last_actual_anchors_projection(self) -> None:
        actuals = [_point("2024-07-31", 4.1), _point("2024-08-31", 4.6)]
        projections = [_point("2024-09-30", 5.0), _point("2024-10-31", 5.4)]
        merged = merge_trend(actuals, projections, 5.0)
        assert merged["threshold"] == 5.0
        assert merged["points"] == [
            {"period": "2024-07", "actual": 4.1, "projected": None},
            {"period": "2024-08", "actual": 4.6, "projected": 4.6},
            {"period": "2024-09", "actual": None, "projected": 5.0},
            {"period": "2024-10", "actual": None, "projected": 5.4},
        ]

    def test_no_actuals_projections_only(self) -> None:
        merged = merge_trend([], [_point("2024-09-30", 5.0)], 5.0)
        assert merged["points"] == [{"period": "2024-09", "actual": None, "projected": 5.0}]

    def test_no_projections_last_actual_still_anchored(self) -> None:
        merged = merge_trend([_point("2024-09-30", 5.0)], [], 5.0)
        assert merged["points"] == [{"period": "2024-09", "actual": 5.0, "projected": 5.0}]

    def test_same_period_not_merged(self) -> None:
        merged = merge_trend([_point("2024-09-15", 4.0)], [_point("2024-09-30", 5.0)], 5.0)
        assert [p["period"] for p in merged["points"]] == ["2024-09", "2024-09"]

    def test_empty(self) -> None:
        assert merge_trend([], [], 1.0) == {"points": [], "threshold": 1.0}

    def test_year_granularity(self) -> None:
        merged = merge_trend([_point("2023-12-31", 1.0)], [_point("2024-12-31", 2.0)], 1.5, "year")
        assert [p["period"] for p in merged["points"]] == ["2023", "2024"]

    def test_rejects_descending(self) -> None:
        with pytest.raises(ValidationError, match="actuals must be date-ascending"):
            merge_trend([_point("2024-09-30", 1.0), _point("2024-08-31", 2.0)], [], 1.0)

    def test_rejects_malformed_date(self) -> None:
        with pytest.raises(ValidationError, match="projections date"):
            merge_trend([], [_point("2024-9-30", 1.0)], 1.0)
