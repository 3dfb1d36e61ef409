from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from platform_core.logging import get_logger

from .models import MergedTrend, MergedTrendPoint, TrendPoint
from .validation import validate_ascending

PeriodGranularity = Literal["day", "month", "year"]

_PERIOD_WIDTH: dict[PeriodGranularity, int] = {"day": 10, "month": 7, "year": 4}

_logger = get_logger(__name__)


def period_key(iso_date: str, granularity: PeriodGranularity = "month") -> str:
    """Truncate YYYY-MM-DD to YYYY-MM-DD, YYYY-MM or YYYY."""
    return iso_date[: _PERIOD_WIDTH[granularity]]


def merge_trend(
    actuals: Sequence[TrendPoint],
    projections: Sequence[TrendPoint],
    threshold: float,
    granularity: PeriodGranularity = "month",
) -> MergedTrend:
    """
    Stitch actuals and projections into one chart-ready sequence.

    Actual points carry only ``actual`` except the last one, which repeats its
    value in ``projected`` so the projected line starts on the last observed
    point. Projection points carry only ``projected``. Points are never
    merged by period; order is all actuals, then all projections. Without
    actuals there is no anchor and only projection points are returned.

    Raises:
        ValidationError: a series is not date-ascending or has a malformed date.
    """
    validate_ascending(actuals, "actuals")
    validate_ascending(projections, "projections")

    points: list[MergedTrendPoint] = [
        MergedTrendPoint(
            period=period_key(p["date"], granularity), actual=p["value"], projected=None
        )
        for p in actuals
    ]
    if points:
        points[-1]["projected"] = points[-1]["actual"]
    points.extend(
        MergedTrendPoint(
            period=period_key(p["date"], granularity), actual=None, projected=p["value"]
        )
        for p in projections
    )

    _logger.debug("trend_merged", extra={"point_count": len(points)})
    return MergedTrend(points=points, threshold=threshold)


__all__ = ["PeriodGranularity", "merge_trend", "period_key"]
