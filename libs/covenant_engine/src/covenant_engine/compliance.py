from __future__ import annotations

from collections.abc import Sequence

from platform_core.logging import get_logger

from .headroom import compute_headroom, is_lower_bound
from .models import (
    CovenantDefinition,
    CovenantEvaluation,
    CovenantReading,
    ThresholdOperator,
    TrendDirection,
)
from .readings import ReadingIndex, build_reading_index
from .validation import validate_readings

_logger = get_logger(__name__)


def satisfies(operator: ThresholdOperator, value: float, threshold: float) -> bool:
    """Compare value with threshold using the covenant operator."""
    if operator == ">=":
        return value >= threshold
    if operator == ">":
        return value > threshold
    if operator == "<=":
        return value <= threshold
    # operator == "<"
    return value < threshold


def classify_trend(
    latest: CovenantReading | None, previous: CovenantReading | None
) -> TrendDirection:
    """up/down by comparing latest with previous; stable when equal or either is missing."""
    if latest is None or previous is None:
        return "stable"
    if latest["value"] > previous["value"]:
        return "up"
    if latest["value"] < previous["value"]:
        return "down"
    return "stable"


def is_good_trend(operator: ThresholdOperator, trend: TrendDirection) -> bool:
    """Rising is favourable for minimum covenants, falling for maximum covenants."""
    if is_lower_bound(operator):
        return trend == "up"
    return trend == "down"


def evaluate_covenant(covenant: CovenantDefinition, index: ReadingIndex) -> CovenantEvaluation:
    """
    Evaluate one covenant against its indexed readings.

    The status is the latest reading's upstream status, or None when the
    covenant has no readings at all (no data, not an error).
    """
    latest = index.latest.get(covenant["id"])
    previous = index.previous.get(covenant["id"])
    trend = classify_trend(latest, previous)
    latest_value = latest["value"] if latest is not None else None

    return CovenantEvaluation(
        covenant_id=covenant["id"],
        metric=covenant["metric"],
        status=latest["status"] if latest is not None else None,
        latest_date=latest["date"] if latest is not None else None,
        latest_value=latest_value,
        previous_value=previous["value"] if previous is not None else None,
        trend=trend,
        good_trend=is_good_trend(covenant["operator"], trend),
        headroom=compute_headroom(covenant, latest_value),
    )


def evaluate_covenants(
    covenants: Sequence[CovenantDefinition],
    readings: Sequence[CovenantReading],
) -> list[CovenantEvaluation]:
    """
    Evaluate every covenant from one reading series.

    Returns results in the same order as covenants.

    Raises:
        ValidationError: A reading date is not ISO YYYY-MM-DD.
    """
    validate_readings(readings)
    index = build_reading_index(readings)
    results = [evaluate_covenant(covenant, index) for covenant in covenants]
    _logger.debug(
        "covenants_evaluated",
        extra={
            "covenant_count": len(results),
            "reading_count": len(readings),
            "breached_count": len(breached_covenants(results)),
        },
    )
    return results


def breached_covenants(evaluations: Sequence[CovenantEvaluation]) -> list[CovenantEvaluation]:
    """Evaluations whose latest reading is breached, in input order."""
    return [e for e in evaluations if e["status"] == "breached"]


__all__ = [
    "breached_covenants",
    "classify_trend",
    "evaluate_covenant",
    "evaluate_covenants",
    "is_good_trend",
    "satisfies",
]
