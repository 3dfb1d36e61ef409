"""Linear what-if projection driven by one control input.

The default baseline models collection efficiency (control) driving PAR 30
(metric A, a maximum covenant) and CRAR (metric B, a minimum covenant).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Final, TypedDict

from .compliance import satisfies
from .models import ScenarioProjection, ScenarioStatus, ThresholdOperator


class ScenarioBaseline(TypedDict, total=True):
    """Fixed constants of the projection."""

    baseline_control: float
    baseline_a: float
    coefficient_a: float
    operator_a: ThresholdOperator
    threshold_a: float
    baseline_b: float
    coefficient_b: float
    operator_b: ThresholdOperator
    threshold_b: float
    precision: int  # decimal places kept before thresholds are applied


DEFAULT_SCENARIO_BASELINE: Final[ScenarioBaseline] = ScenarioBaseline(
    baseline_control=98.2,
    baseline_a=5.2,
    coefficient_a=2.0,
    operator_a="<=",
    threshold_a=5.0,
    baseline_b=14.7,
    coefficient_b=0.5,
    operator_b=">=",
    threshold_b=15.0,
    precision=1,
)


def _round_half_up(value: float, precision: int) -> float:
    """Round the exact binary value of value, ties away from zero."""
    step = Decimal(1).scaleb(-precision)
    return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def _status(operator: ThresholdOperator, value: float, threshold: float) -> ScenarioStatus:
    return "compliant" if satisfies(operator, value, threshold) else "breached"


def project_scenario(
    control: float, baseline: ScenarioBaseline = DEFAULT_SCENARIO_BASELINE
) -> ScenarioProjection:
    """
    Project both metrics for a control value. Pure function.

    delta = control - baseline_control
    A = max(0, baseline_a - delta * coefficient_a)
    B = baseline_b + delta * coefficient_b

    Both projections are rounded half-up to ``precision`` decimals and the rounded
    values are the ones compared with their thresholds, so a value displayed
    as 15.0 is never reported as breaching ">= 15".
    """
    precision = baseline["precision"]
    delta = control - baseline["baseline_control"]
    raw_a = max(0.0, baseline["baseline_a"] - delta * baseline["coefficient_a"])
    raw_b = baseline["baseline_b"] + delta * baseline["coefficient_b"]
    projected_a = _round_half_up(raw_a, precision)
    projected_b = _round_half_up(raw_b, precision)
    return ScenarioProjection(
        projected_a=projected_a,
        projected_b=projected_b,
        status_a=_status(baseline["operator_a"], projected_a, baseline["threshold_a"]),
        status_b=_status(baseline["operator_b"], projected_b, baseline["threshold_b"]),
    )


__all__ = ["DEFAULT_SCENARIO_BASELINE", "ScenarioBaseline", "project_scenario"]
