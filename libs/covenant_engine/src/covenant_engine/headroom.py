from __future__ import annotations

from .models import CovenantDefinition, Headroom, ThresholdOperator


def is_lower_bound(operator: ThresholdOperator) -> bool:
    """True for minimum-style covenants (>=, >), where higher values are safer."""
    return operator in (">=", ">")


def format_headroom(value: float) -> str:
    """Fixed one-decimal label with a leading "+" for non-negative values."""
    if value >= 0:
        return f"+{abs(value):.1f}"
    return f"{value:.1f}"


def compute_headroom(covenant: CovenantDefinition, actual: float | None) -> Headroom | None:
    """
    Signed distance between actual and threshold. Pure function.

    For >= and >: actual - threshold. For <= and <: threshold - actual.
    Positive means compliant with margin, negative is the breach magnitude.
    None when there is no actual value.
    """
    if actual is None:
        return None
    if is_lower_bound(covenant["operator"]):
        diff = actual - covenant["threshold"]
    else:
        diff = covenant["threshold"] - actual
    return Headroom(value=diff, label=format_headroom(diff))


__all__ = ["compute_headroom", "format_headroom", "is_lower_bound"]
