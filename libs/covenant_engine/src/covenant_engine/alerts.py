from __future__ import annotations

from collections.abc import Sequence

from .models import AlertSeverity, AlertTrend, EarlyWarningAlert, TrendDirection

_SEVERITY_RANK: dict[AlertSeverity, int] = {"critical": 0, "warning": 1, "info": 2}


def alert_direction(trend: AlertTrend) -> TrendDirection:
    """Arrow direction shown for an alert trend."""
    if trend == "improving":
        return "up"
    if trend == "deteriorating":
        return "down"
    return "stable"


def order_alerts(alerts: Sequence[EarlyWarningAlert]) -> list[EarlyWarningAlert]:
    """Critical first, then warning, then info; input order kept within a severity."""
    return sorted(alerts, key=lambda a: _SEVERITY_RANK[a["severity"]])


__all__ = ["alert_direction", "order_alerts"]
