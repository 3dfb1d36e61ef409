from __future__ import annotations

import hashlib
from collections.abc import Mapping, Sequence

from platform_core.json_utils import JSONValue, dump_json_str

from .alerts import alert_direction
from .models import (
    BucketSummary,
    CovenantEvaluation,
    EarlyWarningAlert,
    Headroom,
    HistoryRow,
    MergedTrend,
    PortfolioSummary,
    ScenarioProjection,
)


def _encode_headroom(headroom: Headroom | None) -> JSONValue:
    if headroom is None:
        return None
    result: dict[str, JSONValue] = {"value": headroom["value"], "label": headroom["label"]}
    return result


def encode_covenant_evaluation(evaluation: CovenantEvaluation) -> dict[str, JSONValue]:
    """Encode CovenantEvaluation; a null status means no data."""
    result: dict[str, JSONValue] = {
        "covenant_id": evaluation["covenant_id"],
        "metric": evaluation["metric"],
        "status": evaluation["status"],
        "latest_date": evaluation["latest_date"],
        "latest_value": evaluation["latest_value"],
        "previous_value": evaluation["previous_value"],
        "trend": evaluation["trend"],
        "good_trend": evaluation["good_trend"],
        "headroom": _encode_headroom(evaluation["headroom"]),
    }
    return result


def encode_bucket_summary(bucket: BucketSummary) -> dict[str, JSONValue]:
    result: dict[str, JSONValue] = {
        "bucket": bucket["bucket"],
        "loan_count": bucket["loan_count"],
        "total_balance": bucket["total_balance"],
        "provision_percent": bucket["provision_percent"],
        "provision_amount": bucket["provision_amount"],
        "portfolio_percent": bucket["portfolio_percent"],
    }
    return result


def encode_portfolio_summary(summary: PortfolioSummary) -> dict[str, JSONValue]:
    buckets: list[JSONValue] = [encode_bucket_summary(b) for b in summary["buckets"]]
    result: dict[str, JSONValue] = {
        "buckets": buckets,
        "total_loan_count": summary["total_loan_count"],
        "total_balance": summary["total_balance"],
        "total_provision": summary["total_provision"],
    }
    return result


def encode_policy_summaries(summaries: Mapping[str, PortfolioSummary]) -> list[JSONValue]:
    """Encode named policy summaries as an ordered array of {policy, summary}."""
    result: list[JSONValue] = []
    for name, summary in summaries.items():
        entry: dict[str, JSONValue] = {"policy": name, "summary": encode_portfolio_summary(summary)}
        result.append(entry)
    return result


def encode_merged_trend(trend: MergedTrend) -> dict[str, JSONValue]:
    """Encode MergedTrend; missing actual/projected values stay null, never zero."""
    points: list[JSONValue] = []
    for point in trend["points"]:
        encoded: dict[str, JSONValue] = {
            "period": point["period"],
            "actual": point["actual"],
            "projected": point["projected"],
        }
        points.append(encoded)
    result: dict[str, JSONValue] = {"points": points, "threshold": trend["threshold"]}
    return result


def encode_scenario_projection(projection: ScenarioProjection) -> dict[str, JSONValue]:
    result: dict[str, JSONValue] = {
        "projected_a": projection["projected_a"],
        "projected_b": projection["projected_b"],
        "status_a": projection["status_a"],
        "status_b": projection["status_b"],
    }
    return result


def encode_history_row(row: HistoryRow) -> dict[str, JSONValue]:
    values: dict[str, JSONValue] = {metric: value for metric, value in row["values"].items()}
    result: dict[str, JSONValue] = {"date": row["date"], "period": row["period"], "values": values}
    return result


def encode_alert(alert: EarlyWarningAlert) -> dict[str, JSONValue]:
    """Encode an alert unchanged, plus the arrow ``direction`` of its trend."""
    result: dict[str, JSONValue] = {
        "id": alert["id"],
        "metric": alert["metric"],
        "severity": alert["severity"],
        "trend": alert["trend"],
        "direction": alert_direction(alert["trend"]),
        "message": alert["message"],
    }
    if "predicted_breach_date" in alert:
        result["predicted_breach_date"] = alert["predicted_breach_date"]
    return result


def content_key(value: Mapping[str, object] | Sequence[object]) -> str:
    """
    SHA-256 hex digest of the canonical JSON form of value.

    Equal content gives equal keys regardless of object identity or key
    order, so results can be cached by input content.
    """
    canonical = dump_json_str(value, compact=True, sort_keys=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


__all__ = [
    "content_key",
    "encode_alert",
    "encode_bucket_summary",
    "encode_covenant_evaluation",
    "encode_history_row",
    "encode_merged_trend",
    "encode_policy_summaries",
    "encode_portfolio_summary",
    "encode_scenario_projection",
]
