from __future__ import annotations

from .alerts import alert_direction, order_alerts
from .compliance import (
    breached_covenants,
    classify_trend,
    evaluate_covenant,
    evaluate_covenants,
    is_good_trend,
    satisfies,
)
from .decode import (
    decode_alert,
    decode_covenant_definition,
    decode_covenant_reading,
    decode_list,
    decode_loan,
    decode_provisioning_rule,
    decode_trend_point,
)
from .encode import (
    content_key,
    encode_alert,
    encode_bucket_summary,
    encode_covenant_evaluation,
    encode_history_row,
    encode_merged_trend,
    encode_policy_summaries,
    encode_portfolio_summary,
    encode_scenario_projection,
)
from .headroom import compute_headroom, format_headroom
from .models import (
    BUCKET_SEVERITY,
    UNCLASSIFIED,
    BucketSummary,
    CovenantDefinition,
    CovenantEvaluation,
    CovenantReading,
    EarlyWarningAlert,
    Headroom,
    HistoryRow,
    LoanLevelRow,
    MergedTrend,
    MergedTrendPoint,
    PortfolioSummary,
    ProvisioningRule,
    ScenarioProjection,
    TrendPoint,
)
from .provisioning import (
    RuleSet,
    classify_loan,
    provision_amount,
    summarize_policies,
    summarize_portfolio,
)
from .readings import ReadingIndex, build_reading_history, build_reading_index
from .scenario import DEFAULT_SCENARIO_BASELINE, ScenarioBaseline, project_scenario
from .timeseries import merge_trend, period_key
from .validation import ValidationError

__all__ = [
    "BUCKET_SEVERITY",
    "DEFAULT_SCENARIO_BASELINE",
    "UNCLASSIFIED",
    "BucketSummary",
    "CovenantDefinition",
    "CovenantEvaluation",
    "CovenantReading",
    "EarlyWarningAlert",
    "Headroom",
    "HistoryRow",
    "LoanLevelRow",
    "MergedTrend",
    "MergedTrendPoint",
    "PortfolioSummary",
    "ProvisioningRule",
    "ReadingIndex",
    "RuleSet",
    "ScenarioBaseline",
    "ScenarioProjection",
    "TrendPoint",
    "ValidationError",
    "alert_direction",
    "breached_covenants",
    "build_reading_history",
    "build_reading_index",
    "classify_loan",
    "classify_trend",
    "compute_headroom",
    "content_key",
    "decode_alert",
    "decode_covenant_definition",
    "decode_covenant_reading",
    "decode_list",
    "decode_loan",
    "decode_provisioning_rule",
    "decode_trend_point",
    "encode_alert",
    "encode_bucket_summary",
    "encode_covenant_evaluation",
    "encode_history_row",
    "encode_merged_trend",
    "encode_policy_summaries",
    "encode_portfolio_summary",
    "encode_scenario_projection",
    "evaluate_covenant",
    "evaluate_covenants",
    "format_headroom",
    "is_good_trend",
    "merge_trend",
    "order_alerts",
    "period_key",
    "project_scenario",
    "provision_amount",
    "satisfies",
    "summarize_policies",
    "summarize_portfolio",
]
