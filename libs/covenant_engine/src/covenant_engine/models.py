from __future__ import annotations

from typing import Final, Literal, NotRequired, TypedDict

ThresholdOperator = Literal[">=", ">", "<=", "<"]
ValueFormat = Literal["percent", "ratio", "number"]
ReportingFrequency = Literal["monthly", "quarterly", "annually"]
ReadingStatus = Literal["compliant", "watch", "breached"]
TrendDirection = Literal["up", "down", "stable"]
Bucket = Literal["normal", "watch", "substandard", "doubtful", "loss"]
SummaryBucket = Literal["normal", "watch", "substandard", "doubtful", "loss", "unclassified"]
AlertSeverity = Literal["info", "warning", "critical"]
AlertTrend = Literal["improving", "stable", "deteriorating"]
ScenarioStatus = Literal["compliant", "breached"]

# Fixed severity ordering, least to most severe.
BUCKET_SEVERITY: Final[tuple[Bucket, ...]] = ("normal", "watch", "substandard", "doubtful", "loss")
UNCLASSIFIED: Final = "unclassified"


class CovenantDefinition(TypedDict, total=True):
    """Covenant on one monitored metric. Immutable by convention."""

    id: str
    metric: str  # e.g. "CRAR", "PAR 30"
    operator: ThresholdOperator
    threshold: float
    format: ValueFormat
    frequency: ReportingFrequency  # label only


class CovenantReading(TypedDict, total=True):
    """One reported value of a covenant metric."""

    covenant_id: str
    date: str  # ISO 8601 YYYY-MM-DD
    value: float
    status: ReadingStatus  # computed upstream, surfaced as-is


class ProvisioningRule(TypedDict, total=True):
    """Provisioning bucket over an inclusive days-past-due range."""

    bucket: Bucket
    dpd_min: int
    dpd_max: int
    provision_percent: float


class LoanLevelRow(TypedDict, total=True):
    """Loan snapshot for one reporting period."""

    loan_id: str
    current_balance: float
    dpd_as_of_reporting_date: int


class EarlyWarningAlert(TypedDict, total=True):
    """Forward-looking alert produced upstream."""

    id: str
    metric: str
    severity: AlertSeverity
    trend: AlertTrend
    message: str
    predicted_breach_date: NotRequired[str]


class TrendPoint(TypedDict, total=True):
    date: str
    value: float


class Headroom(TypedDict, total=True):
    """Signed margin to the threshold; positive means compliant with room."""

    value: float
    label: str


class CovenantEvaluation(TypedDict, total=True):
    """Evaluation of one covenant against its reading series."""

    covenant_id: str
    metric: str
    status: ReadingStatus | None  # None means no data
    latest_date: str | None
    latest_value: float | None
    previous_value: float | None
    trend: TrendDirection
    good_trend: bool
    headroom: Headroom | None


class BucketSummary(TypedDict, total=True):
    """Aggregate of the loans classified into one bucket. Never cached."""

    bucket: SummaryBucket
    loan_count: int
    total_balance: float
    provision_percent: float
    provision_amount: int
    portfolio_percent: float


class PortfolioSummary(TypedDict, total=True):
    """Bucket summaries in rule-set order, unclassified last, plus totals."""

    buckets: list[BucketSummary]
    total_loan_count: int
    total_balance: float
    total_provision: int


class MergedTrendPoint(TypedDict, total=True):
    period: str
    actual: float | None
    projected: float | None


class MergedTrend(TypedDict, total=True):
    points: list[MergedTrendPoint]
    threshold: float


class ScenarioProjection(TypedDict, total=True):
    projected_a: float
    projected_b: float
    status_a: ScenarioStatus
    status_b: ScenarioStatus


class HistoryRow(TypedDict, total=True):
    """Value of every covenant as of one reading date."""

    date: str
    period: str
    values: dict[str, float | None]  # covenant id -> value as of date


__all__ = [
    "BUCKET_SEVERITY",
    "UNCLASSIFIED",
    "AlertSeverity",
    "AlertTrend",
    "Bucket",
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
    "ReadingStatus",
    "ReportingFrequency",
    "ScenarioProjection",
    "ScenarioStatus",
    "SummaryBucket",
    "ThresholdOperator",
    "TrendDirection",
    "TrendPoint",
    "ValueFormat",
]
