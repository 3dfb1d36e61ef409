from __future__ import annotations

import bisect
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from platform_core.logging import get_logger

from .models import (
    BUCKET_SEVERITY,
    UNCLASSIFIED,
    BucketSummary,
    LoanLevelRow,
    PortfolioSummary,
    ProvisioningRule,
    SummaryBucket,
)
from .validation import ValidationError, validate_loans

_logger = get_logger(__name__)


def classify_loan(
    loan: LoanLevelRow, rules: Sequence[ProvisioningRule]
) -> ProvisioningRule | None:
    """
    First rule, in list order, whose inclusive DPD range contains the loan.

    A linear scan: when ranges overlap, list order decides which rule wins.
    Returns None when no range contains the loan's days past due.
    """
    dpd = loan["dpd_as_of_reporting_date"]
    for rule in rules:
        if rule["dpd_min"] <= dpd <= rule["dpd_max"]:
            return rule
    return None


@dataclass(frozen=True)
class RuleSet:
    """
    Validated provisioning rule set.

    Rules keep their input order for reporting and are also held sorted by
    ``dpd_min`` so classification is a binary search. Construct with
    ``RuleSet.from_rules``.

    gaps: uncovered DPD ranges between 0 and the highest ``dpd_max``, as
    inclusive (low, high) pairs. Loans above the highest ``dpd_max`` are
    outside the rule set too; that upper bound is ``max_dpd``.
    """

    rules: tuple[ProvisioningRule, ...]
    gaps: tuple[tuple[int, int], ...]
    _sorted: tuple[ProvisioningRule, ...]
    _starts: tuple[int, ...]

    @classmethod
    def from_rules(cls, rules: Sequence[ProvisioningRule]) -> RuleSet:
        """
        Validate and index a rule list.

        Raises:
            ValidationError: negative bound, dpd_min > dpd_max, a bucket listed
                twice, or two ranges that overlap.
        """
        seen: set[str] = set()
        for rule in rules:
            if rule["dpd_min"] < 0:
                raise ValidationError(f"Rule {rule['bucket']} has negative dpd_min")
            if rule["dpd_min"] > rule["dpd_max"]:
                raise ValidationError(
                    f"Rule {rule['bucket']} has dpd_min {rule['dpd_min']} "
                    f"> dpd_max {rule['dpd_max']}"
                )
            if rule["provision_percent"] < 0:
                raise ValidationError(f"Rule {rule['bucket']} has negative provision_percent")
            if rule["bucket"] in seen:
                raise ValidationError(f"Bucket {rule['bucket']} appears more than once")
            seen.add(rule["bucket"])

        ordered = tuple(sorted(rules, key=lambda r: r["dpd_min"]))
        gaps: list[tuple[int, int]] = []
        expected = 0
        for rule in ordered:
            if rule["dpd_min"] < expected:
                raise ValidationError(
                    f"Rule {rule['bucket']} range {rule['dpd_min']}-{rule['dpd_max']} "
                    f"overlaps a preceding range ending at {expected - 1}"
                )
            if rule["dpd_min"] > expected:
                gaps.append((expected, rule["dpd_min"] - 1))
            expected = rule["dpd_max"] + 1

        if gaps:
            _logger.warning(
                "provisioning_rule_gaps",
                extra={
                    "rule_count": len(ordered),
                    "gap_count": len(gaps),
                    "gaps": [list(g) for g in gaps],
                },
            )

        return cls(
            rules=tuple(rules),
            gaps=tuple(gaps),
            _sorted=ordered,
            _starts=tuple(r["dpd_min"] for r in ordered),
        )

    @property
    def max_dpd(self) -> int | None:
        if not self._sorted:
            return None
        return self._sorted[-1]["dpd_max"]

    @property
    def fallback_percent(self) -> float:
        """Provision percent applied to unclassified loans: the most severe bucket's."""
        by_bucket = {r["bucket"]: r["provision_percent"] for r in self.rules}
        for bucket in reversed(BUCKET_SEVERITY):
            if bucket in by_bucket:
                return by_bucket[bucket]
        return 0.0

    def classify(self, loan: LoanLevelRow) -> ProvisioningRule | None:
        """Same result as classify_loan over the validated (non-overlapping) rules."""
        dpd = loan["dpd_as_of_reporting_date"]
        pos = bisect.bisect_right(self._starts, dpd) - 1
        if pos < 0:
            return None
        rule = self._sorted[pos]
        if dpd > rule["dpd_max"]:
            return None
        return rule


def provision_amount(balance: float, provision_percent: float) -> int:
    """balance * percent / 100 rounded half-up to a whole currency unit."""
    exact = Decimal(repr(balance)) * Decimal(repr(provision_percent)) / Decimal(100)
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _portfolio_percent(balance: float, total: float) -> float:
    if total == 0:
        return 0.0
    return balance / total * 100


def summarize_portfolio(
    loans: Sequence[LoanLevelRow],
    rules: RuleSet | Sequence[ProvisioningRule],
) -> PortfolioSummary:
    """
    Fold loans into per-bucket counts, balances and provisions.

    Buckets follow rule-set order. Loans no rule covers are counted in a
    trailing ``unclassified`` bucket, which is always present, so bucket
    counts and balances reconcile with the whole loan population.

    Raises:
        ValidationError: negative balance or days past due, or an invalid rule set.
    """
    validate_loans(loans)
    rule_set = rules if isinstance(rules, RuleSet) else RuleSet.from_rules(rules)

    balances: dict[SummaryBucket, list[float]] = {r["bucket"]: [] for r in rule_set.rules}
    unclassified: list[float] = []
    for loan in loans:
        rule = rule_set.classify(loan)
        if rule is None:
            unclassified.append(loan["current_balance"])
        else:
            balances[rule["bucket"]].append(loan["current_balance"])

    total_balance = math.fsum(loan["current_balance"] for loan in loans)
    percents: list[tuple[SummaryBucket, float]] = [
        (r["bucket"], r["provision_percent"]) for r in rule_set.rules
    ]
    balances[UNCLASSIFIED] = unclassified
    percents.append((UNCLASSIFIED, rule_set.fallback_percent))

    buckets: list[BucketSummary] = []
    for bucket, percent in percents:
        bucket_balance = math.fsum(balances[bucket])
        buckets.append(
            BucketSummary(
                bucket=bucket,
                loan_count=len(balances[bucket]),
                total_balance=bucket_balance,
                provision_percent=percent,
                provision_amount=provision_amount(bucket_balance, percent),
                portfolio_percent=_portfolio_percent(bucket_balance, total_balance),
            )
        )

    if unclassified:
        _logger.warning(
            "unclassified_loans",
            extra={"loan_count": len(loans), "unclassified_count": len(unclassified)},
        )

    return PortfolioSummary(
        buckets=buckets,
        total_loan_count=len(loans),
        total_balance=total_balance,
        total_provision=sum(b["provision_amount"] for b in buckets),
    )


def summarize_policies(
    loans: Sequence[LoanLevelRow],
    policies: Mapping[str, RuleSet | Sequence[ProvisioningRule]],
) -> dict[str, PortfolioSummary]:
    """Summarize the same loans independently under each named policy, in mapping order."""
    summaries: dict[str, PortfolioSummary] = {}
    for name, rules in policies.items():
        rule_set = rules if isinstance(rules, RuleSet) else RuleSet.from_rules(rules)
        summaries[name] = summarize_portfolio(loans, rule_set)
        _logger.debug(
            "policy_summarized",
            extra={"policy": name, "loan_count": len(loans), "rule_count": len(rule_set.rules)},
        )
    return summaries


__all__ = [
    "RuleSet",
    "classify_loan",
    "provision_amount",
    "summarize_policies",
    "summarize_portfolio",
]
