from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date

from .models import CovenantReading, LoanLevelRow, TrendPoint

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ValidationError(ValueError):
    """Raised when engine input violates a boundary constraint."""


def require_iso_date(value: str, field: str) -> str:
    """
    Return value if it is a zero-padded YYYY-MM-DD calendar date.

    Dates are compared as strings everywhere, which is only correct for
    fixed-width components.
    """
    if _ISO_DATE.match(value) is None:
        raise ValidationError(f"{field} must be an ISO date YYYY-MM-DD, got {value!r}")
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"{field} is not a calendar date: {value!r}") from exc
    return value


def validate_loan(loan: LoanLevelRow) -> LoanLevelRow:
    """Reject negative balances and negative days past due."""
    if loan["current_balance"] < 0:
        raise ValidationError(
            f"Loan {loan['loan_id']} has negative balance {loan['current_balance']}"
        )
    if loan["dpd_as_of_reporting_date"] < 0:
        raise ValidationError(
            f"Loan {loan['loan_id']} has negative days past due "
            f"{loan['dpd_as_of_reporting_date']}"
        )
    return loan


def validate_loans(loans: Sequence[LoanLevelRow]) -> None:
    for loan in loans:
        validate_loan(loan)


def validate_readings(readings: Sequence[CovenantReading]) -> None:
    for reading in readings:
        require_iso_date(reading["date"], f"reading date for {reading['covenant_id']}")


def validate_ascending(points: Sequence[TrendPoint], series: str) -> None:
    """Raise if the series dates are not in non-decreasing order."""
    previous: str | None = None
    for point in points:
        require_iso_date(point["date"], f"{series} date")
        if previous is not None and point["date"] < previous:
            raise ValidationError(
                f"{series} must be date-ascending: {point['date']} follows {previous}"
            )
        previous = point["date"]


__all__ = [
    "ValidationError",
    "require_iso_date",
    "validate_ascending",
    "validate_loan",
    "validate_loans",
    "validate_readings",
]
