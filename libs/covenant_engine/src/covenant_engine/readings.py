from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .models import CovenantDefinition, CovenantReading, HistoryRow
from .timeseries import period_key


@dataclass(frozen=True)
class ReadingIndex:
    """Latest and previous reading per covenant id. Absent key = no reading."""

    latest: dict[str, CovenantReading] = field(default_factory=dict)
    previous: dict[str, CovenantReading] = field(default_factory=dict)


def build_reading_index(readings: Sequence[CovenantReading]) -> ReadingIndex:
    """
    Index an unordered reading series.

    latest: the reading with the maximum date; the first one seen wins a tie.
    previous: the most recent reading dated strictly before latest. Readings
    sharing the latest date never become previous, so a covenant whose
    readings all carry one date has no previous.
    """
    latest: dict[str, CovenantReading] = {}
    for reading in readings:
        current = latest.get(reading["covenant_id"])
        if current is None or reading["date"] > current["date"]:
            latest[reading["covenant_id"]] = reading

    previous: dict[str, CovenantReading] = {}
    for reading in readings:
        covenant_id = reading["covenant_id"]
        if reading["date"] >= latest[covenant_id]["date"]:
            continue
        current = previous.get(covenant_id)
        if current is None or reading["date"] > current["date"]:
            previous[covenant_id] = reading

    return ReadingIndex(latest=latest, previous=previous)


def build_reading_history(
    covenants: Sequence[CovenantDefinition],
    readings: Sequence[CovenantReading],
) -> list[HistoryRow]:
    """
    One row per distinct reading date, ascending.

    Each row maps every covenant id to the value of that covenant's most
    recent reading dated on or before the row date, or None before its first
    reading. Same-date readings resolve to the first one seen.
    """
    by_covenant: dict[str, list[CovenantReading]] = {}
    for reading in readings:
        by_covenant.setdefault(reading["covenant_id"], []).append(reading)
    for series in by_covenant.values():
        # Stable sort keeps first-seen order among equal dates.
        series.sort(key=lambda r: r["date"])

    dates = sorted({reading["date"] for reading in readings})
    cursors: dict[str, int] = {cov["id"]: 0 for cov in covenants}
    current: dict[str, float | None] = {cov["id"]: None for cov in covenants}
    rows: list[HistoryRow] = []

    for row_date in dates:
        for cov in covenants:
            series = by_covenant.get(cov["id"], [])
            idx = cursors[cov["id"]]
            while idx < len(series) and series[idx]["date"] <= row_date:
                if idx == 0 or series[idx]["date"] != series[idx - 1]["date"]:
                    current[cov["id"]] = series[idx]["value"]
                idx += 1
            cursors[cov["id"]] = idx
        rows.append(
            HistoryRow(
                date=row_date,
                period=period_key(row_date),
                values=dict(current),
            )
        )

    return rows


__all__ = [
    "ReadingIndex",
    "build_reading_history",
    "build_reading_index",
]
