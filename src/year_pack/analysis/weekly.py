"""Group sanitized records into one pseudo-document per ISO week."""

from __future__ import annotations

from typing import Dict, List, Sequence

from year_pack.constants import EARLY_PERIOD_LAST_WEEK, MID_PERIOD_LAST_WEEK
from year_pack.schemas import Period, SanitizedRecord, WeekDocument


def get_period(week: int) -> Period:
    """Coarse year period from the raw week number.

    Uses week thresholds rather than calendar months, so a late-December
    day that falls in ISO week 1 of the next year counts as early.
    """
    if week <= EARLY_PERIOD_LAST_WEEK:
        return "early"
    if week <= MID_PERIOD_LAST_WEEK:
        return "mid"
    return "late"


def aggregate_by_week(records: Sequence[SanitizedRecord], year: int) -> List[WeekDocument]:
    """One WeekDocument per week with at least one record of ``year``.

    Sorted by week number; empty weeks produce nothing.
    """
    weeks: Dict[int, List[str]] = {}
    for record in records:
        if record.timestamp.year != year:
            continue
        weeks.setdefault(record.week, []).append(record.content)

    return [
        WeekDocument(
            week=week,
            year=year,
            period=get_period(week),
            content=" ".join(contents),
            question_count=len(contents),
        )
        for week, contents in sorted(weeks.items())
    ]
