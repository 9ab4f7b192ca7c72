"""Recency filters over run summaries."""

from __future__ import annotations

from calendar import monthrange
from datetime import datetime, timedelta
from typing import Iterable

from runsplits.models import RunSummary


def runs_since(summaries: Iterable[RunSummary], cutoff: datetime) -> list[RunSummary]:
    """Runs dated strictly after *cutoff*. Undated runs are dropped."""
    return [s for s in summaries if s.date is not None and s.date > cutoff]


def for_last_days(summaries: Iterable[RunSummary], days: int,
                  now: datetime | None = None) -> list[RunSummary]:
    now = now or datetime.now()
    return runs_since(summaries, now - timedelta(days=days))


def for_last_two_weeks(summaries: Iterable[RunSummary],
                       now: datetime | None = None) -> list[RunSummary]:
    return for_last_days(summaries, 14, now=now)


def for_last_month(summaries: Iterable[RunSummary],
                   now: datetime | None = None) -> list[RunSummary]:
    now = now or datetime.now()
    return runs_since(summaries, _month_before(now))


def _month_before(moment: datetime) -> datetime:
    """Same day one calendar month earlier, clamped to the month's length."""
    year, month = (moment.year - 1, 12) if moment.month == 1 else (moment.year, moment.month - 1)
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
