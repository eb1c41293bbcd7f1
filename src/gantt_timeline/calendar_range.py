from __future__ import annotations

import calendar
from datetime import date
from typing import Sequence

from .task_models import Day, MonthSpan, NormalizedTask

DEFAULT_WINDOW_MONTHS = 3
"""Number of months shown when there are no tasks to derive a range from."""


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def days_in_month(d: date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def add_months(d: date, months: int) -> date:
    """First day of the month `months` calendar months after the month of `d`."""
    years, month_zero = divmod(d.month - 1 + months, 12)
    return date(d.year + years, month_zero + 1, 1)


def months_between(start: date, end: date) -> list[date]:
    """First-of-month dates from the month of `start` to the month of `end`, inclusive."""

    months: list[date] = []
    current = start_of_month(start)
    last = start_of_month(end)
    while current <= last:
        months.append(current)
        current = add_months(current, 1)
    return months


def build_months(normalized: Sequence[NormalizedTask], today: date) -> list[date]:
    """
    Return the minimal run of whole months covering every normalized task.

    With no tasks, a default window of DEFAULT_WINDOW_MONTHS months starting at
    the month of `today` is returned instead.
    """

    if not normalized:
        first = start_of_month(today)
        return months_between(first, add_months(first, DEFAULT_WINDOW_MONTHS - 1))

    earliest = min(task.start for task in normalized)
    latest = max(task.end for task in normalized)
    return months_between(earliest, latest)


def build_flat_days(months: Sequence[date]) -> list[Day]:
    """Expand months into one Day per calendar day; list position is the column index."""

    days: list[Day] = []
    for month_index, month in enumerate(months):
        for day_of_month in range(1, days_in_month(month) + 1):
            days.append(
                Day(
                    date=month.replace(day=day_of_month),
                    index=len(days),
                    day_of_month=day_of_month,
                    month_index=month_index,
                    month=month,
                )
            )
    return days


def compute_month_spans(months: Sequence[date], flat_days: Sequence[Day]) -> list[MonthSpan]:
    """
    Group the flat day sequence into one span per month, in month order.

    The start index is located by searching rather than by summing month
    lengths, so the result stays correct if days are ever filtered out.
    Months without any matching day produce no span.
    """

    spans: list[MonthSpan] = []
    for month in months:
        key = (month.year, month.month)
        matching = [day for day in flat_days if (day.date.year, day.date.month) == key]
        if not matching:
            continue
        start_index = next(i for i, day in enumerate(flat_days) if (day.date.year, day.date.month) == key)
        spans.append(MonthSpan(month=month, start_index=start_index, days=len(matching)))
    return spans
