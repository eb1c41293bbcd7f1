from __future__ import annotations

import datetime as _dt
from typing import Sequence

from .task_models import BarPosition, Day, NormalizedTask

MIN_WIDTH_PERCENT = 8.0
"""Bars are never drawn narrower than this share of the timeline."""


def format_date(d: _dt.date) -> str:
    """Short label such as 'Jan 5, 2025'."""
    return f"{d:%b} {d.day}, {d.year}"


def format_month(d: _dt.date) -> str:
    """Month header label such as 'Jan 2025'."""
    return f"{d:%b} {d.year}"


def _start_of_day(d: _dt.date) -> _dt.datetime:
    return _dt.datetime.combine(d, _dt.time.min)


def _end_of_day(d: _dt.date) -> _dt.datetime:
    return _dt.datetime.combine(d, _dt.time.max)


def map_bar(task: NormalizedTask, flat_days: Sequence[Day]) -> BarPosition:
    """
    Position a task bar against the flat day sequence.

    Tasks reaching outside the displayed days are clamped into it: a start
    after the last day snaps to column 0 and an end after the last day snaps to
    the last column.
    """

    total = len(flat_days)
    if total == 0:
        raise ValueError("flat_days must not be empty")

    task_start = _start_of_day(task.start)
    task_end = _end_of_day(task.end)

    start_index = next((i for i, day in enumerate(flat_days) if _start_of_day(day.date) >= task_start), 0)
    end_index = next((i for i, day in enumerate(flat_days) if _end_of_day(day.date) >= task_end), total - 1)

    day_span = max(1, end_index - start_index + 1)
    left = start_index / total * 100
    width = day_span / total * 100

    return BarPosition(
        task_id=task.id,
        name=task.name,
        start_index=start_index,
        end_index=end_index,
        day_span=day_span,
        left_percent=max(0.0, left),
        width_percent=max(MIN_WIDTH_PERCENT, width),
        start_label=format_date(task.start),
        end_label=format_date(task.end),
    )


def map_bars(normalized: Sequence[NormalizedTask], flat_days: Sequence[Day]) -> list[BarPosition]:
    return [map_bar(task, flat_days) for task in normalized]
