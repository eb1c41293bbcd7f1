from __future__ import annotations

from datetime import date
from typing import Sequence

from .bars import map_bars
from .calendar_range import build_flat_days, build_months, compute_month_spans
from .dates import normalize_tasks
from .task_models import Task, TimelineLayout


def compute_layout(tasks: Sequence[Task], today: date | None = None) -> TimelineLayout:
    """
    Run the full layout pipeline and return an immutable TimelineLayout.

    - Normalizes dates and drops tasks with unparseable ones.
    - Derives whole months covering all tasks (or a default window around `today`).
    - Expands months into day columns and groups them back into month spans.
    - Maps each task onto a percentage offset/width pair.

    `today` only matters when no task survives normalization; it defaults to
    the local current date.
    """

    normalized = normalize_tasks(tasks)
    months = build_months(normalized, today or date.today())
    flat_days = build_flat_days(months)
    month_spans = compute_month_spans(months, flat_days)
    bars = map_bars(normalized, flat_days)

    return TimelineLayout(
        normalized_tasks=tuple(normalized),
        months=tuple(months),
        flat_days=tuple(flat_days),
        month_spans=tuple(month_spans),
        bars=tuple(bars),
    )


class LayoutCache:
    """Keeps the last layout and reuses it while the same task collection object is passed in."""

    def __init__(self) -> None:
        self._tasks: Sequence[Task] | None = None
        self._today: date | None = None
        self._layout: TimelineLayout | None = None

    def get(self, tasks: Sequence[Task], today: date | None = None) -> TimelineLayout:
        # Keyed on the resolved date: a default window is only valid for that day.
        today = today or date.today()
        if self._layout is None or tasks is not self._tasks or today != self._today:
            self._layout = compute_layout(tasks, today)
            self._tasks = tasks
            self._today = today
        return self._layout

    def invalidate(self) -> None:
        self._tasks = None
        self._today = None
        self._layout = None
