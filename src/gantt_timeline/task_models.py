from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass
class Task:
    """Input record supplied by a task source; dates are raw strings."""

    id: str | int
    name: str
    planned_start_date: str
    planned_end_date: str
    actual_start_date: str = ""
    actual_end_date: str = ""


@dataclass(frozen=True)
class NormalizedTask:
    """Task whose dates have been parsed into an ordered local-date range."""

    task: Task
    start: date
    end: date

    @property
    def id(self) -> str | int:
        return self.task.id

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def duration_days(self) -> int:
        """Inclusive number of calendar days covered."""
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class Day:
    """One column of the timeline grid."""

    date: date
    index: int
    day_of_month: int
    month_index: int
    month: date

    @property
    def month_start(self) -> bool:
        return self.day_of_month == 1

    @property
    def is_weekend(self) -> bool:
        return self.date.weekday() >= 5


@dataclass(frozen=True)
class MonthSpan:
    """Contiguous run of day columns that belong to one calendar month."""

    month: date
    start_index: int
    days: int

    @property
    def end_index(self) -> int:
        """Exclusive end index within the flat day sequence."""
        return self.start_index + self.days


@dataclass(frozen=True)
class BarPosition:
    """
    Horizontal placement of one task bar.

    Offsets are percentages of the full timeline width so renderers can map
    them onto any unit they like.
    """

    task_id: str | int
    name: str
    start_index: int
    end_index: int
    day_span: int
    left_percent: float
    width_percent: float
    start_label: str
    end_label: str

    @property
    def tooltip(self) -> str:
        plural = "" if self.day_span == 1 else "s"
        return (
            f"{self.name}\n"
            f"Start: {self.start_label}\n"
            f"End: {self.end_label}\n"
            f"Duration: {self.day_span} day{plural}"
        )


@dataclass(frozen=True)
class TimelineLayout:
    """Everything a renderer needs to draw the grid and the bars."""

    normalized_tasks: tuple[NormalizedTask, ...] = ()
    months: tuple[date, ...] = ()
    flat_days: tuple[Day, ...] = ()
    month_spans: tuple[MonthSpan, ...] = ()
    bars: tuple[BarPosition, ...] = ()

    @property
    def total_days(self) -> int:
        return len(self.flat_days)

    @property
    def is_empty(self) -> bool:
        """True when no task survived normalization; renderers show a placeholder."""
        return not self.normalized_tasks
