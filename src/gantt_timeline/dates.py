from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass
from typing import Any, Iterable

from .task_models import NormalizedTask, Task

# A leading YYYY-MM-DD; anything after the first space (time, offset) is ignored.
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?: .*)?$")

# Tried in order when the ISO form does not match; all are calendar-date only.
FALLBACK_FORMATS = (
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


@dataclass(frozen=True)
class ParsedDate:
    """Successful parse: a local calendar date without time-of-day."""

    value: _dt.date


@dataclass(frozen=True)
class DateParseFailure:
    """Unparseable input; callers decide whether to drop the owning task."""

    raw: Any
    reason: str


DateParseResult = ParsedDate | DateParseFailure


def parse_date_local(value: Any) -> DateParseResult:
    """
    Parse a date string into a local calendar date.

    - ``YYYY-MM-DDT...``: only the part before ``T`` is used.
    - ``MM/DD/YYYY``: US-style slash format.
    - Anything else: ``YYYY-MM-DD[ time]`` or one of FALLBACK_FORMATS.

    Offsets and times are discarded. Never raises.
    """

    if not isinstance(value, str) or not value.strip():
        return DateParseFailure(value, "expected a non-empty date string")

    text = value.strip()
    try:
        if "T" in text:
            return ParsedDate(_parse_iso_prefix(text))
        if "/" in text:
            return ParsedDate(_parse_us_slash(text))
        return ParsedDate(_parse_generic(text))
    except (ValueError, OverflowError) as exc:
        return DateParseFailure(value, str(exc))


def _parse_iso_prefix(text: str) -> _dt.date:
    date_part = text.split("T", 1)[0]
    parts = date_part.split("-")
    if len(parts) != 3:
        raise ValueError(f"expected YYYY-MM-DD before 'T', got {date_part!r}")
    year, month, day = (int(part) for part in parts)
    return _dt.date(year, month, day)


def _parse_us_slash(text: str) -> _dt.date:
    parts = text.split("/")
    if len(parts) != 3:
        raise ValueError(f"expected MM/DD/YYYY, got {text!r}")
    month, day, year = (int(part) for part in parts)
    return _dt.date(year, month, day)


def _parse_generic(text: str) -> _dt.date:
    m = _ISO_DATE_RE.match(text)
    if m:
        year, month, day = (int(part) for part in m.groups())
        return _dt.date(year, month, day)
    for fmt in FALLBACK_FORMATS:
        try:
            return _dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognised date format {text!r}")


def resolve_actual(actual: str | None, planned: str) -> str:
    """Return the actual date string, or the planned one when actual is empty."""
    return actual or planned


def normalize_task(task: Task) -> NormalizedTask | None:
    """
    Parse all four date fields of a task and order its actual range.

    Returns None when any of planned start, planned end, actual start or
    actual end (after falling back to planned) cannot be parsed.
    """

    results = [
        parse_date_local(task.planned_start_date),
        parse_date_local(task.planned_end_date),
        parse_date_local(resolve_actual(task.actual_start_date, task.planned_start_date)),
        parse_date_local(resolve_actual(task.actual_end_date, task.planned_end_date)),
    ]
    if any(isinstance(result, DateParseFailure) for result in results):
        return None

    start = results[2].value
    end = results[3].value
    if start > end:
        start, end = end, start
    return NormalizedTask(task=task, start=start, end=end)


def normalize_tasks(tasks: Iterable[Task]) -> list[NormalizedTask]:
    """Normalize tasks in input order, dropping those with unparseable dates."""

    normalized: list[NormalizedTask] = []
    for task in tasks:
        result = normalize_task(task)
        if result is not None:
            normalized.append(result)
    return normalized
