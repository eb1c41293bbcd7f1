import datetime as dt

from gantt_timeline.calendar_range import (
    DEFAULT_WINDOW_MONTHS,
    add_months,
    build_flat_days,
    build_months,
    compute_month_spans,
    days_in_month,
    months_between,
)
from gantt_timeline.task_models import NormalizedTask, Task


def _normalized(start, end, task_id="T"):
    task = Task(id=task_id, name=task_id, planned_start_date=start.isoformat(), planned_end_date=end.isoformat())
    return NormalizedTask(task=task, start=start, end=end)


def test_add_months_rolls_over_years_and_returns_first_of_month():
    assert add_months(dt.date(2024, 11, 15), 3) == dt.date(2025, 2, 1)
    assert add_months(dt.date(2025, 1, 31), 1) == dt.date(2025, 2, 1)
    assert add_months(dt.date(2025, 1, 1), -1) == dt.date(2024, 12, 1)


def test_days_in_month_respects_leap_years():
    assert days_in_month(dt.date(2024, 2, 10)) == 29
    assert days_in_month(dt.date(2025, 2, 10)) == 28
    assert days_in_month(dt.date(2025, 12, 1)) == 31


def test_months_between_is_inclusive():
    assert months_between(dt.date(2024, 12, 31), dt.date(2025, 2, 1)) == [
        dt.date(2024, 12, 1),
        dt.date(2025, 1, 1),
        dt.date(2025, 2, 1),
    ]


def test_empty_collection_defaults_to_three_month_window_from_today():
    months = build_months([], today=dt.date(2025, 11, 20))

    assert len(months) == DEFAULT_WINDOW_MONTHS == 3
    assert months == [dt.date(2025, 11, 1), dt.date(2025, 12, 1), dt.date(2026, 1, 1)]


def test_months_cover_earliest_start_to_latest_end():
    tasks = [
        _normalized(dt.date(2025, 3, 10), dt.date(2025, 3, 12), "A"),
        _normalized(dt.date(2025, 1, 20), dt.date(2025, 2, 2), "B"),
    ]

    months = build_months(tasks, today=dt.date(2030, 1, 1))

    assert months == [dt.date(2025, 1, 1), dt.date(2025, 2, 1), dt.date(2025, 3, 1)]


def test_single_month_task_yields_one_month_and_one_span():
    tasks = [_normalized(dt.date(2025, 6, 1), dt.date(2025, 6, 30))]

    months = build_months(tasks, today=dt.date(2025, 1, 1))
    days = build_flat_days(months)
    spans = compute_month_spans(months, days)

    assert months == [dt.date(2025, 6, 1)]
    assert len(spans) == 1
    assert spans[0].start_index == 0
    assert spans[0].days == days_in_month(dt.date(2025, 6, 1)) == 30


def test_flat_days_are_contiguous_and_tagged():
    months = months_between(dt.date(2024, 1, 1), dt.date(2024, 3, 1))

    days = build_flat_days(months)

    assert len(days) == sum(days_in_month(m) for m in months) == 31 + 29 + 31
    assert [d.index for d in days] == list(range(len(days)))
    assert all(b.date - a.date == dt.timedelta(days=1) for a, b in zip(days, days[1:]))
    assert [d.index for d in days if d.month_start] == [0, 31, 60]
    assert days[31].month == dt.date(2024, 2, 1)
    assert days[31].month_index == 1
    assert days[-1].day_of_month == 31


def test_month_spans_follow_month_order():
    months = months_between(dt.date(2024, 12, 1), dt.date(2025, 2, 1))
    days = build_flat_days(months)

    spans = compute_month_spans(months, days)

    assert [(s.month, s.start_index, s.days) for s in spans] == [
        (dt.date(2024, 12, 1), 0, 31),
        (dt.date(2025, 1, 1), 31, 31),
        (dt.date(2025, 2, 1), 62, 28),
    ]
    assert spans[-1].end_index == len(days)


def test_month_without_days_contributes_no_span():
    months = [dt.date(2025, 1, 1), dt.date(2025, 2, 1), dt.date(2025, 3, 1)]
    days = build_flat_days([dt.date(2025, 1, 1), dt.date(2025, 3, 1)])

    spans = compute_month_spans(months, days)

    assert [(s.month, s.start_index, s.days) for s in spans] == [
        (dt.date(2025, 1, 1), 0, 31),
        (dt.date(2025, 3, 1), 31, 31),
    ]
