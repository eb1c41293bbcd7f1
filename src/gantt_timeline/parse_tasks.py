from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from typing import Any

import yaml

from .task_models import Task


class TaskValidationError(Exception):
    """Raised when a task file is structurally invalid (wrong types, missing or unknown fields)."""


@dataclass(frozen=True)
class _Path:
    """Helper to produce readable YAML path strings like tasks[0].name."""

    parts: tuple[str, ...] = ()

    def child(self, segment: str) -> "_Path":
        return _Path(self.parts + (segment,))

    def __str__(self) -> str:
        return ".".join(self.parts) if self.parts else "root"


@dataclass
class TaskFile:
    """Parsed contents of a task file."""

    title: str | None = None
    tasks: list[Task] = field(default_factory=list)


_DATE_FIELDS = {
    "planned_start_date": "plannedStartDate",
    "planned_end_date": "plannedEndDate",
    "actual_start_date": "actualStartDate",
    "actual_end_date": "actualEndDate",
}
_REQUIRED_DATE_FIELDS = ("planned_start_date", "planned_end_date")
_ALIASES = {alias: name for name, alias in _DATE_FIELDS.items()}


def load_tasks(path: str) -> TaskFile:
    """Load tasks from a YAML file at the given path (dates are not parsed here)."""

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    return parse_task_file(raw)


def parse_task_file(data: Any) -> TaskFile:
    path = _Path()
    if not isinstance(data, dict):
        raise TaskValidationError(f"{path}: expected mapping at top level")
    _assert_allowed_keys(data, {"title", "tasks"}, path)

    title = data.get("title")
    if title is not None and not isinstance(title, str):
        raise TaskValidationError(f"{path.child('title')}: expected string")

    tasks_raw = data.get("tasks")
    if tasks_raw is None:
        raise TaskValidationError(f"{path}: missing required field 'tasks'")
    if not isinstance(tasks_raw, list):
        raise TaskValidationError(f"{path.child('tasks')}: expected list")

    tasks = [_parse_task(task_raw, path.child(f"tasks[{idx}]")) for idx, task_raw in enumerate(tasks_raw)]
    return TaskFile(title=title, tasks=tasks)


def _parse_task(data: Any, path: _Path) -> Task:
    if not isinstance(data, dict):
        raise TaskValidationError(f"{path}: expected mapping for task")

    data = _canonical_keys(data, path)
    _assert_allowed_keys(data, {"id", "name", *_DATE_FIELDS}, path)

    task_id = _require_value(data, "id", path)
    if isinstance(task_id, bool) or not isinstance(task_id, (str, int)):
        raise TaskValidationError(f"{path.child('id')}: expected string or integer")
    name = _require_str(data, "name", path)

    dates: dict[str, str] = {}
    for key in _DATE_FIELDS:
        if key in _REQUIRED_DATE_FIELDS:
            value = _require_value(data, key, path)
        else:
            value = data.get(key)
        dates[key] = _date_text(value, path.child(key))

    return Task(id=task_id, name=name, **dates)


def _canonical_keys(data: dict[str, Any], path: _Path) -> dict[str, Any]:
    """Map camelCase date keys onto their snake_case names."""

    canonical: dict[str, Any] = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name in canonical:
            raise TaskValidationError(f"{path}: field '{name}' given more than once")
        canonical[name] = value
    return canonical


def _date_text(value: Any, path: _Path) -> str:
    # PyYAML decodes unquoted timestamps; render them back to ISO text.
    if value is None:
        return ""
    if isinstance(value, _dt.datetime):
        return value.isoformat()
    if isinstance(value, _dt.date):
        return value.isoformat()
    if not isinstance(value, str):
        raise TaskValidationError(f"{path}: expected date string")
    return value


def _assert_allowed_keys(data: dict[str, Any], allowed: set[str], path: _Path) -> None:
    extras = sorted(set(data.keys()) - allowed)
    if extras:
        raise TaskValidationError(f"{path}: unexpected fields {extras}")


def _require_str(data: dict[str, Any], key: str, path: _Path) -> str:
    value = _require_value(data, key, path)
    if not isinstance(value, str) or not value.strip():
        raise TaskValidationError(f"{path.child(key)}: expected non-empty string")
    return value


def _require_value(data: dict[str, Any], key: str, path: _Path) -> Any:
    if key not in data:
        raise TaskValidationError(f"{path}: missing required field '{key}'")
    return data[key]
