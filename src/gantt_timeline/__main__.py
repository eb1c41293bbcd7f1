from __future__ import annotations

import argparse
import datetime as dt
import sys
import webbrowser
from pathlib import Path

import yaml

from .layout import compute_layout
from .parse_tasks import TaskFile, TaskValidationError, load_tasks
from .render_timeline import ROW_HEIGHT, render_timeline


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number '{value}'") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value}")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gantt-timeline",
        description="Render a day-granular Gantt timeline from a task file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("tasks", help="Path to tasks YAML")
    parser.add_argument("--out", default="output/timeline.svg", help="Output SVG path")
    parser.add_argument("--title", help="Chart title; defaults to the title in the task file")
    parser.add_argument(
        "--today",
        type=_parse_date,
        help="Reference date for the default window when no task has valid dates (YYYY-MM-DD)",
    )
    parser.add_argument("--row-height", type=_positive_float, default=ROW_HEIGHT, help="Row height in inches")
    parser.add_argument(
        "--view",
        dest="view",
        action="store_true",
        default=True,
        help="Best-effort open the output file after rendering",
    )
    parser.add_argument(
        "--no-view",
        dest="view",
        action="store_false",
        help="Do not open the output file after rendering",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    tasks_path = Path(args.tasks)

    try:
        task_file: TaskFile = load_tasks(str(tasks_path))
    except (yaml.YAMLError, TaskValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FileNotFoundError:
        print(f"Error: task file not found: {tasks_path}", file=sys.stderr)
        return 1
    except Exception as exc:  # Unexpected
        print(f"Unexpected error while loading tasks: {exc}", file=sys.stderr)
        return 1

    layout = compute_layout(task_file.tasks, today=args.today)

    skipped = len(task_file.tasks) - len(layout.normalized_tasks)
    if skipped:
        print(f"Note: skipped {skipped} task(s) with unparseable dates", file=sys.stderr)

    title = args.title if args.title is not None else (task_file.title or "")

    try:
        render_timeline(layout, out_path=args.out, title=title, row_height=args.row_height)
    except Exception as exc:
        print(f"Unexpected error while rendering: {exc}", file=sys.stderr)
        return 1

    if args.view:
        try:
            webbrowser.open(Path(args.out).resolve().as_uri())
        except Exception:
            pass

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
