import textwrap

from gantt_timeline.__main__ import main


def _write(tmp_path, content):
    path = tmp_path / "tasks.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return str(path)


def test_cli_renders_svg(tmp_path):
    tasks = _write(
        tmp_path,
        """
        title: Demo
        tasks:
          - id: 1
            name: Kickoff
            plannedStartDate: "2025-01-01T00:00:00"
            plannedEndDate: "2025-01-05T23:59:59"
        """,
    )
    out = tmp_path / "out" / "timeline.svg"

    assert main([tasks, "--out", str(out), "--no-view"]) == 0
    assert out.exists()


def test_cli_reports_skipped_tasks(tmp_path, capsys):
    tasks = _write(
        tmp_path,
        """
        tasks:
          - id: 1
            name: Good
            planned_start_date: "2025-01-01"
            planned_end_date: "2025-01-02"
          - id: 2
            name: Bad
            planned_start_date: "not-a-date"
            planned_end_date: "2025-01-02"
        """,
    )

    code = main([tasks, "--out", str(tmp_path / "t.svg"), "--no-view"])

    assert code == 0
    assert "skipped 1 task(s)" in capsys.readouterr().err


def test_cli_renders_empty_task_list_with_reference_date(tmp_path):
    tasks = _write(tmp_path, "tasks: []\n")
    out = tmp_path / "empty.svg"

    assert main([tasks, "--out", str(out), "--today", "2025-02-10", "--no-view"]) == 0
    assert out.exists()


def test_cli_returns_2_on_validation_error(tmp_path, capsys):
    tasks = _write(tmp_path, "tasks: {}\n")

    assert main([tasks, "--out", str(tmp_path / "x.svg"), "--no-view"]) == 2
    assert "Error:" in capsys.readouterr().err


def test_cli_returns_2_on_yaml_error(tmp_path):
    tasks = _write(tmp_path, "tasks: [unclosed\n")

    assert main([tasks, "--out", str(tmp_path / "x.svg"), "--no-view"]) == 2


def test_cli_returns_1_for_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope.yaml"

    assert main([str(missing), "--no-view"]) == 1
    assert "task file not found" in capsys.readouterr().err
