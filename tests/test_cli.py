# tests/test_cli.py
from __future__ import annotations

import json
from pathlib import Path

import pytest

from stepreport.cli import run_cli


def _write_json_run(path: Path, steps: list[dict], **extra: object) -> Path:
    data = {"start_time": "2026-10-17T09:00:00Z", "steps": steps, **extra}
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


PASSING = [
    {"name": "git-clone", "outcome": "success", "duration": 1.5},
    {"name": "lint", "outcome": "failed_skippable", "exit_code": 2, "error": "style"},
    {"name": "deploy", "outcome": "skipped"},
]

FAILING = [
    {"name": "git-clone", "outcome": "success", "duration": 1.5},
    {"name": "unit-tests", "outcome": "failed", "exit_code": 1, "error": "3 failed"},
]


def test_replay_prints_steps_status_and_summary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", PASSING, workflow="primary")

    code = run_cli(["--no-color", "replay", str(cfg)])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[:3] == ["", "Running workflow (primary)", ""]
    assert "| (1) git-clone |" in out
    assert "| ✅ | git-clone | 1.50 sec |" in out
    assert "| (2) lint |" in out
    assert "| ❌ | lint | 0.00 sec | exit code: 2 |" in out
    assert "| ➡ | deploy | 0.00 sec |" in out
    assert " * Step: (lint) | error: (style)" in out
    assert "==> Summary:" in out
    assert "DONE - Congrats!!" in out
    assert out[-1] == "[WARNING] P.S.: a couple of non important steps failed"
    assert all("\x1b[" not in line for line in out)


def test_replay_with_failed_step_returns_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", FAILING)

    code = run_cli(["replay", str(cfg)])
    out = capsys.readouterr().out

    assert code == 1
    assert "[CRITICAL] FINISHED but a couple of steps failed - Ouch" in out


def test_replay_with_fatal_error_stops_after_steps(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(
        tmp_path / "run.json", PASSING[:1], fatal_error="executor crashed"
    )

    code = run_cli(["--no-color", "replay", str(cfg)])
    out = capsys.readouterr().out

    assert code == 1
    assert "| ✅ | git-clone | 1.50 sec |" in out
    assert "[ERROR] Build failed: executor crashed" in out
    assert "[CRITICAL] Total run time:" in out
    assert "==> Summary:" not in out


def test_summary_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ok = _write_json_run(tmp_path / "ok.json", PASSING)
    bad = _write_json_run(tmp_path / "bad.json", FAILING)
    empty = _write_json_run(tmp_path / "empty.json", [])

    assert run_cli(["summary", str(ok)]) == 0
    assert run_cli(["summary", str(bad)]) == 1
    assert run_cli(["summary", str(empty)]) == 0
    _ = capsys.readouterr()


def test_status_lists_failed_steps(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", FAILING)

    code = run_cli(["status", str(cfg)])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        "Out of 2 steps, 1 was successful, 1 failed, "
        "0 failed but was marked as skippable and 0 was skipped",
        "Failed steps:",
        " * Step: (unit-tests) | error: (3 failed)",
    ]


def test_max_width_flag_truncates_boxes(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(
        tmp_path / "run.json", [{"name": "a-very-long-step-name", "outcome": "success"}]
    )

    code = run_cli(["--no-color", "--max-width", "20", "replay", str(cfg)])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    header = next(line for line in out if line.startswith("| (1)"))
    assert len(header) == 20
    assert header.endswith("... |")


def test_report_section_disables_color(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", PASSING, report={"color": False})

    run_cli(["summary", str(cfg)])
    out = capsys.readouterr().out

    assert "\x1b[" not in out
    assert " * 1 was successful" in out


def test_colors_are_on_by_default(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", PASSING)

    run_cli(["summary", str(cfg)])
    out = capsys.readouterr().out

    assert "\x1b[32m * 1 was successful" in out


def test_too_small_max_width_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", PASSING)

    code = run_cli(["--max-width", "3", "summary", str(cfg)])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_invalid_results_path_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing.json"

    code = run_cli(["summary", str(missing)])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_invalid_step_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_json_run(tmp_path / "run.json", [{"name": "x", "outcome": "nope"}])

    code = run_cli(["replay", str(cfg)])
    captured = capsys.readouterr()

    assert code == 2
    assert "x" in captured.err
