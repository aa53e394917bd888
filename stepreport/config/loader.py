import json
import tomllib
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from stepreport.results import BuildRunResults, StepOutcome, StepRunResult

from .types import (
    LOG_LEVELS,
    ConfigError,
    ReportConfig,
    RunFile,
    UnsupportedConfigFormatError,
)

MIN_WIDTH = 10


def load_run(path: str | Path) -> RunFile:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Results file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Results path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_run_file(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    return _expect_mapping(path, "YAML", raw_file)


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc

    return _expect_mapping(path, "TOML", raw_file)


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    return _expect_mapping(path, "JSON", raw_file)


def _expect_mapping(path: Path, kind: str, raw_file: object) -> Mapping[str, Any]:
    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: {kind} parsed successfully but top-level value is not an object: {type(raw_file)}"
        )
    return raw_file


def _build_run_file(raw: Mapping[str, Any]) -> RunFile:
    keys = {"workflow", "start_time", "fatal_error", "report", "steps"}

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"Can't process: {field}")

    if "start_time" not in raw:
        raise ConfigError("Missing 'start_time' field")

    start_time = _parse_start_time(raw["start_time"])

    workflow = "primary"
    if "workflow" in raw:
        if not isinstance(raw["workflow"], str) or len(raw["workflow"].strip()) < 1:
            raise ConfigError("'workflow' must be a non empty string")
        workflow = raw["workflow"].strip()

    fatal_error = None
    if raw.get("fatal_error") is not None:
        if not isinstance(raw["fatal_error"], str):
            raise ConfigError("'fatal_error' must be a string")
        fatal_error = raw["fatal_error"].strip() or None

    report = ReportConfig()
    if "report" in raw:
        report = _build_report_config(raw["report"])

    raw_steps = raw.get("steps", [])
    if raw_steps is None:
        raw_steps = []
    if not isinstance(raw_steps, list):
        raise ConfigError(f"'steps' must be a list, got {type(raw_steps)}")

    results = BuildRunResults(start_time=start_time)
    steps = []
    for position, fields in enumerate(raw_steps, start=1):
        if not isinstance(fields, Mapping):
            raise ConfigError(f"step #{position} must be a mapping")

        step = _build_step_result(position, fields)
        results.add(step)
        steps.append(step)

    return RunFile(
        results=results,
        workflow=workflow,
        fatal_error=fatal_error,
        report=report,
        steps=steps,
    )


def _parse_start_time(value: object) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        raise ConfigError("'start_time' needs a time of day, got a bare date")
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ConfigError(f"'start_time' is not an ISO-8601 timestamp: {value}") from exc
    else:
        raise ConfigError(f"'start_time' must be a timestamp, got {type(value)}")

    # Naive timestamps are taken as UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _build_report_config(fields: object) -> ReportConfig:
    keys = {"max_width", "color", "log_level"}
    config = ReportConfig()

    if not isinstance(fields, Mapping):
        raise ConfigError(f"'report' must be a mapping, got {type(fields)}")

    for field in fields.keys():
        if field not in keys:
            raise ConfigError(f"report: Can't process: {field}")

    if "max_width" in fields:
        width = fields["max_width"]
        if isinstance(width, bool) or not isinstance(width, int):
            raise ConfigError("report: 'max_width' should be an integer")
        if width < MIN_WIDTH:
            raise ConfigError(f"report: 'max_width' must be at least {MIN_WIDTH}")
        config.max_width = width

    if "color" in fields:
        if not isinstance(fields["color"], bool):
            raise ConfigError("report: 'color' should be a boolean")
        config.color = fields["color"]

    if "log_level" in fields:
        level = fields["log_level"]
        if not isinstance(level, str) or level.strip().lower() not in LOG_LEVELS:
            raise ConfigError(
                f"report: 'log_level' should be one of {', '.join(LOG_LEVELS)}"
            )
        config.log_level = level.strip().lower()

    return config


def _build_step_result(position: int, fields: Mapping[str, Any]) -> StepRunResult:
    keys = {"name", "outcome", "duration", "exit_code", "error"}
    error = None
    exit_code = 0
    duration = 0.0

    for field in fields.keys():
        if field not in keys:
            raise ConfigError(f"step #{position}: Can't process: {field}")

    if "name" not in fields:
        raise ConfigError(f"step #{position}: missing 'name'")

    if not isinstance(fields["name"], str) or len(fields["name"].strip()) < 1:
        raise ConfigError(f"step #{position}: The name should be a non empty string")

    name = fields["name"].strip()

    if "outcome" not in fields:
        raise ConfigError(f"{name}: missing 'outcome'")

    try:
        outcome = StepOutcome.parse(fields["outcome"])
    except ValueError as exc:
        raise ConfigError(f"{name}: {exc}") from exc

    if "duration" in fields:
        value = fields["duration"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{name}: The duration should be a number of seconds")
        if value < 0:
            raise ConfigError(f"{name}: The duration can't be negative")
        duration = float(value)

    if "exit_code" in fields:
        value = fields["exit_code"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{name}: The exit_code should be an integer")
        exit_code = value

    if fields.get("error") is not None:
        if not isinstance(fields["error"], str):
            raise ConfigError(f"{name}: The error should be a string")
        error = fields["error"].strip() or None

    return StepRunResult(name, outcome, error, exit_code, duration)
