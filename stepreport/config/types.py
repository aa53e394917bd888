from dataclasses import dataclass, field

from stepreport.report import DEFAULT_MAX_WIDTH
from stepreport.results import BuildRunResults, StepRunResult

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class ReportConfig:
    max_width: int = DEFAULT_MAX_WIDTH
    color: bool = True
    log_level: str = "info"


@dataclass
class RunFile:
    results: BuildRunResults
    workflow: str = "primary"
    fatal_error: str | None = None
    report: ReportConfig = field(default_factory=ReportConfig)
    # Execution order, the buckets in `results` only keep it per outcome.
    steps: list[StepRunResult] = field(default_factory=list)


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
