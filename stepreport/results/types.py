from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class StepOutcome(IntEnum):
    SUCCESS = 0
    FAILED = 1
    FAILED_SKIPPABLE = 2
    SKIPPED = 3
    SKIPPED_WITH_RUN_IF = 4

    @classmethod
    def parse(cls, value: object) -> StepOutcome:
        if isinstance(value, StepOutcome):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown step outcome: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            name = value.strip().upper().replace("-", "_")
            if name.isdigit():
                return cls(int(name))
            if name in cls.__members__:
                return cls[name]
        raise ValueError(f"Unknown step outcome: {value!r}")

    @property
    def is_failure(self) -> bool:
        return self in (StepOutcome.FAILED, StepOutcome.FAILED_SKIPPABLE)


@dataclass(frozen=True)
class StepRunResult:
    step_name: str
    outcome: StepOutcome
    error: str | None = None
    exit_code: int = 0
    duration_s: float = 0.0


@dataclass
class BuildRunResults:
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    success_steps: list[StepRunResult] = field(default_factory=list)
    failed_steps: list[StepRunResult] = field(default_factory=list)
    failed_skippable_steps: list[StepRunResult] = field(default_factory=list)
    skipped_steps: list[StepRunResult] = field(default_factory=list)

    def bucket_for(self, outcome: StepOutcome) -> list[StepRunResult]:
        match outcome:
            case StepOutcome.SUCCESS:
                return self.success_steps
            case StepOutcome.FAILED:
                return self.failed_steps
            case StepOutcome.FAILED_SKIPPABLE:
                return self.failed_skippable_steps
            case StepOutcome.SKIPPED | StepOutcome.SKIPPED_WITH_RUN_IF:
                return self.skipped_steps
            case _:
                raise KeyError(outcome)

    def add(self, result: StepRunResult) -> None:
        self.bucket_for(result.outcome).append(result)

    def all_steps(self) -> list[StepRunResult]:
        return [
            *self.success_steps,
            *self.failed_steps,
            *self.failed_skippable_steps,
            *self.skipped_steps,
        ]

    @property
    def success_count(self) -> int:
        return len(self.success_steps)

    @property
    def failed_count(self) -> int:
        return len(self.failed_steps)

    @property
    def failed_skippable_count(self) -> int:
        return len(self.failed_skippable_steps)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_steps)

    @property
    def total_count(self) -> int:
        return (
            self.success_count
            + self.failed_count
            + self.failed_skippable_count
            + self.skipped_count
        )

    def has_failures(self) -> bool:
        return self.failed_count > 0
