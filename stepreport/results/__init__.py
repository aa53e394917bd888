from .types import BuildRunResults, StepOutcome, StepRunResult

__all__ = ["BuildRunResults", "StepOutcome", "StepRunResult"]
