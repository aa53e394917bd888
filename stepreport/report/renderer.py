from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone

from stepreport.results import BuildRunResults, StepOutcome, StepRunResult

from .sink import ReportSink
from .types import DEFAULT_MAX_WIDTH, Verdict, colorize, format_seconds, truncate_title

_OUTCOME_STYLE: dict[StepOutcome, tuple[str, str]] = {
    StepOutcome.SUCCESS: ("✅", "green"),
    StepOutcome.FAILED: ("❌", "red"),
    StepOutcome.FAILED_SKIPPABLE: ("❌", "yellow"),
    StepOutcome.SKIPPED: ("➡", "blue"),
    StepOutcome.SKIPPED_WITH_RUN_IF: ("➡", "blue"),
}

# Same width as "| <icon> |", icons are one code point.
_MEASURE_PREFIX = "|...|"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Renderer:
    """
    Renders build run progress and results as boxed, colorized lines.

    Widths are counted in code points of the uncolored text. The renderer
    keeps no state between calls, so the same input always produces the
    same lines.
    """

    def __init__(
        self,
        sink: ReportSink,
        *,
        max_width: int = DEFAULT_MAX_WIDTH,
        color: bool = True,
        clock: Callable[[], datetime] | None = None,
    ):
        self.sink = sink
        self.max_width = max_width
        self.color = color
        self.clock = clock or _utc_now

    def _paint(self, text: str, color: str) -> str:
        return colorize(text, color) if self.color else text

    def _elapsed_since(self, start_time: datetime) -> timedelta:
        # Naive timestamps are taken as UTC
        if start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=timezone.utc)
        return self.clock() - start_time

    def render_workflow_header(self, title: str) -> None:
        with self.sink.batch():
            self.sink.blank()
            self.sink.info(self._paint(f"Running workflow ({title})", "blue"))
            self.sink.blank()

    def render_step_header(self, title: str, index: int) -> None:
        content = f"| ({index}) {title} |"
        if len(content) > self.max_width:
            title = truncate_title(title, len(content), self.max_width)
            content = f"| ({index}) {title} |"

        sep = "-" * len(content)
        with self.sink.batch():
            self.sink.info(sep)
            self.sink.info(content)
            self.sink.info(sep)

    def render_step_summary(
        self,
        title: str,
        outcome: StepOutcome | int | str,
        duration: float | timedelta,
        exit_code: int = 0,
    ) -> None:
        with self.sink.batch():
            try:
                kind = StepOutcome.parse(outcome)
            except ValueError:
                self.sink.error(f"Unknown result code: {outcome}")
                return

            run_time = format_seconds(duration, " sec")
            content = self._summary_line(
                _MEASURE_PREFIX, title, run_time, kind, exit_code
            )
            if len(content) > self.max_width:
                title = truncate_title(title, len(content), self.max_width)
                content = self._summary_line(
                    _MEASURE_PREFIX, title, run_time, kind, exit_code
                )

            icon, color = _OUTCOME_STYLE[kind]
            sep = "-" * len(content)
            line = self._summary_line(
                f"| {icon} |", self._paint(title, color), run_time, kind, exit_code
            )

            self.sink.info(sep)
            self.sink.info(line)
            self.sink.info(sep)
            self.sink.blank()

    @staticmethod
    def _summary_line(
        prefix: str, title: str, run_time: str, kind: StepOutcome, exit_code: int
    ) -> str:
        if kind.is_failure:
            return f"{prefix} {title} | {run_time} | exit code: {exit_code} |"
        return f"{prefix} {title} | {run_time} |"

    def render_step_result(self, result: StepRunResult) -> None:
        self.render_step_summary(
            result.step_name, result.outcome, result.duration_s, result.exit_code
        )

    def render_build_failed(
        self, start_time: datetime, err: BaseException | str
    ) -> Verdict:
        run_time = self._elapsed_since(start_time)
        with self.sink.batch():
            self.sink.error(f"Build failed: {err}")
            self.sink.fatal("Total run time: " + format_seconds(run_time, " seconds"))
        return Verdict.FAILED

    def render_summary(self, results: BuildRunResults) -> Verdict:
        total = results.total_count
        run_time = self._elapsed_since(results.start_time)

        with self.sink.batch():
            self.sink.blank()
            self.sink.info("==> Summary:")
            self.sink.info("Total run time: " + format_seconds(run_time, " seconds"))

            if total == 0:
                return Verdict.EMPTY

            self.sink.info(f"Out of {total} steps:")
            if results.success_count > 0:
                self.sink.info(
                    self._paint(f" * {results.success_count} was successful", "green")
                )
            if results.failed_count > 0:
                self.sink.info(self._paint(f" * {results.failed_count} failed", "red"))
            if results.failed_skippable_count > 0:
                self.sink.info(
                    self._paint(
                        f" * {results.failed_skippable_count} failed but was marked as skippable",
                        "yellow",
                    )
                )
            if results.skipped_count > 0:
                self.sink.info(
                    self._paint(f" * {results.skipped_count} was skipped", "blue")
                )

            self.sink.blank()
            if results.failed_count > 0:
                self.sink.fatal("FINISHED but a couple of steps failed - Ouch")
                return Verdict.FAILED

            self.sink.info("DONE - Congrats!!")
            if results.failed_skippable_count > 0:
                self.sink.warning("P.S.: a couple of non important steps failed")
            return Verdict.PASSED

    def render_step_status(self, results: BuildRunResults) -> None:
        with self.sink.batch():
            self.sink.info(
                f"Out of {results.total_count} steps, "
                f"{results.success_count} was successful, "
                f"{results.failed_count} failed, "
                f"{results.failed_skippable_count} failed but was marked as skippable and "
                f"{results.skipped_count} was skipped"
            )
            self.render_step_status_list("Failed steps:", results.failed_steps)
            self.render_step_status_list(
                "Failed but skippable steps:", results.failed_skippable_steps
            )
            self.render_step_status_list("Skipped steps:", results.skipped_steps)

    def render_step_status_list(
        self, header: str, steps: Sequence[StepRunResult]
    ) -> None:
        if len(steps) == 0:
            return

        with self.sink.batch():
            self.sink.info(header)
            for step in steps:
                if step.error:
                    self.sink.info(
                        f" * Step: ({step.step_name}) | error: ({step.error})"
                    )
                else:
                    self.sink.info(f" * Step: ({step.step_name})")
