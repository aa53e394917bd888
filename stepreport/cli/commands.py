from __future__ import annotations

import argparse
import sys

from stepreport.config import ConfigError, ReportConfig, load_run
from stepreport.config.loader import MIN_WIDTH
from stepreport.report import LoggerSink, Renderer, Verdict

from .args import build_parser
from .logging import configure_logging


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)

        match args.command:
            case "replay":
                return cmd_replay(args)
            case "summary":
                return cmd_summary(args)
            case "status":
                return cmd_status(args)
            case _:
                return 2

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_replay(args: argparse.Namespace) -> int:
    run = load_run(args.results)
    renderer, sink = _renderer_for(args, run.report)

    renderer.render_workflow_header(run.workflow)
    for index, step in enumerate(run.steps, start=1):
        renderer.render_step_header(step.step_name, index)
        renderer.render_step_result(step)

    if run.fatal_error is not None:
        verdict = renderer.render_build_failed(run.results.start_time, run.fatal_error)
        return _finish(sink, verdict)

    renderer.render_step_status(run.results)
    verdict = renderer.render_summary(run.results)
    return _finish(sink, verdict)


def cmd_summary(args: argparse.Namespace) -> int:
    run = load_run(args.results)
    renderer, sink = _renderer_for(args, run.report)
    verdict = renderer.render_summary(run.results)
    return _finish(sink, verdict)


def cmd_status(args: argparse.Namespace) -> int:
    run = load_run(args.results)
    renderer, sink = _renderer_for(args, run.report)
    renderer.render_step_status(run.results)
    return _finish(sink, Verdict.PASSED)


def _renderer_for(
    args: argparse.Namespace, report: ReportConfig
) -> tuple[Renderer, LoggerSink]:
    max_width = report.max_width if args.max_width is None else args.max_width
    if max_width < MIN_WIDTH:
        raise ConfigError(f"--max-width must be at least {MIN_WIDTH}")

    logger = configure_logging(args.log_level or report.log_level)
    sink = LoggerSink(logger)
    color = report.color and not args.no_color
    return Renderer(sink, max_width=max_width, color=color), sink


def _finish(sink: LoggerSink, verdict: Verdict) -> int:
    # Everything must be written before the caller exits the process.
    sink.flush()
    return verdict.exit_code


def main() -> None:
    sys.exit(run_cli())
