from __future__ import annotations

import argparse

from stepreport.config.types import LOG_LEVELS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stepreport")

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Minimum level of report lines to print (overrides the results file)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Print plain text without ANSI colors",
    )
    parser.add_argument(
        "--max-width",
        type=int,
        default=None,
        help="Maximum width of the step boxes (overrides the results file)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # replay
    replay = subparsers.add_parser(
        "replay", help="Print the full run log: step boxes, status and summary"
    )
    replay.add_argument("results", help="Path to results file")

    # summary
    summary = subparsers.add_parser("summary", help="Print the run summary")
    summary.add_argument("results", help="Path to results file")

    # status
    status = subparsers.add_parser("status", help="List failed and skipped steps")
    status.add_argument("results", help="Path to results file")

    return parser
