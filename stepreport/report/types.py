from __future__ import annotations

from datetime import timedelta
from enum import Enum

from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text

DEFAULT_MAX_WIDTH = 50
ELLIPSIS = "..."

_COLOR_STYLES = {
    "green": Style(color="green"),
    "red": Style(color="red"),
    "yellow": Style(color="yellow"),
    "blue": Style(color="blue"),
}


class Verdict(Enum):
    EMPTY = "empty"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def exit_code(self) -> int:
        return 1 if self is Verdict.FAILED else 0


def format_seconds(duration: float | timedelta, suffix: str) -> str:
    seconds = (
        duration.total_seconds() if isinstance(duration, timedelta) else float(duration)
    )
    if seconds > 10.0:
        return f"{seconds:.0f}{suffix}"
    return f"{seconds:.2f}{suffix}"


def truncate_title(title: str, content_len: int, max_width: int) -> str:
    """
    Shorten `title` so a line of `content_len` code points fits `max_width`.

    The ellipsis counts towards the width. When there is no room left for
    any of the title the result is the bare ellipsis.
    """
    if content_len <= max_width:
        return title
    overflow = content_len - max_width
    keep = max(len(title) - overflow - len(ELLIPSIS), 0)
    return title[:keep] + ELLIPSIS


def colorize(text: str, color: str) -> str:
    style = _COLOR_STYLES.get(color)
    if style is None:
        raise KeyError(color)
    return style.render(text, color_system=ColorSystem.STANDARD)


def strip_ansi(text: str) -> str:
    return Text.from_ansi(text).plain


def visible_len(text: str) -> int:
    return len(strip_ansi(text))
