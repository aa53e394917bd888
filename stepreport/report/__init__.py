from .renderer import Renderer
from .sink import LoggerSink, MemorySink, ReportSink
from .types import DEFAULT_MAX_WIDTH, Verdict, format_seconds, truncate_title

__all__ = [
    "Renderer",
    "ReportSink",
    "LoggerSink",
    "MemorySink",
    "Verdict",
    "DEFAULT_MAX_WIDTH",
    "format_seconds",
    "truncate_title",
]
