from .loader import load_run
from .types import ConfigError, ReportConfig, RunFile, UnsupportedConfigFormatError

__all__ = [
    "load_run",
    "ReportConfig",
    "RunFile",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
