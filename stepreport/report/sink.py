from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from .types import strip_ansi


class ReportSink(ABC):
    """
    Destination for report lines.

    Every render call wraps its writes in `batch()`, which holds a
    re-entrant lock so lines of one call stay contiguous. `fatal` records a
    line at the highest level and returns; stopping the process is left to
    the caller.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @contextmanager
    def batch(self) -> Iterator[None]:
        with self._lock:
            yield

    @abstractmethod
    def write(self, level: int, text: str) -> None:
        ...

    def flush(self) -> None:
        pass

    def info(self, text: str) -> None:
        self.write(logging.INFO, text)

    def warning(self, text: str) -> None:
        self.write(logging.WARNING, text)

    def error(self, text: str) -> None:
        self.write(logging.ERROR, text)

    def fatal(self, text: str) -> None:
        self.write(logging.CRITICAL, text)

    def blank(self) -> None:
        self.write(logging.INFO, "")


class LoggerSink(ReportSink):
    def __init__(self, logger: logging.Logger) -> None:
        super().__init__()
        self.logger = logger

    def write(self, level: int, text: str) -> None:
        with self._lock:
            self.logger.log(level, text)

    def flush(self) -> None:
        handlers = list(self.logger.handlers)
        if self.logger.propagate:
            handlers.extend(logging.getLogger().handlers)
        for handler in handlers:
            handler.flush()


class MemorySink(ReportSink):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[tuple[int, str]] = []

    def write(self, level: int, text: str) -> None:
        with self._lock:
            self.records.append((level, text))

    def lines(self) -> list[str]:
        return [text for _, text in self.records]

    def plain_lines(self) -> list[str]:
        return [strip_ansi(text) for _, text in self.records]

    def levels(self) -> list[int]:
        return [level for level, _ in self.records]
