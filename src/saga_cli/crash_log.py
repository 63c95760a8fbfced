"""Crash log collected from ``saga_cli`` log records.

Nothing is written while a command succeeds. When a command crashes the
buffered records, tracebacks included, are saved next to the config so the
user can attach them to a bug report.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from saga_cli.config import get_saga_home

ROOT_LOGGER = "saga_cli"


def default_crash_log_path() -> Path:
    return get_saga_home() / "crash.log"


class CrashLog(logging.Handler):
    """Buffer log records in memory and dump them on demand."""

    def __init__(self, path: Path | None = None, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.path = path or default_crash_log_path()
        self.messages: list[str] = []
        self._previous_level: int | None = None
        self.setFormatter(logging.Formatter("%(name)s %(levelname)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
            self.messages.append(f"{timestamp}\n{self.format(record)}")
        except Exception:
            self.handleError(record)

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("\n".join(self.messages) + "\n", encoding="utf-8")
        return self.path

    def install(self, logger_name: str = ROOT_LOGGER) -> "CrashLog":
        logger = logging.getLogger(logger_name)
        logger.addHandler(self)
        if logger.getEffectiveLevel() > self.level:
            self._previous_level = logger.level
            logger.setLevel(self.level)
        return self

    def uninstall(self, logger_name: str = ROOT_LOGGER) -> None:
        logger = logging.getLogger(logger_name)
        logger.removeHandler(self)
        if self._previous_level is not None:
            logger.setLevel(self._previous_level)
            self._previous_level = None
