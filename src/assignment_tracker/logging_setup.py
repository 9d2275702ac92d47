# src/assignment_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tracker.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Console thresholds by logger prefix; the first match wins.
# The refresh loop ticks every minute and would bury the prompt.
_CONSOLE_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("assignment_tracker.tasks.task_scheduler", logging.WARNING),
    ("assignment_tracker.", logging.NOTSET),
)


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the interactive console readable; anything else needs ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        for prefix, threshold in _CONSOLE_THRESHOLDS:
            if record.name.startswith(prefix):
                return record.levelno >= threshold
        return record.levelno >= logging.ERROR


def resolve_level(level: str | int, default: int = logging.INFO) -> int:
    """Accept either a logging constant or a name like "debug"."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


def setup_logging(
    *,
    log_dir: str | Path = ".local/assignment_tracker",
    console_level: str | int = logging.INFO,
    file_level: str | int = logging.DEBUG,
) -> Path:
    """
    Install a filtered stderr handler and a full file log in `log_dir`.

    Replaces whatever handlers the root logger already has, so calling it
    twice does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.DEBUG)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolve_level(console_level))
    console.addFilter(_ConsoleNoiseFilter())

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(resolve_level(file_level, logging.DEBUG))

    for handler in (console, to_file):
        handler.setFormatter(fmt)
        root.addHandler(handler)

    # warnings.warn(...) arrives as 'py.warnings', which the console filter drops below ERROR.
    logging.captureWarnings(True)
    return log_file
