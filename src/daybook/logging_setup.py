# src/daybook/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers under these prefixes only reach the console at WARNING and above.
# Snapshot loads and SQLite setup log on every start; the file still has them.
QUIET_PREFIXES: tuple[str, ...] = ("daybook.storage.",)


def parse_level(value: int | str | None, default: int = logging.INFO) -> int:
    """Accept 10, "10", "debug" or "DEBUG"; anything unknown maps to default."""
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


class _BoardConsoleFilter(logging.Filter):
    """Let board and CLI records through; hold back storage chatter and foreign loggers."""

    def __init__(self, quiet_prefixes: tuple[str, ...] = QUIET_PREFIXES) -> None:
        super().__init__()
        self.quiet_prefixes = quiet_prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("daybook."):
            # warnings.warn output lands here as "py.warnings"
            return record.levelno >= logging.ERROR
        if name.startswith(self.quiet_prefixes):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/daybook",
    app_name: str = "daybook",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
) -> Path:
    """
    Route every record to <log_dir>/<app_name>.log and a filtered stderr stream.

    Replaces whatever handlers the root logger had, so calling it twice does not
    double the output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{app_name or 'daybook'}.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(console_level))
    console.setFormatter(formatter)
    console.addFilter(_BoardConsoleFilter())
    root.addHandler(console)

    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(parse_level(file_level, default=logging.DEBUG))
    logfile.setFormatter(formatter)
    root.addHandler(logfile)

    logging.captureWarnings(True)
    return log_file
