"""Append-only error log used by the DER codec."""

from __future__ import annotations

import inspect
import os
import sys
from datetime import datetime
from enum import IntEnum
from pathlib import Path

LOG_FILE_NAME = "itderlog.log"
_TIME_FORMAT = "%Y.%m.%d %H:%M:%S"


class LogLevel(IntEnum):
    """Severity of a log entry; NOLOG suppresses writing."""

    NOLOG = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


def default_log_path() -> Path:
    """Return the log file used when no explicit path is given."""
    if sys.platform == "win32":
        return Path("d:\\keymng\\code\\log") / LOG_FILE_NAME
    home = os.environ.get("HOME") or str(Path.home())
    return Path(home) / "log" / LOG_FILE_NAME


def format_entry(level, status, message, file, line, when=None) -> str:
    """Render one log line: time, level, status, message, file and line."""
    if when is None:
        when = datetime.now()
    level_name = LogLevel(level).name
    status_text = f"[ERRNO is {status}] " if status else "[SUCCESS] "
    return (
        f"[{when.strftime(_TIME_FORMAT)}] [{level_name}] {status_text}"
        f"{message} [{file}] [{line}]\n"
    )


def der_log(level, status, message, file=None, line=None, path=None):
    """Append an entry to the log file and return it.

    Nothing is written for ``LogLevel.NOLOG``. If the file cannot be opened
    the entry is dropped silently and ``None`` is returned.
    """
    level = LogLevel(level)
    if level is LogLevel.NOLOG:
        return None

    if file is None or line is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if file is None:
            file = caller.f_code.co_filename if caller is not None else ""
        if line is None:
            line = caller.f_lineno if caller is not None else 0
        del frame, caller

    entry = format_entry(level, status, message, file, line)
    target = Path(path) if path is not None else default_log_path()
    try:
        with open(target, "a", encoding="utf-8") as handle:
            handle.write(entry)
    except OSError:
        return None
    return entry