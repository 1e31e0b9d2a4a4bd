import sys
from datetime import datetime

import pytest

from workbench.derlog import (
    LOG_FILE_NAME,
    LogLevel,
    default_log_path,
    der_log,
    format_entry,
)

WHEN = datetime(2024, 1, 2, 3, 4, 5)


def test_format_entry_with_error_status():
    entry = format_entry(LogLevel.ERROR, 201, "boom", "x.c", 12, WHEN)
    assert entry == "[2024.01.02 03:04:05] [ERROR] [ERRNO is 201] boom [x.c] [12]\n"


def test_format_entry_with_zero_status_is_success():
    entry = format_entry(LogLevel.INFO, 0, "ok", "y.c", 7, WHEN)
    assert entry == "[2024.01.02 03:04:05] [INFO] [SUCCESS] ok [y.c] [7]\n"


def test_format_entry_accepts_plain_int_level():
    entry = format_entry(3, 5, "msg", "f", 1, WHEN)
    assert "[WARNING] " in entry
    assert "[ERRNO is 5] " in entry


def test_format_entry_rejects_unknown_level():
    with pytest.raises(ValueError):
        format_entry(9, 0, "m", "f", 1, WHEN)


def test_format_entry_defaults_to_now():
    entry = format_entry(LogLevel.DEBUG, 0, "m", "f", 1)
    stamp = entry[1:20]
    parsed = datetime.strptime(stamp, "%Y.%m.%d %H:%M:%S")
    assert abs((datetime.now() - parsed).total_seconds()) < 120


def test_der_log_appends(tmp_path):
    target = tmp_path / "out.log"
    first = der_log(LogLevel.ERROR, 202, "first", "a.c", 1, target)
    second = der_log(LogLevel.DEBUG, 0, "second", "b.c", 2, target)
    content = target.read_text(encoding="utf-8")
    assert content == first + second
    assert content.count("\n") == 2


def test_der_log_nolog_writes_nothing(tmp_path):
    target = tmp_path / "out.log"
    assert der_log(LogLevel.NOLOG, 1, "hidden", "a.c", 1, target) is None
    assert not target.exists()


def test_der_log_missing_directory_is_silent(tmp_path):
    target = tmp_path / "missing" / "out.log"
    assert der_log(LogLevel.ERROR, 1, "lost", "a.c", 1, target) is None
    assert not target.exists()


def test_der_log_defaults_to_caller_location(tmp_path):
    target = tmp_path / "out.log"
    entry = der_log(LogLevel.WARNING, 0, "here", path=target)
    assert "test_derlog.py" in entry
    assert target.read_text(encoding="utf-8") == entry


def test_default_log_path_uses_home(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_log_path() == tmp_path / "log" / LOG_FILE_NAME


def test_default_log_path_on_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    path = default_log_path()
    assert path.name == LOG_FILE_NAME
    assert str(path).startswith("d:")


def test_der_log_uses_default_path(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "log").mkdir()
    entry = der_log(LogLevel.ERROR, 204, "tag", "c.c", 3)
    written = (tmp_path / "log" / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert written == entry