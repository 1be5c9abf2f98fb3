"""Tests for timer file parsing and settings assembly."""
from __future__ import annotations

import os

import pytest

from timetracker.config import (
    ConfigError, CountUnit, Settings, TimerEntry, loadTimers, parseLine,
)


class TestParseLine:
    def test_minutes(self) -> None:
        assert parseLine("Lunch=30M") == TimerEntry(name="Lunch", seconds=1800)

    def test_trailing_newline_stripped(self) -> None:
        assert parseLine("Lunch=30M\n") == TimerEntry(name="Lunch", seconds=1800)

    def test_comment_and_blank_lines(self) -> None:
        assert parseLine("#comment") is None
        assert parseLine("# Work=25M") is None
        assert parseLine("") is None
        assert parseLine("\n") is None

    def test_name_keeps_spaces(self) -> None:
        entry = parseLine("Deep work [A]=90M")
        assert entry is not None
        assert entry.name == "Deep work [A]"

    @pytest.mark.parametrize(
        "line",
        ["BadLine", "Lunch=30", "=30M", "Lunch=M", "Lunch=-5M", "Lunch=30M extra", "a=b=30M"],
    )
    def test_malformed(self, line: str) -> None:
        with pytest.raises(ConfigError, match="malformed"):
            parseLine(line)

    def test_error_carries_line_number(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            parseLine("BadLine", line_no=7)
        assert exc_info.value.line_no == 7
        assert "line 7" in str(exc_info.value)

    def test_name_length_limit(self) -> None:
        assert parseLine("x" * 79 + "=1M") is not None
        with pytest.raises(ConfigError, match="invalid timer line"):
            parseLine("x" * 80 + "=1M")

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(ConfigError, match="malformed"):
            parseLine("Work=\u0662\u0665M")

    def test_oversized_count(self) -> None:
        with pytest.raises(ConfigError, match="malformed") as exc_info:
            parseLine("Work=" + "9" * 5000 + "M", line_no=4)
        assert exc_info.value.line_no == 4

    def test_nine_digit_count_accepted(self) -> None:
        entry = parseLine("Long=999999999M")
        assert entry is not None
        assert entry.seconds == 999999999 * 60

    def test_seconds_unit(self) -> None:
        assert parseLine("Tea=180", CountUnit.SECONDS) == TimerEntry(name="Tea", seconds=180)
        assert parseLine("Tea=180M", CountUnit.SECONDS) == TimerEntry(name="Tea", seconds=180)


class TestLoadTimers:
    def test_loads_in_file_order(self, write_conf) -> None:
        path = write_conf("# pomodoro\nWork=25M\n\nBreak=5M\n")
        assert loadTimers(path) == [
            TimerEntry(name="Work", seconds=1500),
            TimerEntry(name="Break", seconds=300),
        ]

    def test_reports_failing_line(self, write_conf) -> None:
        path = write_conf("Work=25M\n# ok\nBroken\n")
        with pytest.raises(ConfigError) as exc_info:
            loadTimers(path)
        assert exc_info.value.line_no == 3

    def test_capacity_exceeded(self, write_conf) -> None:
        path = write_conf("".join(f"t{i}=1M\n" for i in range(10)))
        with pytest.raises(ConfigError, match="too many timers"):
            loadTimers(path, capacity=9)
        assert len(loadTimers(path, capacity=20)) == 10

    def test_capacity_exactly_reached(self, write_conf) -> None:
        path = write_conf("".join(f"t{i}=1M\n" for i in range(9)))
        assert len(loadTimers(path, capacity=9)) == 9

    def test_oversized_count_names_line(self, write_conf) -> None:
        path = write_conf("Work=25M\nLong=" + "9" * 5000 + "M\n")
        with pytest.raises(ConfigError) as exc_info:
            loadTimers(path)
        assert exc_info.value.line_no == 2

    def test_undecodable_line_is_located(self, tmp_path) -> None:
        path = tmp_path / "timers.conf"
        path.write_bytes(b"Work=25M\n# ok\nBr\xffak=5M\n")
        with pytest.raises(ConfigError, match="failed to decode") as exc_info:
            loadTimers(str(path))
        assert exc_info.value.line_no == 3

    def test_crlf_line_endings(self, write_conf) -> None:
        path = write_conf("Work=25M\r\nBreak=5M\r\n")
        assert [e.name for e in loadTimers(path)] == ["Work", "Break"]

    def test_no_timers(self, write_conf) -> None:
        path = write_conf("# nothing here\n\n")
        with pytest.raises(ConfigError, match="no timers found"):
            loadTimers(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="failed to read"):
            loadTimers(str(tmp_path / "absent.conf"))


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings.fromEnv({}, conf_file="a.conf")
        assert s.conf_file == "a.conf"
        assert s.color is True
        assert s.unit is CountUnit.MINUTES
        assert s.capacity == 20
        assert s.log_file is None

    def test_environment(self) -> None:
        s = Settings.fromEnv(
            {"TIMETRACKER_UNIT": "Seconds", "NO_COLOR": "1"}, conf_file="a.conf",
        )
        assert s.unit is CountUnit.SECONDS
        assert s.color is False

    def test_empty_no_color_keeps_color(self) -> None:
        assert Settings.fromEnv({"NO_COLOR": ""}, conf_file="a.conf").color is True

    def test_overrides_win_and_none_is_ignored(self) -> None:
        s = Settings.fromEnv(
            {"TIMETRACKER_UNIT": "seconds"},
            conf_file="a.conf", unit=CountUnit.MINUTES, capacity=None,
        )
        assert s.unit is CountUnit.MINUTES
        assert s.capacity == 20

    def test_reads_dotenv_from_working_directory(self, tmp_path, monkeypatch) -> None:
        (tmp_path / ".env").write_text("TIMETRACKER_UNIT=seconds\nNO_COLOR=1\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(os, "environ", {})
        s = Settings.fromEnv(conf_file="a.conf")
        assert s.unit is CountUnit.SECONDS
        assert s.color is False

    def test_bad_capacity(self) -> None:
        with pytest.raises(ValueError):
            Settings.fromEnv({}, conf_file="a.conf", capacity=12)
