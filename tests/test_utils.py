# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for utils.py — retry logic, log lines and date labels."""

import pytest
from datetime import date
from unittest.mock import patch, MagicMock
from pathlib import Path

from weather_outlook.utils import fmt_date, log_error, log_warning, with_retry


# ---------------------------------------------------------------------------
# with_retry
# ---------------------------------------------------------------------------

def test_retry_succeeds_on_first_attempt():
    """A function that succeeds on the first call should return its value."""
    fn = MagicMock(return_value=42)
    result = with_retry(fn, label="test")
    assert result == 42
    assert fn.call_count == 1


def test_retry_succeeds_on_second_attempt():
    """A function that fails once then succeeds should return the success value."""
    fn = MagicMock(side_effect=[RuntimeError("fail"), 99])
    with patch("weather_outlook.utils.time.sleep"):
        result = with_retry(fn, label="test")
    assert result == 99
    assert fn.call_count == 2


def test_retry_exhausts_all_attempts_and_raises(tmp_path):
    """A function that always fails should raise RuntimeError after MAX_ATTEMPTS."""
    fn = MagicMock(side_effect=RuntimeError("always fails"))
    with patch("weather_outlook.utils.time.sleep"):
        with pytest.raises(RuntimeError, match="All 3 attempts failed"):
            with_retry(fn, label="test", log_path=tmp_path / "log.txt")
    assert fn.call_count == 3


def test_retry_logs_final_failure(tmp_path):
    fn = MagicMock(side_effect=RuntimeError("boom"))
    log_path = tmp_path / "log.txt"
    with patch("weather_outlook.utils.time.sleep"):
        with pytest.raises(RuntimeError):
            with_retry(fn, label="Geocoding API", log_path=log_path)
    assert "[ERROR] Geocoding API: boom" in log_path.read_text()


def test_retry_sleeps_between_attempts(tmp_path):
    """Retry should sleep between failed attempts (but not after the last)."""
    fn = MagicMock(side_effect=[RuntimeError("fail")] * 3)
    with patch("weather_outlook.utils.time.sleep") as mock_sleep:
        with pytest.raises(RuntimeError):
            with_retry(fn, label="test", log_path=tmp_path / "log.txt")
    assert mock_sleep.call_count == 2


# ---------------------------------------------------------------------------
# log_warning / log_error
# ---------------------------------------------------------------------------

def test_log_lines_are_appended_with_level(tmp_path):
    log_path = tmp_path / "nested" / "log.txt"
    log_warning("first", log_path=log_path)
    log_error("second", log_path=log_path)
    lines = log_path.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("[WARNING] first")
    assert lines[1].endswith("[ERROR] second")


def test_log_never_raises_on_unwritable_path():
    log_warning("ignored", log_path=Path("/dev/null/not-a-dir/log.txt"))


# ---------------------------------------------------------------------------
# fmt_date
# ---------------------------------------------------------------------------

def test_fmt_date():
    assert fmt_date(date(2025, 7, 4)) == "4 Jul 2025"


def test_fmt_date_none():
    assert fmt_date(None) == "—"
