# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
utils.py — Shared utilities: retry logic, log-file lines and date labels.
"""

import time
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Any


DEFAULT_LOG_PATH = Path("logs/weather_outlook.log")
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 5


def fmt_date(value: date | None) -> str:
    """Format a date as a short human-readable label.

    Args:
        value: Date to format, or None.

    Returns:
        Formatted string like '14 Jul 2024', or '—' for None.
    """
    if value is None:
        return "—"
    return f"{value.day} {value.strftime('%b %Y')}"


def with_retry(
    fn: Callable[..., Any],
    *args: Any,
    label: str = "API call",
    log_path: Path = DEFAULT_LOG_PATH,
    **kwargs: Any,
) -> Any:
    """Call a function up to MAX_ATTEMPTS times, retrying on any exception.

    Only used for the lookups around the estimation pipeline (geocoding);
    the historical collector deliberately makes a single attempt per year.

    Args:
        fn: Callable to invoke.
        *args: Positional arguments forwarded to fn.
        label: Human-readable name for the call, used in warning messages.
        log_path: Path to the log file for recording final failures.
        **kwargs: Keyword arguments forwarded to fn.

    Returns:
        The return value of fn on success.

    Raises:
        RuntimeError: If all MAX_ATTEMPTS attempts raise exceptions.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            if attempt < MAX_ATTEMPTS:
                print(
                    f"[weather] {label} failed (attempt {attempt}/{MAX_ATTEMPTS}): "
                    f"{e}. Retrying in {RETRY_DELAY_SECONDS}s..."
                )
                time.sleep(RETRY_DELAY_SECONDS)
            else:
                msg = f"All {MAX_ATTEMPTS} attempts failed for {label}. Check your internet connection."
                print(f"[weather] {msg}")
                log_error(f"{label}: {e}", log_path=log_path)
                raise RuntimeError(msg) from e


def log_warning(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append a timestamped WARNING line to the log file."""
    _append_log_line("WARNING", message, log_path)


def log_error(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append a timestamped ERROR line to the log file."""
    _append_log_line("ERROR", message, log_path)


def _append_log_line(level: str, message: str, log_path: Path) -> None:
    """Append one ``<timestamp> [LEVEL] message`` line to log_path.

    Args:
        level: Level tag, e.g. 'WARNING' or 'ERROR'.
        message: Text to log.
        log_path: Destination log file path.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{timestamp} [{level}] {message}\n")
    except OSError:
        pass  # Never crash on logging failure
