# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
pipeline.py — Run one estimate request end to end.

collect_samples → build_report, with every setting passed in explicitly.
Nothing here is stored between calls, so concurrent requests are independent.
"""

from datetime import date
from pathlib import Path

from weather_outlook.config import DEFAULT_CONFIG, thresholds_from_config
from weather_outlook.history import collect_samples, request_variables
from weather_outlook.models import CalendarDay, Coordinate
from weather_outlook.report import Report, build_report


def estimate(
    coordinate: Coordinate,
    target_date: date,
    location: str | None = None,
    config: dict = DEFAULT_CONFIG,
    lookback_years: int | None = None,
    current_year: int | None = None,
) -> Report:
    """Estimate the expected weather at *coordinate* on *target_date*.

    Args:
        coordinate: Location to estimate for.
        target_date: Only its month and day are used for sampling.
        location: Display name for the report.
        config: Validated configuration dict (see config.py).
        lookback_years: Overrides [history].lookback_years when given.
        current_year: Year the lookback window ends before. Defaults to this year.

    Returns:
        The finished Report.

    Raises:
        ValueError: If the coordinate or window is invalid.
        NoHistoricalDataError: If no year returned any data.
    """
    history = config["history"]
    window = lookback_years if lookback_years is not None else history["lookback_years"]
    include_precipitation = bool(history.get("precipitation", False))

    samples = collect_samples(
        coordinate,
        CalendarDay(target_date.month, target_date.day),
        lookback_years=window,
        include_precipitation=include_precipitation,
        timeout=float(history["timeout"]),
        current_year=current_year,
        log_path=Path(config["log"]["path"]),
    )

    return build_report(
        samples,
        coordinate,
        target_date,
        location=location,
        variables=request_variables(include_precipitation),
        thresholds=thresholds_from_config(config),
        lookback_years=window,
    )
