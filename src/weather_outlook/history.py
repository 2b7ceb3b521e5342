# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
history.py — Collect same-calendar-day observations from NASA POWER.

One request per year is sent for the single requested day; the requests
run concurrently and every one of them is waited for before returning.
A year whose request fails is dropped with a warning, a year that is
missing one variable is kept with that field left as None.

API docs: https://power.larc.nasa.gov/docs/services/api/temporal/daily/
"""

import math
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path

import requests

from weather_outlook.models import (
    CORE_VARIABLES,
    PRECIPITATION,
    CalendarDay,
    Coordinate,
    YearSample,
)
from weather_outlook.utils import DEFAULT_LOG_PATH, log_warning

POWER_API_URL = "https://power.larc.nasa.gov/api/temporal/daily/point"

# NASA POWER parameter name for each YearSample field
PARAMETERS = {
    "temperature":   "T2M",
    "wind_speed":    "WS2M",
    "humidity":      "RH2M",
    "precipitation": "PRECTOTCORR",
}

DEFAULT_FILL_VALUE = -999.0
DEFAULT_TIMEOUT = 30.0


class FetchFailure(RuntimeError):
    """The request for one year failed outright; that year is dropped."""

    def __init__(self, year: int, reason: str):
        self.year = year
        self.reason = reason
        super().__init__(f"Fetch failed for {year}: {reason}")


class NoHistoricalDataError(RuntimeError):
    """No year produced a sample, so there is nothing to estimate from."""


def year_range(lookback_years: int, current_year: int) -> list[int]:
    """Return the years [current_year - lookback_years, current_year - 1].

    Raises:
        ValueError: If lookback_years is smaller than 1.
    """
    if lookback_years < 1:
        raise ValueError(f"Lookback window must be at least 1 year, got {lookback_years}")
    return list(range(current_year - lookback_years, current_year))


def request_variables(include_precipitation: bool = False) -> tuple[str, ...]:
    """Variables to request: the three core ones, plus precipitation if asked."""
    if include_precipitation:
        return CORE_VARIABLES + (PRECIPITATION,)
    return CORE_VARIABLES


def fetch_year_sample(
    coordinate: Coordinate,
    day: CalendarDay,
    year: int,
    variables: tuple[str, ...] = CORE_VARIABLES,
    timeout: float = DEFAULT_TIMEOUT,
) -> YearSample:
    """Fetch the observations for *day* in *year* with a single request.

    Raises:
        FetchFailure: On transport or HTTP errors, an undecodable body, or a
            response without a parameter block.
    """
    stamp = day.in_year(year)
    params = {
        "parameters": ",".join(PARAMETERS[v] for v in variables),
        "community": "RE",
        "longitude": coordinate.longitude,
        "latitude": coordinate.latitude,
        "start": stamp,
        "end": stamp,
        "format": "JSON",
    }

    try:
        r = requests.get(POWER_API_URL, params=params, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        raise FetchFailure(year, str(e)) from e

    sample = parse_point_response(data, year, variables)
    if sample is None:
        raise FetchFailure(year, "response has no parameter data")
    return sample


def parse_point_response(
    data: dict,
    year: int,
    variables: tuple[str, ...] = CORE_VARIABLES,
) -> YearSample | None:
    """Turn a NASA POWER single-day response into a YearSample.

    Each parameter maps a single 'YYYYMMDD' key to its value; that value is
    taken as the year's sample. Absent parameters, fill values and non-finite
    numbers (NaN, inf) become None.

    Returns:
        The sample, or None if the response carries no parameter block at all.
    """
    if not isinstance(data, dict):
        return None
    properties = data.get("properties") or {}
    parameter = properties.get("parameter") if isinstance(properties, dict) else None
    if not isinstance(parameter, dict):
        return None

    header = data.get("header")
    fill_value = DEFAULT_FILL_VALUE
    if isinstance(header, dict):
        try:
            fill_value = float(header.get("fill_value", DEFAULT_FILL_VALUE))
        except (TypeError, ValueError):
            pass

    values = {}
    for variable in variables:
        values[variable] = _single_value(parameter.get(PARAMETERS[variable]), fill_value)
    return YearSample(year=year, **values)


def _single_value(series, fill_value: float) -> float | None:
    """Return the value at the only key of a time-keyed mapping, or None."""
    if not isinstance(series, dict) or not series:
        return None
    raw = next(iter(series.values()))
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value in (fill_value, DEFAULT_FILL_VALUE):
        return None
    return value


def collect_samples(
    coordinate: Coordinate,
    day: CalendarDay,
    lookback_years: int,
    include_precipitation: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
    current_year: int | None = None,
    log_path: Path = DEFAULT_LOG_PATH,
) -> list[YearSample]:
    """Collect one sample per year for *day* over the lookback window.

    Args:
        coordinate: Location to sample.
        day: Calendar day to sample in every year.
        lookback_years: Number of preceding years to request.
        include_precipitation: Also request precipitation.
        timeout: Per-request timeout in seconds.
        current_year: Year the window ends before. Defaults to this year.
        log_path: Log file for dropped years and variable gaps.

    Returns:
        Samples sorted ascending by year, one per year that answered.

    Raises:
        ValueError: If the coordinate, day or window is invalid.
        NoHistoricalDataError: If every year failed.
    """
    coordinate.validate()
    day.validate()
    if current_year is None:
        current_year = date.today().year
    years = year_range(lookback_years, current_year)
    variables = request_variables(include_precipitation)

    # One thread per year so every request is in flight at once.
    # Leaving the with block waits for every future, failed or not.
    with ThreadPoolExecutor(max_workers=len(years)) as pool:
        futures = {
            year: pool.submit(fetch_year_sample, coordinate, day, year, variables, timeout)
            for year in years
        }

    samples = []
    for year, future in futures.items():
        error = future.exception()
        if error is not None:
            _warn(f"Dropping {year}: {error}", log_path)
            continue
        sample = future.result()
        gaps = sample.missing(variables)
        if gaps:
            _warn(f"No {', '.join(gaps)} data for {year}", log_path)
        samples.append(sample)

    if not samples:
        raise NoHistoricalDataError(
            f"No historical data for {day.month:02d}-{day.day:02d} at "
            f"({coordinate.latitude}, {coordinate.longitude}) "
            f"in {years[0]}–{years[-1]}."
        )

    return sorted(samples, key=lambda s: s.year)


def _warn(message: str, log_path: Path) -> None:
    print(f"[history] {message}")
    log_warning(message, log_path=log_path)
