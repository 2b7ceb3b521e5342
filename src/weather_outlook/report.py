# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
report.py — Assemble the estimate report and serialize it.

build_report() is a pure function of its arguments: no network, no clock,
no rendering. The same samples always produce the same report and the
same JSON text.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import date
from pathlib import Path
from types import MappingProxyType

from weather_outlook.analysis import combine_estimate
from weather_outlook.conditions import (
    DEFAULT_THRESHOLDS,
    Condition,
    Thresholds,
    classify,
    condition_histogram,
)
from weather_outlook.history import NoHistoricalDataError
from weather_outlook.models import (
    CORE_VARIABLES,
    HUMIDITY,
    TEMPERATURE,
    WIND_SPEED,
    Coordinate,
    VariableEstimate,
    YearSample,
)


@dataclass(frozen=True)
class Report:
    location: str
    coordinate: Coordinate
    date: date
    variables: tuple[str, ...]
    estimates: Mapping[str, VariableEstimate | None]
    yearly: tuple[YearSample, ...]
    histogram: Mapping[str, int]
    condition: Condition | None
    lookback_years: int | None = None

    def __post_init__(self):
        # Read-only views, so a built report cannot be edited in place.
        object.__setattr__(self, "estimates", MappingProxyType(dict(self.estimates)))
        object.__setattr__(self, "histogram", MappingProxyType(dict(self.histogram)))

    def __reduce__(self):
        # mappingproxy does not pickle; rebuild from plain dicts instead.
        values = []
        for f in fields(self):
            value = getattr(self, f.name)
            values.append(dict(value) if isinstance(value, MappingProxyType) else value)
        return (type(self), tuple(values))

    @property
    def trend_slopes(self) -> dict[str, float | None]:
        return {
            v: (e.slope if e is not None else None)
            for v, e in self.estimates.items()
        }

    @property
    def trend_unavailable(self) -> list[str]:
        """Variables estimated from the weighted average alone."""
        return [v for v, e in self.estimates.items() if e is not None and not e.trend_available]

    @property
    def missing_variables(self) -> list[str]:
        """Variables with no value in any year."""
        return [v for v, e in self.estimates.items() if e is None]

    def to_dict(self) -> dict:
        """Plain dict of the report, ready for json.dumps."""
        return {
            "location": self.location,
            "coordinates": {
                "latitude": self.coordinate.latitude,
                "longitude": self.coordinate.longitude,
            },
            "date": self.date.isoformat(),
            "lookback_years": self.lookback_years,
            "condition": self.condition.value if self.condition is not None else None,
            "estimates": {
                v: _estimate_dict(e) for v, e in self.estimates.items()
            },
            "trend_slopes": self.trend_slopes,
            "trend_unavailable": self.trend_unavailable,
            "no_signal": self.missing_variables,
            "yearly_data": [
                {"year": s.year, **{v: s.value(v) for v in self.variables}}
                for s in self.yearly
            ],
            "condition_counts": dict(self.histogram),
        }


def _estimate_dict(estimate: VariableEstimate | None) -> dict | None:
    if estimate is None:
        return None
    return {
        "value":            estimate.value,
        "weighted_average": estimate.weighted_average,
        "projection":       estimate.projection,
        "projection_year":  estimate.projection_year,
        "slope":            estimate.slope,
        "intercept":        estimate.intercept,
        "trend_available":  estimate.trend_available,
        "sample_count":     estimate.sample_count,
    }


def build_report(
    samples: list[YearSample],
    coordinate: Coordinate,
    target_date: date,
    location: str | None = None,
    variables: tuple[str, ...] = CORE_VARIABLES,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    lookback_years: int | None = None,
) -> Report:
    """Build the report for *target_date* from the collected samples.

    Args:
        samples: Samples ascending by year (as returned by collect_samples).
        coordinate: Location the samples were taken at.
        target_date: The date the user asked about.
        location: Display name; defaults to 'lat, lon'.
        variables: Variables to estimate.
        thresholds: Classification limits.
        lookback_years: Size of the window the samples came from, if known.

    Returns:
        A Report. The overall condition is None when temperature, wind or
        humidity has no estimate.

    Raises:
        NoHistoricalDataError: If samples is empty.
        ValueError: If samples are not strictly ascending by year.
    """
    if not samples:
        raise NoHistoricalDataError("Cannot build a report from an empty sample list")
    years = [s.year for s in samples]
    if any(a >= b for a, b in zip(years, years[1:])):
        raise ValueError("Samples must be sorted ascending by year without duplicates")

    estimates = {v: combine_estimate(samples, v) for v in variables}

    condition = None
    headline = [estimates.get(v) for v in (TEMPERATURE, WIND_SPEED, HUMIDITY)]
    if all(e is not None for e in headline):
        temp, wind, humidity = (e.value for e in headline)
        condition = classify(temp, wind, humidity, thresholds)

    return Report(
        location=location or f"{coordinate.latitude}, {coordinate.longitude}",
        coordinate=coordinate,
        date=target_date,
        variables=tuple(variables),
        estimates=estimates,
        yearly=tuple(samples),
        histogram=condition_histogram(samples, thresholds),
        condition=condition,
        lookback_years=lookback_years,
    )


def report_to_json(report: Report) -> str:
    """Serialize a report as indented JSON text."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def export_filename(report: Report) -> str:
    """File name for a JSON export, e.g. 'Paris_2024-07-14_weather.json'."""
    safe_location = re.sub(r"[^\w\-. ]+", "_", report.location or "location")
    safe_date = re.sub(r"[^\w\-. ]+", "_", report.date.isoformat())
    return f"{safe_location}_{safe_date}_weather.json"


def write_report_json(report: Report, directory: Path = Path(".")) -> Path:
    """Write the report as JSON into *directory* and return the file path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(report)
    path.write_text(report_to_json(report) + "\n", encoding="utf-8")
    return path
