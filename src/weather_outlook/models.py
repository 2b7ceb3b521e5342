# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
models.py — Value types shared by the collector, the analysis and the report.

All types are frozen dataclasses: a sample or an estimate never changes
after the step that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass


# Variable names as used on YearSample, in report order.
TEMPERATURE = "temperature"
WIND_SPEED = "wind_speed"
HUMIDITY = "humidity"
PRECIPITATION = "precipitation"

CORE_VARIABLES = (TEMPERATURE, WIND_SPEED, HUMIDITY)
ALL_VARIABLES = CORE_VARIABLES + (PRECIPITATION,)

UNITS = {
    TEMPERATURE:   "°C",
    WIND_SPEED:    "m/s",
    HUMIDITY:      "%",
    PRECIPITATION: "mm",
}


@dataclass(frozen=True)
class Coordinate:
    """A point on the globe in signed decimal degrees."""

    latitude: float
    longitude: float

    def validate(self) -> None:
        """Raise ValueError if either component is outside its range."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude must be within [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude must be within [-180, 180], got {self.longitude}")


@dataclass(frozen=True)
class CalendarDay:
    """A month/day pair without a year.

    Day-in-month is not checked against the month: 31 April or 29 February
    are accepted and simply fail upstream for the years where they do not exist.
    """

    month: int
    day: int

    def validate(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be within [1, 12], got {self.month}")
        if not 1 <= self.day <= 31:
            raise ValueError(f"Day must be within [1, 31], got {self.day}")

    def in_year(self, year: int) -> str:
        """Return the compact 'YYYYMMDD' string for this day in *year*."""
        return f"{year:04d}{self.month:02d}{self.day:02d}"


@dataclass(frozen=True)
class YearSample:
    """Observed values for one calendar day in one year.

    A field is None when the source had no value for that variable.
    """

    year: int
    temperature: float | None = None
    wind_speed: float | None = None
    humidity: float | None = None
    precipitation: float | None = None

    def value(self, variable: str) -> float | None:
        """Return the value of *variable* ('temperature', 'wind_speed', ...)."""
        if variable not in ALL_VARIABLES:
            raise ValueError(f"Unknown variable: {variable!r}")
        return getattr(self, variable)

    def missing(self, variables: tuple[str, ...] = CORE_VARIABLES) -> list[str]:
        """Names of the requested variables that are absent for this year."""
        return [v for v in variables if self.value(v) is None]


@dataclass(frozen=True)
class TrendModel:
    """Least-squares line ``value = slope * year + intercept``."""

    slope: float
    intercept: float

    def project(self, year: int) -> float:
        return self.slope * year + self.intercept


@dataclass(frozen=True)
class VariableEstimate:
    """Headline estimate for one variable.

    ``value`` is the mean of the weighted average and the trend projection,
    or the weighted average alone when ``trend_available`` is False.
    """

    value: float
    weighted_average: float
    projection: float | None
    slope: float | None
    intercept: float | None
    projection_year: int | None
    sample_count: int

    @property
    def trend_available(self) -> bool:
        return self.projection is not None
