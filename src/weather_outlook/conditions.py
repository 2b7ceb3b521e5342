"""
conditions.py — Classify a (temperature, wind, humidity) triple into one label.

Rules are checked in a fixed order and the first one that matches wins:

    1. wind speed  > wind_speed  → Windy
    2. temperature > very_hot    → VeryHot
    3. temperature < very_cold   → VeryCold
    4. humidity    > humid       → Humid
    5. otherwise                 → Clear

Wind is checked first on purpose: a hot, humid, windy day is reported as
Windy. All comparisons are strict and done on the raw floats.
"""

from dataclasses import dataclass
from enum import Enum

from weather_outlook.models import YearSample


class Condition(str, Enum):
    CLEAR = "Clear"
    WINDY = "Windy"
    VERY_HOT = "VeryHot"
    VERY_COLD = "VeryCold"
    HUMID = "Humid"


@dataclass(frozen=True)
class Thresholds:
    """Classification limits. Units: m/s, °C, °C, %."""

    wind_speed: float = 10.0
    very_hot: float = 35.0
    very_cold: float = 5.0
    humid: float = 80.0


DEFAULT_THRESHOLDS = Thresholds()


def classify(
    temperature: float,
    wind_speed: float,
    humidity: float,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> Condition:
    """Return the first matching condition label for the given values."""
    if wind_speed > thresholds.wind_speed:
        return Condition.WINDY
    if temperature > thresholds.very_hot:
        return Condition.VERY_HOT
    if temperature < thresholds.very_cold:
        return Condition.VERY_COLD
    if humidity > thresholds.humid:
        return Condition.HUMID
    return Condition.CLEAR


def classify_sample(
    sample: YearSample,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> Condition | None:
    """Classify one year, or None if any of the three variables is missing."""
    if sample.temperature is None or sample.wind_speed is None or sample.humidity is None:
        return None
    return classify(sample.temperature, sample.wind_speed, sample.humidity, thresholds)


def condition_histogram(
    samples: list[YearSample],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> dict[str, int]:
    """Count how many years fell into each condition.

    Every label is present in the result, in declaration order, so years
    with no occurrences show up as 0. Years missing any variable are skipped.
    """
    counts = {c.value: 0 for c in Condition}
    for sample in samples:
        label = classify_sample(sample, thresholds)
        if label is not None:
            counts[label.value] += 1
    return counts
