# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
analysis.py — Weighted averages, trend lines and combined estimates.

All calculations use the Python standard library only (no numpy/scipy).
Linear regression uses the closed-form OLS formula in centered form.

Every function takes the full sample list (ascending by year) and the name
of one variable, so a year missing that variable is skipped per variable.
"""

from __future__ import annotations

from weather_outlook.models import TrendModel, VariableEstimate, YearSample


def present_pairs(samples: list[YearSample], variable: str) -> list[tuple[int, float]]:
    """Return (year, value) for every sample where *variable* is present."""
    pairs = []
    for s in samples:
        value = s.value(variable)
        if value is not None:
            pairs.append((s.year, value))
    return pairs


def weighted_average(samples: list[YearSample], variable: str) -> float | None:
    """Recency-weighted mean of *variable*.

    The i-th sample (0-based, ascending by year) has weight i + 1. Weights
    are positional over the whole list: a year lacking the variable adds
    nothing to the sum but still moves the weight on for later years.

    Returns:
        The weighted mean, or None if no sample has the variable.
    """
    total = 0.0
    total_weight = 0
    for i, s in enumerate(samples):
        value = s.value(variable)
        if value is None:
            continue
        weight = i + 1
        total += value * weight
        total_weight += weight

    if total_weight == 0:
        return None
    return total / total_weight


def linear_trend(samples: list[YearSample], variable: str) -> TrendModel | None:
    """Least-squares fit of *variable* against year.

    slope     = sum((x - mean_x) * (y - mean_y)) / sum((x - mean_x)^2)
    intercept = mean_y - slope * mean_x

    Returns:
        The fitted TrendModel, or None when fewer than two values are present
        or all present values share a single year.
    """
    pairs = present_pairs(samples, variable)
    if len(pairs) < 2:
        return None

    n = len(pairs)
    mean_x = sum(x for x, _ in pairs) / n
    mean_y = sum(y for _, y in pairs) / n

    sxx = sum((x - mean_x) ** 2 for x, _ in pairs)
    if sxx == 0:
        return None
    sxy = sum((x - mean_x) * (y - mean_y) for x, y in pairs)

    slope = sxy / sxx
    return TrendModel(slope=slope, intercept=mean_y - slope * mean_x)


def projection_year(samples: list[YearSample], variable: str) -> int | None:
    """The year after the latest year in which *variable* is present."""
    years = [year for year, _ in present_pairs(samples, variable)]
    if not years:
        return None
    return max(years) + 1


def combine_estimate(samples: list[YearSample], variable: str) -> VariableEstimate | None:
    """Blend the weighted average and the trend projection for *variable*.

    Returns:
        A VariableEstimate whose value is the mean of both parts, or the
        weighted average alone (trend_available False) when no trend can be
        fitted. None when the variable is absent from every sample.
    """
    average = weighted_average(samples, variable)
    if average is None:
        return None

    count = len(present_pairs(samples, variable))
    trend = linear_trend(samples, variable)
    if trend is None:
        return VariableEstimate(
            value=average,
            weighted_average=average,
            projection=None,
            slope=None,
            intercept=None,
            projection_year=None,
            sample_count=count,
        )

    target_year = projection_year(samples, variable)
    projected = trend.project(target_year)
    return VariableEstimate(
        value=(average + projected) / 2,
        weighted_average=average,
        projection=projected,
        slope=trend.slope,
        intercept=trend.intercept,
        projection_year=target_year,
        sample_count=count,
    )
