# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
chart.py — ASCII table and chart rendering for an estimate Report.

Uses only the Python standard library (os).
All rendering functions return strings ready to print. This is the only
place where condition labels get human-readable wording.
"""

import os

from weather_outlook.conditions import Condition
from weather_outlook.models import UNITS
from weather_outlook.report import Report
from weather_outlook.utils import fmt_date

FALLBACK_TERMINAL_WIDTH: int = 80
BAR_LABEL_RESERVE: int = 30  # characters reserved for label + value outside the bar

CONDITION_DESCRIPTIONS = {
    Condition.CLEAR:     "The weather is likely to be clear and pleasant.",
    Condition.WINDY:     "Expect breezy or windy conditions during this time.",
    Condition.VERY_HOT:  "Temperatures are likely to be very high; stay hydrated!",
    Condition.VERY_COLD: "The weather may be quite cold; warm clothing is advised.",
    Condition.HUMID:     "High humidity levels expected; it may feel muggy.",
}

CONDITION_ICONS = {
    Condition.CLEAR:     "☀️",
    Condition.WINDY:     "💨",
    Condition.VERY_HOT:  "🔥",
    Condition.VERY_COLD: "🥶",
    Condition.HUMID:     "💧",
}

VARIABLE_LABELS = {
    "temperature":   "Temperature",
    "wind_speed":    "Wind speed",
    "humidity":      "Humidity",
    "precipitation": "Precipitation",
}


def describe_condition(condition: Condition | None) -> str:
    """Return the one-line description for a condition label."""
    if condition is None:
        return "Not enough data to describe the expected conditions."
    return CONDITION_DESCRIPTIONS[condition]


def _fmt_value(value: float | None, unit: str = "", digits: int = 1) -> str:
    if value is None:
        return "—"
    return f"{value:.{digits}f}{unit}"


def render_estimates(report: Report) -> str:
    """Render the per-variable estimates as a fixed-width ASCII table."""
    sep = "─" * 62
    lines = [
        f"{'Variable':<14} {'Estimate':>10} {'Weighted':>10} {'Trend':>10} {'Slope/yr':>10}",
        sep,
    ]
    for variable in report.variables:
        unit = UNITS[variable]
        label = VARIABLE_LABELS[variable]
        est = report.estimates[variable]
        if est is None:
            lines.append(f"{label:<14} {'no data':>10}")
            continue
        trend = _fmt_value(est.projection) if est.trend_available else "n/a"
        slope = _fmt_value(est.slope, digits=3) if est.trend_available else "n/a"
        lines.append(
            f"{label:<14} {_fmt_value(est.value, ' ' + unit):>10} "
            f"{_fmt_value(est.weighted_average):>10} {trend:>10} {slope:>10}"
        )
    lines.append(sep)

    notes = []
    if report.trend_unavailable:
        names = ", ".join(VARIABLE_LABELS[v] for v in report.trend_unavailable)
        notes.append(f"ℹ️  Trend unavailable (weighted average only): {names}")
    if report.missing_variables:
        names = ", ".join(VARIABLE_LABELS[v] for v in report.missing_variables)
        notes.append(f"⚠️  No historical values: {names}")
    return "\n".join(lines + notes)


def render_yearly_table(report: Report) -> str:
    """Render the per-year observations, one row per year."""
    headers = [f"{'Year':<4}"] + [f"{VARIABLE_LABELS[v]:>13}" for v in report.variables]
    sep = "─" * (4 + 14 * len(report.variables))
    lines = [" ".join(headers), sep]
    for s in report.yearly:
        cells = [f"{s.year:<4}"]
        for v in report.variables:
            cells.append(f"{_fmt_value(s.value(v), ' ' + UNITS[v]):>13}")
        lines.append(" ".join(cells))
    lines.append(sep)
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────
# Bar chart helpers
# ─────────────────────────────────────────────────────────────

def _bar(value: float, max_value: float, bar_width: int) -> str:
    """Render a single filled/empty bar scaled to bar_width.

    Args:
        value: The data value to represent.
        max_value: The maximum value (maps to full bar width).
        bar_width: Total character width of the bar.

    Returns:
        String of '█' and '░' characters of length bar_width.
    """
    if max_value == 0:
        filled = 0
    else:
        filled = round((value / max_value) * bar_width)
    filled = max(0, min(filled, bar_width))
    return "█" * filled + "░" * (bar_width - filled)


def render_bar_chart(
    labels: list[str],
    values: list[float],
    title: str,
    unit: str = "",
    bar_width: int | None = None,
) -> str:
    """Render a labelled horizontal bar chart.

    Args:
        labels: List of row label strings.
        values: List of numeric values corresponding to each label.
        title: Chart title printed above the bars.
        unit: Optional unit suffix appended to each value.
        bar_width: Width of the bar in characters. Auto-detected from terminal if None.

    Returns:
        Multi-line string containing the chart.
    """
    if bar_width is None:
        try:
            terminal_width = os.get_terminal_size().columns
        except OSError:
            terminal_width = FALLBACK_TERMINAL_WIDTH
        bar_width = max(10, terminal_width - BAR_LABEL_RESERVE)

    max_val = max(values) if values else 1
    if max_val == 0:
        max_val = 1

    label_w = max(len(lbl) for lbl in labels) if labels else 3
    lines = [title]
    for label, value in zip(labels, values):
        bar = _bar(value, max_val, bar_width)
        val_str = f"{value:.0f}{unit}"
        lines.append(f"  {label:<{label_w}} │{bar}│ {val_str:>6}")

    return "\n".join(lines)


def render_histogram(report: Report, bar_width: int | None = None) -> str:
    """Bar chart of how many past years fell into each condition."""
    labels = list(report.histogram)
    values = [float(report.histogram[k]) for k in labels]
    return render_bar_chart(labels, values, "Conditions in past years", bar_width=bar_width)


def render_report(report: Report, bar_width: int | None = None) -> str:
    """Render the whole report: header, estimates, yearly table, histogram."""
    years = [s.year for s in report.yearly]
    header = (
        f"📍 {report.location} — {fmt_date(report.date)} "
        f"({len(years)} years sampled, {years[0]}–{years[-1]})"
    )
    if report.condition is not None:
        headline = (
            f"{CONDITION_ICONS[report.condition]}  {report.condition.value}: "
            f"{describe_condition(report.condition)}"
        )
    else:
        headline = describe_condition(None)

    return "\n".join([
        header,
        headline,
        "",
        render_estimates(report),
        "",
        render_yearly_table(report),
        "",
        render_histogram(report, bar_width=bar_width),
    ])
