# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
outlook.py — Streamlit dashboard: expected weather for a place and date.

Run with:
    streamlit run app/outlook.py
    streamlit run app/outlook.py -- --location "Paris" --date 2025-07-14 --years 20

Requires: pip install -e ".[ui]"
Data source: NASA POWER daily point API (free, no key).
"""

import sys
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import argparse
from datetime import date

import plotly.graph_objects as go
import streamlit as st

from weather_outlook.chart import CONDITION_ICONS, VARIABLE_LABELS, describe_condition
from weather_outlook.config import DEFAULT_CONFIG_PATH, load_config_or_default
from weather_outlook.geocode import LocationNotFoundError, geocode
from weather_outlook.history import NoHistoricalDataError
from weather_outlook.models import UNITS, Coordinate
from weather_outlook.pipeline import estimate
from weather_outlook.report import export_filename, report_to_json
from weather_outlook.utils import fmt_date


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Weather Outlook",
    page_icon="🌤",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# ─────────────────────────────────────────────────────────────
# CSS injection (dark theme)
# ─────────────────────────────────────────────────────────────

APPLE_CSS = """
<style>
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 960px; }

  html, body, [class*="css"] {
    font-family: -apple-system, BlinkMacSystemFont, "SF Pro Display",
                 "SF Pro Text", "Segoe UI", Roboto, sans-serif;
    background-color: #0a0a0a;
    color: #f5f5f7;
  }

  .stButton > button {
    background: #0a84ff !important;
    color: #ffffff !important;
    border: none !important;
    border-radius: 980px !important;
    font-weight: 600 !important;
  }

  .stat-pill {
    background: #1c1c1e;
    border: 1px solid #2c2c2e;
    border-radius: 16px;
    padding: 16px 20px;
  }
  .stat-label { font-size: 0.75rem; color: #8e8e93; text-transform: uppercase; letter-spacing: 0.06em; }
  .stat-value { font-size: 1.8rem; font-weight: 700; letter-spacing: -0.03em; }
  .stat-unit  { font-size: 0.9rem; color: #8e8e93; font-weight: 400; }
  .stat-note  { font-size: 0.75rem; color: #ff9f0a; }

  .condition-line { font-size: 1.05rem; color: #8e8e93; text-align: center; }
  .section-label  { font-size: 0.8rem; color: #8e8e93; text-transform: uppercase;
                    letter-spacing: 0.08em; margin: 1.5rem 0 0.5rem; }
  .error-card {
    background: #2c1517; border: 1px solid #ff453a; border-radius: 12px;
    padding: 16px 20px; color: #ff6961;
  }
</style>
"""

st.markdown(APPLE_CSS, unsafe_allow_html=True)

PLOTLY_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(
        family="-apple-system, BlinkMacSystemFont, 'SF Pro Text', sans-serif",
        color="#f5f5f7",
    ),
    margin=dict(l=8, r=8, t=32, b=8),
    legend=dict(bgcolor="rgba(0,0,0,0)", font=dict(color="#8e8e93")),
    xaxis=dict(showgrid=False, zeroline=False, tickfont=dict(color="#636366")),
    yaxis=dict(gridcolor="#2c2c2e", zeroline=False, tickfont=dict(color="#636366")),
)

SERIES_COLORS = {
    "temperature":   "#ff6384",
    "humidity":      "#36a2eb",
    "wind_speed":    "#ffce56",
    "precipitation": "#30d158",
}

CONDITION_COLORS = ["#36a2eb", "#ff6384", "#ffce56", "#8a2be2", "#00ff7f"]


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────


def stat_html(label: str, value: str, unit: str = "", note: str = "") -> str:
    """Render a stat pill as HTML."""
    note_html = f'<div class="stat-note">{note}</div>' if note else ""
    return f"""
    <div class="stat-pill">
      <div class="stat-label">{label}</div>
      <div class="stat-value">{value}<span class="stat-unit"> {unit}</span></div>
      {note_html}
    </div>
    """


def _parse_cli_args() -> tuple[str | None, date, int | None]:
    """Parse --location, --date and --years from sys.argv after '--'.

    Streamlit passes everything after '--' as script arguments.
    Returns (location_str | None, date, years_int | None).
    """
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--location", type=str, default=None)
    parser.add_argument("--date", type=date.fromisoformat, default=date.today())
    parser.add_argument("--years", type=int, default=None)

    # Streamlit forwards argv after '--'; gracefully ignore unknown flags
    try:
        sep = sys.argv.index("--")
        script_args = sys.argv[sep + 1:]
    except ValueError:
        script_args = []

    args, _ = parser.parse_known_args(script_args)
    return args.location, args.date, args.years


CLI_LOCATION, CLI_DATE, CLI_YEARS = _parse_cli_args()
CONFIG = load_config_or_default(DEFAULT_CONFIG_PATH)


# ─────────────────────────────────────────────────────────────
# Cached data loader
# ─────────────────────────────────────────────────────────────


@st.cache_data(ttl=86400)
def load_report(location: str, target_date: date, years: int) -> dict:
    """Geocode *location* and run the estimate for *target_date*.

    Returns {"report": Report, "json": str, "filename": str},
    or {"error": str} on any failure.
    """
    try:
        loc = geocode(location)
    except LocationNotFoundError:
        return {"error": f'Location "{location}" not found. Try a more specific name.'}
    except RuntimeError as exc:
        return {"error": f"Geocoding error: {exc}"}

    try:
        report = estimate(
            Coordinate(loc["latitude"], loc["longitude"]),
            target_date,
            location=loc["name"],
            config=CONFIG,
            lookback_years=years,
        )
    except NoHistoricalDataError:
        return {"error": "No historical data available for this date."}
    except ValueError as exc:
        return {"error": str(exc)}

    return {
        "report": report,
        "json": report_to_json(report),
        "filename": export_filename(report),
    }


def _series_chart(report, variable: str) -> go.Figure:
    """Line chart of one variable across the sampled years."""
    years = [str(s.year) for s in report.yearly]
    values = [s.value(variable) for s in report.yearly]
    color = SERIES_COLORS[variable]
    label = f"{VARIABLE_LABELS[variable]} ({UNITS[variable]})"

    fig = go.Figure(
        go.Scatter(
            x=years,
            y=values,
            name=label,
            mode="lines+markers",
            connectgaps=False,
            line=dict(color=color, width=2),
            marker=dict(color=color, size=5),
        )
    )
    fig.update_layout(**{
        **PLOTLY_LAYOUT,
        "title": dict(text=label, font=dict(color="#8e8e93", size=13)),
        "height": 260,
        "hovermode": "x unified",
    })
    return fig


# ─────────────────────────────────────────────────────────────
# Main dashboard
# ─────────────────────────────────────────────────────────────


def main() -> None:
    """Render the outlook dashboard."""

    # ── SECTION 1: Input row ─────────────────────────────────

    col_l, col_c, col_r = st.columns([1, 2, 1])
    with col_c:
        location_input = st.text_input(
            label="location",
            value=CLI_LOCATION or "",
            placeholder="Enter a location (e.g. Paris, France)",
            label_visibility="collapsed",
        )
        date_col, years_col, btn_col = st.columns([2, 1, 2])
        with date_col:
            date_input = st.date_input("Date", value=CLI_DATE, label_visibility="collapsed")
        with years_col:
            years_input = st.number_input(
                label="Years of history",
                min_value=1,
                max_value=40,
                value=CLI_YEARS or CONFIG["history"]["lookback_years"],
                step=1,
                label_visibility="collapsed",
            )
        with btn_col:
            clicked = st.button("Estimate", use_container_width=True)

    query_location: str | None = None
    if clicked and location_input.strip():
        query_location = location_input.strip()
    elif CLI_LOCATION and not clicked:
        query_location = CLI_LOCATION

    if query_location is None:
        st.markdown(
            '<div class="condition-line" style="margin-top:3rem;">'
            "Enter a location and a date above and click Estimate"
            "</div>",
            unsafe_allow_html=True,
        )
        return

    # ── SECTION 2: Load ──────────────────────────────────────

    with st.spinner(f"Collecting {int(years_input)} years of history for {query_location}…"):
        data = load_report(query_location, date_input, int(years_input))

    if "error" in data:
        st.markdown(f'<div class="error-card">⚠️ {data["error"]}</div>', unsafe_allow_html=True)
        return

    report = data["report"]

    # ── SECTION 3: Header + estimate pills ───────────────────

    icon = CONDITION_ICONS.get(report.condition, "❔")
    label = report.condition.value if report.condition is not None else "Unknown"
    st.markdown(
        f'<h2 style="font-size:1.6rem;font-weight:700;margin-bottom:0.25rem;">📍 {report.location}</h2>'
        f'<div class="condition-line" style="text-align:left;">'
        f"📅 {fmt_date(report.date)} &nbsp;·&nbsp; {icon} {label} — {describe_condition(report.condition)}"
        f"</div>",
        unsafe_allow_html=True,
    )

    columns = st.columns(len(report.variables))
    for col, variable in zip(columns, report.variables):
        est = report.estimates[variable]
        with col:
            if est is None:
                st.markdown(stat_html(VARIABLE_LABELS[variable], "—", note="no data"), unsafe_allow_html=True)
                continue
            note = "" if est.trend_available else "trend unavailable"
            st.markdown(
                stat_html(VARIABLE_LABELS[variable], f"{est.value:.1f}", UNITS[variable], note),
                unsafe_allow_html=True,
            )

    # ── SECTION 4: Yearly series ─────────────────────────────

    st.markdown('<div class="section-label">Same day in past years</div>', unsafe_allow_html=True)
    for variable in report.variables:
        st.plotly_chart(_series_chart(report, variable), use_container_width=True,
                        config={"displayModeBar": False})

    # ── SECTION 5: Condition histogram ───────────────────────

    st.markdown('<div class="section-label">Conditions in past years</div>', unsafe_allow_html=True)
    fig_pie = go.Figure(
        go.Pie(
            labels=list(report.histogram),
            values=list(report.histogram.values()),
            marker=dict(colors=CONDITION_COLORS),
            hole=0.4,
        )
    )
    fig_pie.update_layout(**{**PLOTLY_LAYOUT, "height": 320})
    st.plotly_chart(fig_pie, use_container_width=True, config={"displayModeBar": False})

    # ── SECTION 6: Download ──────────────────────────────────

    st.download_button(
        "Download JSON",
        data=data["json"],
        file_name=data["filename"],
        mime="application/json",
    )


main()
