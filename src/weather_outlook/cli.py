# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
cli.py — Command-line interface for weather-outlook.

We use argparse (stdlib) rather than click because:
- No extra dependency to install
- Sufficient for a single subcommand
- Easier for beginners to read and understand

Commands:
  weather-outlook estimate --location "Paris" --date 2025-07-14
  weather-outlook estimate --lat 48.85 --lon 2.35 --date 2025-07-14 --json out/
"""

import argparse
from datetime import date, datetime
from pathlib import Path

from weather_outlook.chart import render_report
from weather_outlook.config import DEFAULT_CONFIG_PATH, load_config_or_default
from weather_outlook.geocode import LocationNotFoundError, geocode, reverse_geocode
from weather_outlook.history import NoHistoricalDataError
from weather_outlook.models import Coordinate
from weather_outlook.pipeline import estimate
from weather_outlook.report import write_report_json
from weather_outlook.utils import log_error


def _parse_date(raw: str | None) -> date:
    """Parse --date ('YYYY-MM-DD'); today when omitted."""
    if raw is None:
        return date.today()
    try:
        return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
    except ValueError:
        print(f"[error] Unrecognised --date format: '{raw}'. Use 'YYYY-MM-DD'.")
        raise SystemExit(1)


def _resolve_location(args) -> tuple[Coordinate, str]:
    """Return the coordinate and display name from --location or --lat/--lon."""
    if args.location:
        loc = geocode(args.location)
        return Coordinate(loc["latitude"], loc["longitude"]), loc["name"]

    if args.lat is None or args.lon is None:
        print("[error] Give either --location or both --lat and --lon.")
        raise SystemExit(1)
    coordinate = Coordinate(args.lat, args.lon)
    coordinate.validate()
    return coordinate, reverse_geocode(args.lat, args.lon)


def cmd_estimate(args) -> None:
    """Collect history for the date, print the estimate, optionally export JSON."""
    config = load_config_or_default(Path(args.config))
    log_path = Path(config["log"]["path"])
    target_date = _parse_date(args.date)

    try:
        coordinate, display_name = _resolve_location(args)
        coordinate.validate()

        window = args.years or config["history"]["lookback_years"]
        print(f"Collecting {window} years of history for {display_name}...")
        report = estimate(
            coordinate,
            target_date,
            location=display_name,
            config=config,
            lookback_years=args.years,
        )
    except LocationNotFoundError as e:
        print(f"[error] {e}")
        raise SystemExit(1)
    except NoHistoricalDataError as e:
        print(f"[error] {e}")
        log_error(str(e), log_path=log_path)
        raise SystemExit(1)
    except (RuntimeError, ValueError) as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    print()
    print(render_report(report))

    if args.json is not None:
        path = write_report_json(report, Path(args.json))
        print(f"\n💾 Saved {path}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="weather-outlook",
        description="Expected weather for a date, estimated from NASA POWER history",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    p_est = subparsers.add_parser("estimate", help="Estimate the weather for a location and date")
    p_est.add_argument(
        "--location",
        metavar="PLACE",
        default=None,
        help='Look up coordinates by place name, e.g. "Tokyo" or "London, UK"',
    )
    p_est.add_argument("--lat", type=float, default=None, help="Latitude in decimal degrees")
    p_est.add_argument("--lon", type=float, default=None, help="Longitude in decimal degrees")
    p_est.add_argument(
        "--date",
        metavar="YYYY-MM-DD",
        default=None,
        help="Date to estimate for (only month and day are sampled). Default: today.",
    )
    p_est.add_argument(
        "--years",
        metavar="N",
        type=int,
        default=None,
        help="Years of history to sample. Default: [history].lookback_years from config.",
    )
    p_est.add_argument(
        "--json",
        metavar="DIR",
        nargs="?",
        const=".",
        default=None,
        help="Also write the report as JSON into DIR (default: current directory)",
    )
    p_est.add_argument(
        "--config",
        metavar="PATH",
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to config.toml (built-in defaults are used if it is missing)",
    )

    args = parser.parse_args(argv)

    commands = {
        "estimate": cmd_estimate,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
