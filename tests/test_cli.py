# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_cli.py — Tests for the `weather-outlook estimate` command.

estimate() and the geocoders are patched — no network calls.
"""

import json
from datetime import date

import pytest

from weather_outlook import cli
from weather_outlook.history import NoHistoricalDataError
from weather_outlook.models import Coordinate, YearSample
from weather_outlook.report import build_report


SAMPLES = [
    YearSample(2023, temperature=20.0, wind_speed=3.0, humidity=50.0),
    YearSample(2024, temperature=21.0, wind_speed=4.0, humidity=55.0),
]


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    """Run each test in an empty directory so no config.toml or logs leak in."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_estimate(monkeypatch):
    calls = []

    def _estimate(coordinate, target_date, location=None, config=None, lookback_years=None):
        calls.append({"coordinate": coordinate, "date": target_date, "years": lookback_years})
        return build_report(SAMPLES, coordinate, target_date, location=location)

    monkeypatch.setattr("weather_outlook.cli.estimate", _estimate)
    return calls


def test_estimate_by_coordinates(fake_estimate, monkeypatch, capsys):
    monkeypatch.setattr("weather_outlook.cli.reverse_geocode", lambda lat, lon: "Paris")

    cli.main(["estimate", "--lat", "48.85", "--lon", "2.35", "--date", "2025-07-14", "--years", "5"])

    out = capsys.readouterr().out
    assert "📍 Paris" in out
    assert fake_estimate[0]["coordinate"] == Coordinate(48.85, 2.35)
    assert fake_estimate[0]["date"] == date(2025, 7, 14)
    assert fake_estimate[0]["years"] == 5


def test_estimate_by_place_name(fake_estimate, monkeypatch, capsys):
    monkeypatch.setattr(
        "weather_outlook.cli.geocode",
        lambda place: {"latitude": 35.68, "longitude": 139.69, "name": "Tokyo, Japan"},
    )

    cli.main(["estimate", "--location", "Tokyo", "--date", "2025-01-01"])

    assert "Tokyo, Japan" in capsys.readouterr().out


def test_json_export(fake_estimate, monkeypatch, tmp_path):
    monkeypatch.setattr("weather_outlook.cli.reverse_geocode", lambda lat, lon: "Paris")

    cli.main(["estimate", "--lat", "48.85", "--lon", "2.35", "--date", "2025-07-14", "--json", "out"])

    exported = tmp_path / "out" / "Paris_2025-07-14_weather.json"
    assert json.loads(exported.read_text(encoding="utf-8"))["date"] == "2025-07-14"


def test_missing_location_exits(fake_estimate, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["estimate", "--lat", "48.85"])
    assert exc.value.code == 1
    assert "--location" in capsys.readouterr().out


def test_out_of_range_coordinates_exit(fake_estimate, monkeypatch, capsys):
    monkeypatch.setattr("weather_outlook.cli.reverse_geocode", lambda lat, lon: "nowhere")
    with pytest.raises(SystemExit):
        cli.main(["estimate", "--lat", "95", "--lon", "0"])
    assert "Latitude" in capsys.readouterr().out
    assert fake_estimate == []


def test_bad_date_exits(fake_estimate, capsys):
    with pytest.raises(SystemExit):
        cli.main(["estimate", "--lat", "1", "--lon", "1", "--date", "14/07/2025"])
    assert "Unrecognised --date" in capsys.readouterr().out


def test_no_historical_data_exits_and_logs(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr("weather_outlook.cli.reverse_geocode", lambda lat, lon: "Paris")

    def empty(*args, **kwargs):
        raise NoHistoricalDataError("No historical data for 07-14")

    monkeypatch.setattr("weather_outlook.cli.estimate", empty)

    with pytest.raises(SystemExit) as exc:
        cli.main(["estimate", "--lat", "48.85", "--lon", "2.35", "--date", "2025-07-14"])

    assert exc.value.code == 1
    assert "No historical data" in capsys.readouterr().out
    assert "[ERROR]" in (tmp_path / "logs" / "weather_outlook.log").read_text()
