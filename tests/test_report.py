# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for report.py — build_report, Report.to_dict, JSON export."""

import json
import pickle
from datetime import date

import pytest

from weather_outlook.conditions import Condition, Thresholds
from weather_outlook.history import NoHistoricalDataError
from weather_outlook.models import Coordinate, YearSample
from weather_outlook.report import (
    Report,
    build_report,
    export_filename,
    report_to_json,
    write_report_json,
)


PARIS = Coordinate(48.85, 2.35)
TARGET = date(2025, 7, 14)

MILD_SAMPLES = [
    YearSample(2020, temperature=20.0, wind_speed=3.0, humidity=50.0),
    YearSample(2021, temperature=21.0, wind_speed=4.0, humidity=55.0),
    YearSample(2022, temperature=22.0, wind_speed=3.0, humidity=52.0),
    YearSample(2023, temperature=23.0, wind_speed=14.0, humidity=58.0),
    YearSample(2024, temperature=24.0, wind_speed=4.0, humidity=None),
]


# ---------------------------------------------------------------------------
# build_report
# ---------------------------------------------------------------------------

class TestBuildReport:

    def setup_method(self):
        self.report = build_report(MILD_SAMPLES, PARIS, TARGET, location="Paris", lookback_years=5)

    def test_estimates_for_every_variable(self):
        assert set(self.report.estimates) == {"temperature", "wind_speed", "humidity"}

    def test_temperature_estimate(self):
        """Weighted (20+42+66+92+120)/15, projection 25.0 for 2025."""
        est = self.report.estimates["temperature"]
        assert est.weighted_average == pytest.approx(340 / 15)
        assert est.projection == pytest.approx(25.0)
        assert est.value == pytest.approx((340 / 15 + 25.0) / 2)

    def test_humidity_uses_only_present_years(self):
        est = self.report.estimates["humidity"]
        assert est.sample_count == 4
        assert est.projection_year == 2024

    def test_overall_condition_from_combined_estimate(self):
        assert self.report.condition == Condition.CLEAR

    def test_histogram_counts_complete_years_only(self):
        assert self.report.histogram == {"Clear": 3, "Windy": 1, "VeryHot": 0, "VeryCold": 0, "Humid": 0}

    def test_trend_slopes(self):
        assert self.report.trend_slopes["temperature"] == pytest.approx(1.0)

    def test_yearly_series_kept_in_order(self):
        assert [s.year for s in self.report.yearly] == [2020, 2021, 2022, 2023, 2024]

    def test_nothing_flagged(self):
        assert self.report.trend_unavailable == []
        assert self.report.missing_variables == []

    def test_default_location_is_coordinates(self):
        report = build_report(MILD_SAMPLES, PARIS, TARGET)
        assert report.location == "48.85, 2.35"

    def test_thresholds_change_overall_condition(self):
        report = build_report(MILD_SAMPLES, PARIS, TARGET, thresholds=Thresholds(very_hot=20.0))
        assert report.condition == Condition.VERY_HOT

    def test_empty_samples_raise(self):
        with pytest.raises(NoHistoricalDataError, match="empty"):
            build_report([], PARIS, TARGET)

    def test_unsorted_samples_raise(self):
        with pytest.raises(ValueError, match="ascending"):
            build_report(list(reversed(MILD_SAMPLES)), PARIS, TARGET)

    def test_report_is_frozen(self):
        with pytest.raises(AttributeError):
            self.report.location = "Lyon"

    def test_histogram_is_read_only(self):
        with pytest.raises(TypeError):
            self.report.histogram["Clear"] = 99
        assert self.report.histogram["Clear"] == 3

    def test_estimates_are_read_only(self):
        with pytest.raises(TypeError):
            self.report.estimates["humidity"] = None
        assert self.report.estimates["humidity"] is not None

    def test_caller_dict_changes_do_not_leak_in(self):
        estimates = dict(self.report.estimates)
        histogram = dict(self.report.histogram)
        report = Report(
            location="Paris", coordinate=PARIS, date=TARGET, variables=self.report.variables,
            estimates=estimates, yearly=self.report.yearly, histogram=histogram,
            condition=self.report.condition,
        )
        histogram["Clear"] = 0
        estimates.pop("humidity")
        assert report.histogram["Clear"] == 3
        assert "humidity" in report.estimates

    def test_report_survives_pickling(self):
        """The dashboard caches reports, which pickles them."""
        restored = pickle.loads(pickle.dumps(self.report))
        assert restored == self.report
        with pytest.raises(TypeError):
            restored.histogram["Clear"] = 99


class TestPartialSignal:

    def test_trend_unavailable_falls_back_to_weighted_average(self):
        samples = [
            YearSample(2022, temperature=20.0, wind_speed=3.0, humidity=None),
            YearSample(2023, temperature=22.0, wind_speed=3.0, humidity=70.0),
        ]
        report = build_report(samples, PARIS, TARGET)
        est = report.estimates["humidity"]
        assert est.value == pytest.approx(70.0)
        assert report.trend_unavailable == ["humidity"]
        assert report.trend_slopes["humidity"] is None
        assert report.condition == Condition.CLEAR

    def test_no_signal_variable_is_absent_but_others_remain(self):
        samples = [
            YearSample(2022, temperature=20.0, wind_speed=3.0),
            YearSample(2023, temperature=22.0, wind_speed=3.0),
        ]
        report = build_report(samples, PARIS, TARGET)
        assert report.estimates["humidity"] is None
        assert report.estimates["temperature"] is not None
        assert report.missing_variables == ["humidity"]
        assert report.condition is None

    def test_precipitation_estimated_when_requested(self):
        samples = [
            YearSample(2022, temperature=20.0, wind_speed=3.0, humidity=50.0, precipitation=1.0),
            YearSample(2023, temperature=22.0, wind_speed=3.0, humidity=50.0, precipitation=3.0),
        ]
        variables = ("temperature", "wind_speed", "humidity", "precipitation")
        report = build_report(samples, PARIS, TARGET, variables=variables)
        assert report.estimates["precipitation"].slope == pytest.approx(2.0)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

class TestSerialization:

    def test_to_dict_shape(self):
        data = build_report(MILD_SAMPLES, PARIS, TARGET, location="Paris").to_dict()
        assert data["location"] == "Paris"
        assert data["coordinates"] == {"latitude": 48.85, "longitude": 2.35}
        assert data["date"] == "2025-07-14"
        assert data["condition"] == "Clear"
        assert data["yearly_data"][-1] == {
            "year": 2024, "temperature": 24.0, "wind_speed": 4.0, "humidity": None,
        }
        assert data["estimates"]["temperature"]["trend_available"] is True
        assert data["condition_counts"]["Windy"] == 1

    def test_json_round_trips_through_json_module(self):
        text = report_to_json(build_report(MILD_SAMPLES, PARIS, TARGET))
        assert json.loads(text)["trend_slopes"]["temperature"] == pytest.approx(1.0)

    def test_identical_input_gives_identical_json(self):
        first = report_to_json(build_report(MILD_SAMPLES, PARIS, TARGET, location="Paris"))
        second = report_to_json(build_report(list(MILD_SAMPLES), PARIS, TARGET, location="Paris"))
        assert first == second

    def test_no_signal_serializes_as_null(self):
        samples = [YearSample(2022, temperature=20.0), YearSample(2023, temperature=21.0)]
        data = json.loads(report_to_json(build_report(samples, PARIS, TARGET)))
        assert data["estimates"]["wind_speed"] is None
        assert data["no_signal"] == ["wind_speed", "humidity"]
        assert data["condition"] is None


def test_export_filename_is_sanitized():
    report = build_report(MILD_SAMPLES, PARIS, TARGET, location="Paris/Île-de-France, FR")
    assert export_filename(report) == "Paris_Île-de-France_ FR_2025-07-14_weather.json"


def test_write_report_json(tmp_path):
    report = build_report(MILD_SAMPLES, PARIS, TARGET, location="Paris")
    path = write_report_json(report, tmp_path / "out")
    assert path.name == "Paris_2025-07-14_weather.json"
    assert json.loads(path.read_text(encoding="utf-8"))["location"] == "Paris"
