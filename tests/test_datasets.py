"""Validation pairs, historical series and the XLSX export."""

import io
from datetime import date, timedelta

import pandas as pd
import pytest
from openpyxl import load_workbook

from backend.cities import UnknownCityError
from backend.export import (
    EXPORT_DAYS,
    EXPORT_POLLUTANTS,
    SHEET_NAME,
    export_filename,
    export_to_excel,
    generate_export_table,
)
from backend.historical import (
    generate_forecast_data,
    generate_historical_data,
    get_time_range_days,
    get_time_range_label,
)
from backend.validation import (
    GROUND_STATIONS,
    classify_validation_status,
    generate_validation_data,
    summarize_validation,
)

TODAY = date(2025, 10, 5)


def no_jitter():
    return 0.5


class TestValidationStatus:

    @pytest.mark.parametrize("percent,status", [
        (0, "good"),
        (9.99, "good"),
        (-9.99, "good"),
        (10, "acceptable"),
        (-24.9, "acceptable"),
        (25, "poor"),
        (-40, "poor"),
    ])
    def test_classification(self, percent, status):
        assert classify_validation_status(percent) == status

    def test_one_pair_per_station(self):
        pairs = generate_validation_data("no2", timestamp="2025-10-05T00:00:00+00:00")
        assert len(pairs) == len(GROUND_STATIONS)
        assert all(pair.satellite.parameter == "no2" for pair in pairs)

    def test_pair_arithmetic(self):
        pairs = generate_validation_data("pm25", rng=no_jitter)
        pair = pairs[0]
        # ground = 0.5 * 80 + 20, no satellite variance
        assert pair.ground_station.value == 60
        assert pair.satellite.value == 60
        assert pair.difference == 0
        assert pair.status == "good"

    def test_summary_counts_every_pair(self):
        pairs = generate_validation_data("o3")
        counts = summarize_validation(pairs)
        assert sum(counts.values()) == len(pairs)


class TestHistorical:

    def test_days_and_order(self):
        data = generate_historical_data("NYC", days=30, today=TODAY)
        assert len(data) == 30
        assert data[-1].date == TODAY.isoformat()
        assert data[0].date == (TODAY - timedelta(days=29)).isoformat()

    def test_aqi_clamped(self):
        for city in ("NYC", "LA", "CHI", "HOU", "PHX", "XYZ"):
            for point in generate_historical_data(city, days=90, today=TODAY):
                assert 20 <= point.aqi <= 180

    def test_baseline_without_noise(self):
        data = generate_historical_data("LA", days=1, rng=lambda: 0.0, today=TODAY)
        # 85 + sin(0) * 10 - 0.5 * 30
        assert data[0].aqi == 70

    def test_rejects_empty_range(self):
        with pytest.raises(ValueError):
            generate_historical_data("NYC", days=0)

    def test_forecast_days_follow_today(self):
        data = generate_forecast_data(100, days=3, rng=no_jitter, today=TODAY)
        assert [point.date for point in data] == ["2025-10-06", "2025-10-07", "2025-10-08"]
        assert all(point.aqi == 100 and point.pm25 == 40 for point in data)

    def test_time_ranges(self):
        assert get_time_range_label("7d") == "Last 7 Days"
        assert get_time_range_days("90d") == 90


class TestExport:

    def test_table_shape(self):
        rows = generate_export_table("LA", today=TODAY)
        assert len(rows) == EXPORT_DAYS
        assert rows[-1]["Date"] == "Oct 5, 2025"
        assert rows[0]["Location"] == "Los Angeles"
        for pollutant in EXPORT_POLLUTANTS:
            assert pollutant["name"] in rows[0]

    def test_unknown_city(self):
        with pytest.raises(UnknownCityError):
            generate_export_table("XYZ", today=TODAY)

    def test_workbook_contents(self):
        rows = generate_export_table("NYC", rng=no_jitter, today=TODAY)
        workbook = load_workbook(io.BytesIO(export_to_excel(rows)))
        sheet = workbook[SHEET_NAME]
        assert sheet.max_row == EXPORT_DAYS + 1
        assert sheet["A1"].value == "Date"
        assert sheet.column_dimensions["A"].width == 15

        frame = pd.read_excel(io.BytesIO(export_to_excel(rows)), sheet_name=SHEET_NAME, engine="openpyxl")
        assert list(frame["AQI"].unique()) == [80]

    def test_filename(self):
        assert export_filename("NYC") == "AirGuard_Export_NYC_2025-10-05.xlsx"
