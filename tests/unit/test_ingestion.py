"""
Unit tests for in-memory ingestion adapters.
"""

from datetime import date

import pandas as pd
import pytest

from src.data.ingestion import IngestionError, load_city_series, records_from_frame


class TestRecordsFromFrame:
    """Test DataFrame conversion."""

    def test_camel_case_frame_drops_incomplete_rows(self, sample_daily_dataframe):
        records = records_from_frame(sample_daily_dataframe)

        assert len(records) == 4
        assert date(2021, 7, 3) not in {r.date for r in records}
        assert records[0].avg_temp == 26.0

    def test_datetime_index(self):
        df = pd.DataFrame(
            {"avg_temp": [1.0, 2.0], "min_temp": [0.0, 1.0], "max_temp": [2.0, 3.0]},
            index=pd.date_range("2020-01-01", periods=2, freq="D"),
        )

        records = records_from_frame(df)

        assert [r.date for r in records] == [date(2020, 1, 1), date(2020, 1, 2)]

    def test_missing_columns(self):
        df = pd.DataFrame({"date": ["2020-01-01"], "avg_temp": [1.0]})

        with pytest.raises(IngestionError):
            records_from_frame(df)

    def test_no_date_column(self):
        df = pd.DataFrame({"avg_temp": [1.0], "min_temp": [0.0], "max_temp": [2.0]})

        with pytest.raises(IngestionError):
            records_from_frame(df)


class TestLoadCitySeries:
    """Test city payload loading."""

    def test_payload(self):
        payload = {
            "cityId": "busan",
            "cityName": "Busan",
            "stationId": 159,
            "records": [
                {"date": "2020-01-02", "avgTemp": 4.0, "minTemp": 1.0, "maxTemp": 8.0},
                {"date": "2020-01-01", "avgTemp": 3.0, "minTemp": 0.0, "maxTemp": 7.0},
                {"date": "2020-01-03", "avgTemp": None, "minTemp": 0.0, "maxTemp": 7.0},
            ],
        }

        series = load_city_series(payload)

        assert series.city_id == "busan"
        assert series.station_id == 159
        assert series.record_count == 2
        assert series.records[0].date == date(2020, 1, 1)

    def test_city_id_override_and_name_fallback(self):
        series = load_city_series({"records": []}, city_id="jeju")

        assert series.city_id == "jeju"
        assert series.city_name == "jeju"
        assert series.station_id is None

    def test_non_numeric_station_ignored(self):
        series = load_city_series({"cityId": "x", "stationId": "abc", "records": []})

        assert series.station_id is None

    def test_missing_records(self):
        with pytest.raises(IngestionError):
            load_city_series({"cityId": "seoul"})

    def test_missing_city_id(self):
        with pytest.raises(IngestionError):
            load_city_series({"records": []})
