"""
Unit tests for the daily record schema.

Tests validation of DailyRecord and CityTimeSeries.
"""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from src.data.schema import CityTimeSeries, DailyRecord, DecadeStats, YearlyMean


class TestDailyRecord:
    """Test DailyRecord validation."""

    def test_valid_record(self):
        """Test creating a record from an ISO date string."""
        record = DailyRecord(date="2024-08-01", avg_temp=28.1, min_temp=25.2, max_temp=33.4)

        assert record.date == date(2024, 8, 1)
        assert record.avg_temp == 28.1

    def test_nan_temperature_rejected(self):
        """Test that NaN never enters the engine."""
        with pytest.raises(ValidationError):
            DailyRecord(date=date(2024, 8, 1), avg_temp=math.nan, min_temp=20.0, max_temp=30.0)

    def test_infinite_temperature_rejected(self):
        """Test that infinite readings are rejected."""
        with pytest.raises(ValidationError):
            DailyRecord(date=date(2024, 8, 1), avg_temp=25.0, min_temp=20.0, max_temp=math.inf)

    def test_missing_field_rejected(self):
        """Test that all three temperatures are required."""
        with pytest.raises(ValidationError):
            DailyRecord(date=date(2024, 8, 1), avg_temp=25.0, min_temp=20.0)

    def test_record_is_immutable(self):
        """Test that records cannot be mutated after loading."""
        record = DailyRecord(date=date(2024, 8, 1), avg_temp=25.0, min_temp=20.0, max_temp=30.0)

        with pytest.raises(ValidationError):
            record.avg_temp = 30.0


class TestCityTimeSeries:
    """Test CityTimeSeries ordering invariants."""

    def _record(self, d: date, temp: float = 10.0) -> DailyRecord:
        return DailyRecord(date=d, avg_temp=temp, min_temp=temp - 3, max_temp=temp + 3)

    def test_ascending_series(self):
        """Test a well-formed series and its year range."""
        series = CityTimeSeries(
            city_id="seoul",
            city_name="Seoul",
            station_id=108,
            records=[self._record(date(1999, 12, 31)), self._record(date(2000, 1, 1))],
        )

        assert series.record_count == 2
        assert series.first_year == 1999
        assert series.last_year == 2000

    def test_duplicate_dates_rejected(self):
        """Test that one record per date is enforced."""
        with pytest.raises(ValidationError):
            CityTimeSeries(
                city_id="seoul",
                city_name="Seoul",
                records=[self._record(date(2000, 1, 1)), self._record(date(2000, 1, 1), 11.0)],
            )

    def test_out_of_order_rejected(self):
        """Test that unsorted input is rejected."""
        with pytest.raises(ValidationError):
            CityTimeSeries(
                city_id="seoul",
                city_name="Seoul",
                records=[self._record(date(2000, 1, 2)), self._record(date(2000, 1, 1))],
            )

    def test_empty_series_has_no_year_range(self):
        """Test year properties of an empty series."""
        series = CityTimeSeries(city_id="empty", city_name="Empty")

        assert series.record_count == 0
        assert series.first_year is None
        assert series.last_year is None


class TestBuckets:
    """Test aggregation bucket validation."""

    def test_yearly_mean_requires_observations(self):
        """Test that a bucket must contain at least one day."""
        with pytest.raises(ValidationError):
            YearlyMean(year=2000, mean=10.0, count=0)

    def test_decade_stats_defaults(self):
        """Test DecadeStats default difference."""
        stats = DecadeStats(decade="1990s", start_year=1990, end_year=1999, avg_temp=12.5, years=10)

        assert stats.diff_from_first == 0.0
