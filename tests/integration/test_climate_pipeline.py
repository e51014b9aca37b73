"""
Integration test for the full climate analytics pipeline.

Tests end-to-end flow from a raw city payload to a ClimateReport.
"""

import pytest

from src.climate.engine import ClimateAnalyzer, highlight_years
from src.core.config import ClimateConfig
from src.core.exceptions import EmptySeriesError, InsufficientDataError
from src.data.ingestion import load_city_series
from src.data.schema import CityTimeSeries


pytestmark = pytest.mark.integration


class TestFullPipeline:
    """Test end-to-end analysis of one city."""

    def test_report_from_seasonal_series(self, seasonal_series, test_settings):
        report = ClimateAnalyzer(settings=test_settings).analyze(seasonal_series)

        assert report.city_id == "testville"
        assert report.first_year == 1961
        assert report.last_year == 2023
        assert report.as_of_year == 2023
        assert report.highlighted_years == [2021, 2022, 2023]

        # Every year is complete, so every year qualifies
        assert [a.year for a in report.annual_anomalies] == list(range(1961, 2024))
        assert len(report.monthly_anomalies) == 63 * 12
        assert [d.decade for d in report.decades] == [
            "1960s", "1970s", "1980s", "1990s", "2000s", "2010s", "2020s"
        ]
        assert report.decades[0].diff_from_first == 0.0
        assert report.decades[-1].diff_from_first > 0

        # Built-in warming of 0.03 °C/yr is recovered by the trend fit
        assert report.forecast.slope_per_decade == pytest.approx(0.3, abs=0.01)
        assert report.forecast.r_squared > 0.95
        assert [p.year for p in report.forecast.forecast] == list(range(2024, 2034))
        assert [p.horizon for p in report.horizons.points] == [10, 20, 30, 50]
        assert report.horizons.points[0].avg_temp == pytest.approx(
            report.baseline_annual_mean + report.horizons.points[0].anomaly
        )

        assert len(report.outliers.flags) == 63
        assert len(report.smoothed_anomalies) == 63
        assert report.period_anomalies[0].label == "1961-1965"
        assert report.period_anomalies[-1].start_year < report.as_of_year

        assert len(report.decomposition.points) == 63 * 12
        assert report.decomposition.points[0].trend is None
        assert report.decomposition.points[6].trend is not None

        assert set(report.baseline_monthly_means) == set(range(1, 13))
        assert "02-29" in report.baseline_daily_means
        assert report.climate_normal_monthly[7] > report.baseline_monthly_means[7]
        assert len(report.exceedances) == 63

    def test_explicit_as_of_year(self, seasonal_series, test_settings):
        report = ClimateAnalyzer(settings=test_settings).analyze(seasonal_series, as_of_year=2000)

        assert report.highlighted_years == [1998, 1999, 2000]
        assert all(p.start_year < 2000 for p in report.period_anomalies)

    def test_settings_change_results(self, seasonal_series):
        settings = ClimateConfig(
            outliers={"threshold": 0.5},
            forecast={"years_ahead": 3, "horizons": [5]},
        )

        report = ClimateAnalyzer(settings=settings).analyze(seasonal_series)

        assert report.outliers.threshold == 0.5
        assert len(report.forecast.forecast) == 3
        assert [p.horizon for p in report.horizons.points] == [5]

    def test_payload_to_report(self, make_records, test_settings):
        records = make_records("1995-01-01", "2014-12-31", lambda ts: 10.0 + 0.1 * (ts.year - 1995))
        payload = {
            "cityId": "daejeon",
            "cityName": "Daejeon",
            "stationId": 133,
            "records": [
                {
                    "date": r.date.isoformat(),
                    "avgTemp": r.avg_temp,
                    "minTemp": r.min_temp,
                    "maxTemp": r.max_temp,
                }
                for r in records
            ],
        }

        report = ClimateAnalyzer(settings=test_settings).analyze(load_city_series(payload))

        assert report.city_name == "Daejeon"
        assert report.forecast.slope == pytest.approx(0.1, abs=1e-6)
        assert report.stats.temp_change == pytest.approx(1.0, abs=0.01)


class TestFailures:
    """Test error propagation."""

    def test_empty_series(self, test_settings):
        series = CityTimeSeries(city_id="empty", city_name="Empty")

        with pytest.raises(EmptySeriesError):
            ClimateAnalyzer(settings=test_settings).analyze(series)

    def test_too_few_years_for_trend(self, make_records, test_settings):
        series = CityTimeSeries(
            city_id="short",
            city_name="Short",
            records=make_records("2020-01-01", "2021-12-31"),
        )

        with pytest.raises(InsufficientDataError):
            ClimateAnalyzer(settings=test_settings).analyze(series)


def test_highlight_years():
    assert highlight_years(2024, 3) == [2022, 2023, 2024]
    assert highlight_years(2024, 0) == []
