"""
Pytest configuration and shared fixtures.

Provides synthetic daily temperature series and test settings for unit and
integration tests. Series are built with pandas date ranges so leap years
and month lengths match the real calendar.
"""

import math
from typing import Callable, List

import pandas as pd
import pytest

from src.core.config import ClimateConfig
from src.data.schema import CityTimeSeries, DailyRecord


def build_records(
    start: str,
    end: str,
    avg_temp: Callable[[pd.Timestamp], float] = lambda ts: 10.0,
    spread: float = 5.0,
) -> List[DailyRecord]:
    """
    Build one DailyRecord per calendar day in [start, end].

    avg_temp maps each day to its mean temperature; min/max are avg -/+ spread.
    """
    records = []
    for ts in pd.date_range(start, end, freq="D"):
        avg = float(avg_temp(ts))
        records.append(
            DailyRecord(
                date=ts.date(),
                avg_temp=avg,
                min_temp=avg - spread,
                max_temp=avg + spread,
            )
        )
    return records


def seasonal_temp(ts: pd.Timestamp) -> float:
    """Smooth annual cycle around 12 °C plus a slow warming trend."""
    cycle = 12.0 * math.sin(2 * math.pi * (ts.dayofyear - 105) / 365.25)
    return 12.0 + cycle + 0.03 * (ts.year - 1960)


@pytest.fixture
def make_records():
    """
    Fixture returning the build_records factory.

    Usage:
        records = make_records("1973-01-01", "2000-12-31", lambda ts: 10.0)
    """
    return build_records


@pytest.fixture
def test_settings() -> ClimateConfig:
    """
    Fixture providing climate settings with explicit defaults.

    Ensures tests run consistently regardless of CLIMATE_* environment
    overrides or a local .env file.
    """
    return ClimateConfig()


@pytest.fixture
def constant_baseline_records() -> List[DailyRecord]:
    """
    1973-2000 at a constant 10 °C plus 2020 at a constant 12 °C.
    """
    return (
        build_records("1973-01-01", "2000-12-31", lambda ts: 10.0)
        + build_records("2020-01-01", "2020-12-31", lambda ts: 12.0)
    )


@pytest.fixture
def seasonal_records() -> List[DailyRecord]:
    """
    Complete daily series 1961-2023 with an annual cycle and warming trend.
    """
    return build_records("1961-01-01", "2023-12-31", seasonal_temp)


@pytest.fixture
def seasonal_series(seasonal_records) -> CityTimeSeries:
    """The seasonal records wrapped as a city series."""
    return CityTimeSeries(
        city_id="testville",
        city_name="Testville",
        station_id=999,
        records=seasonal_records,
    )


@pytest.fixture
def sample_daily_dataframe() -> pd.DataFrame:
    """
    Small daily DataFrame with camelCase columns and one incomplete row.
    """
    df = pd.DataFrame(
        {
            "date": pd.date_range("2021-07-01", periods=5, freq="D"),
            "avgTemp": [26.0, 27.5, None, 28.0, 25.5],
            "minTemp": [22.0, 25.0, 24.0, 25.5, 21.0],
            "maxTemp": [31.0, 33.0, 32.0, 34.5, 30.0],
        }
    )
    return df


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
