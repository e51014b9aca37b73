"""
Unit tests for Z-score outlier detection.
"""

from math import sqrt

import pytest

from src.climate.detectors import ZScoreDetector, detect_anomalies, population_stats
from src.climate.schema import AnnualAnomaly


def _series(values):
    return [
        AnnualAnomaly(year=2000 + i, avg_temp=12.0 + v, anomaly=v)
        for i, v in enumerate(values)
    ]


def test_population_stats_divide_by_n():
    mean, std = population_stats([1.0, 2.0, 3.0, 4.0])

    assert mean == pytest.approx(2.5)
    assert std == pytest.approx(sqrt(1.25))


def test_population_stats_empty():
    assert population_stats([]) == (0.0, 0.0)


def test_zscore_computes_value():
    detector = ZScoreDetector()

    assert detector.compute(14.0, mean=10.0, std=2.0) == pytest.approx(2.0)
    assert detector.compute(14.0, mean=10.0, std=0.0) == 0.0


def test_detects_outlier_year():
    values = [0.0] * 19 + [3.0]

    result = detect_anomalies(_series(values))

    assert result.anomalous_years == [2019]
    assert result.threshold == 2.0
    assert result.flags[-1].z_score > 2.0
    assert result.flags[-1].avg_temp == pytest.approx(15.0)


def test_deviations_sum_to_zero():
    values = [0.3, -0.2, 1.1, 0.4, -0.9, 0.05, 2.2]

    result = detect_anomalies(_series(values))

    assert sum(f.anomaly - result.mean for f in result.flags) == pytest.approx(0.0, abs=1e-12)
    assert sum(f.z_score for f in result.flags) == pytest.approx(0.0, abs=1e-9)


def test_boundary_is_not_anomalous():
    # mean 1, population std 1 -> z-scores are exactly -1 and +1
    result = detect_anomalies(_series([0.0, 2.0]), threshold=1.0)

    assert [f.z_score for f in result.flags] == [-1.0, 1.0]
    assert not any(f.is_anomaly for f in result.flags)

    stricter = detect_anomalies(_series([0.0, 2.0]), threshold=0.99)
    assert all(f.is_anomaly for f in stricter.flags)


def test_zero_spread_series():
    result = detect_anomalies(_series([0.5, 0.5, 0.5]))

    assert result.std == 0.0
    assert all(f.z_score == 0.0 for f in result.flags)
    assert result.anomalous_years == []


def test_empty_series():
    result = detect_anomalies([])

    assert result.flags == []
    assert result.mean == 0.0
    assert result.std == 0.0
