"""
Climate analytics engine.

Runs the full indicator pipeline for one city:

    daily records → baselines / aggregation → anomalies
        → {trend forecast, outliers, decomposition, smoothing}

Every step is a pure function of the input series and the settings; the
analyzer holds no per-city state, so one instance can analyze many cities
(or the same city with different settings) concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.core.config import ClimateConfig, config
from src.core.exceptions import EmptySeriesError
from src.data.aggregation import city_stats, decade_aggregate, exceedance_counts
from src.data.schema import CityTimeSeries

from .anomalies import calc_annual_anomalies, calc_monthly_anomalies, calc_period_anomalies
from .baselines import baseline_annual_mean, baseline_daily_means, baseline_monthly_means
from .decomposition import decompose_seasonality
from .detectors import ZScoreDetector
from .regression import calc_forecast, calc_multi_horizon_forecast
from .schema import ClimateReport
from .smoothing import smooth_annual_anomalies

logger = logging.getLogger(__name__)


def highlight_years(as_of_year: int, count: int) -> List[int]:
    """The `count` years ending at as_of_year, ascending."""
    return list(range(as_of_year - count + 1, as_of_year + 1)) if count > 0 else []


@dataclass
class ClimateAnalyzer:
    """
    Deterministic climate indicator engine.

    Notes:
    - Settings default to the global config but can be replaced per instance
      for testing or regional recalibration.
    - The as-of year is always explicit (defaulting to the last observed
      year); the wall clock is never read.
    - Failures propagate: an empty series raises EmptySeriesError and a
      record too short for a trend raises InsufficientDataError.
    """

    settings: ClimateConfig = field(default_factory=lambda: config.climate)

    def __post_init__(self) -> None:
        self._detector = ZScoreDetector(threshold=self.settings.outliers.threshold)

    def analyze(
        self,
        series: CityTimeSeries,
        as_of_year: Optional[int] = None,
    ) -> ClimateReport:
        if not series.records:
            raise EmptySeriesError(f"No daily records for {series.city_id}")

        s = self.settings
        records = series.records
        first_year, last_year = series.first_year, series.last_year
        as_of = as_of_year if as_of_year is not None else last_year

        baseline_mean = baseline_annual_mean(
            records, s.baselines.baseline_start, s.baselines.baseline_end
        )
        annual = calc_annual_anomalies(
            records,
            min_days=s.coverage.min_days_per_year,
            baseline_mean=baseline_mean,
        )
        exceedances = exceedance_counts(records, s.exceedance)

        forecast = calc_forecast(
            annual,
            years_ahead=s.forecast.years_ahead,
            critical_value=s.forecast.critical_value,
        )
        horizons = calc_multi_horizon_forecast(
            annual,
            baseline_mean,
            exceedances,
            horizons=s.forecast.horizons,
            exceedance_window=s.forecast.exceedance_window,
        )

        report = ClimateReport(
            city_id=series.city_id,
            city_name=series.city_name,
            first_year=first_year,
            last_year=last_year,
            as_of_year=as_of,
            highlighted_years=highlight_years(as_of, s.smoothing.highlight_years),
            baseline_annual_mean=baseline_mean,
            baseline_monthly_means=baseline_monthly_means(
                records, s.baselines.baseline_start, s.baselines.baseline_end
            ),
            baseline_daily_means=baseline_daily_means(
                records, s.baselines.baseline_start, s.baselines.baseline_end
            ),
            climate_normal_monthly=baseline_monthly_means(
                records, s.baselines.normal_start, s.baselines.normal_end
            ),
            annual_anomalies=annual,
            monthly_anomalies=calc_monthly_anomalies(
                records,
                s.baselines.baseline_start,
                s.baselines.baseline_end,
                min_days=s.coverage.min_days_per_month,
            ),
            period_anomalies=calc_period_anomalies(
                annual, first_year, as_of, s.smoothing.period_length
            ),
            smoothed_anomalies=smooth_annual_anomalies(annual, s.smoothing.window),
            decades=decade_aggregate(records, s.coverage.min_days_per_year),
            exceedances=list(exceedances.values()),
            stats=city_stats(records, s.exceedance),
            forecast=forecast,
            horizons=horizons,
            outliers=self._detector.detect(annual),
            decomposition=decompose_seasonality(records, s.coverage.min_days_per_month),
        )

        logger.info(
            f"Analyzed {series.city_id}: {len(annual)} qualifying years "
            f"({first_year}-{last_year}), trend {forecast.slope_per_decade:+.2f} °C/decade, "
            f"{len(report.outliers.anomalous_years)} anomalous years"
        )
        return report
