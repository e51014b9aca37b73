"""
Anomaly series: aggregate means minus matching-granularity baselines.

Annual anomalies subtract the single annual baseline scalar; monthly
anomalies subtract the baseline of the same calendar month. Outputs are
ascending by year (then month) regardless of input order.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from src.data.aggregation import annual_aggregate, decade_aggregate, monthly_aggregate
from src.data.schema import DailyRecord, DecadeStats

from .baselines import BASELINE_END, BASELINE_START, baseline_annual_mean, baseline_monthly_means
from .schema import AnnualAnomaly, MonthlyAnomaly, PeriodAnomaly

logger = logging.getLogger(__name__)


def calc_annual_anomalies(
    records: Iterable[DailyRecord],
    baseline_start: int = BASELINE_START,
    baseline_end: int = BASELINE_END,
    min_days: int = 300,
    baseline_mean: Optional[float] = None,
) -> List[AnnualAnomaly]:
    """
    Per-year anomaly against the annual baseline mean.

    Years with fewer than min_days observed days are excluded. A precomputed
    baseline_mean may be supplied; otherwise it is derived from records.
    """
    records = list(records)
    if baseline_mean is None:
        baseline_mean = baseline_annual_mean(records, baseline_start, baseline_end)

    return [
        AnnualAnomaly(year=ym.year, avg_temp=ym.mean, anomaly=ym.mean - baseline_mean)
        for ym in annual_aggregate(records, min_days)
    ]


def calc_monthly_anomalies(
    records: Iterable[DailyRecord],
    baseline_start: int = BASELINE_START,
    baseline_end: int = BASELINE_END,
    min_days: int = 20,
) -> List[MonthlyAnomaly]:
    """
    Per-(year, month) anomaly against the same calendar month's baseline.

    Months with fewer than min_days observed days are excluded.
    """
    records = list(records)
    baselines = baseline_monthly_means(records, baseline_start, baseline_end)

    return [
        MonthlyAnomaly(
            year=mm.year,
            month=mm.month,
            avg_temp=mm.mean,
            anomaly=mm.mean - baselines[mm.month],
        )
        for mm in monthly_aggregate(records, min_days)
    ]


def calc_decade_stats(
    records: Iterable[DailyRecord],
    min_days: int = 300,
) -> List[DecadeStats]:
    """Decade summaries; see src.data.aggregation.decade_aggregate."""
    return decade_aggregate(records, min_days)


def calc_period_anomalies(
    annual: List[AnnualAnomaly],
    start_year: int,
    as_of_year: int,
    period_length: int = 5,
) -> List[PeriodAnomaly]:
    """
    Mean annual anomaly over consecutive fixed periods.

    Periods are [y, y + period_length - 1] for y = start_year, start_year +
    period_length, ... while y < as_of_year. The as-of year is explicit so
    results never depend on the wall clock. Periods without any annual
    anomaly are omitted.

    Raises:
        ValueError: If period_length < 1
    """
    if period_length < 1:
        raise ValueError("period_length must be >= 1")

    periods = []
    for start in range(start_year, as_of_year, period_length):
        end = start + period_length - 1
        values = [a.anomaly for a in annual if start <= a.year <= end]
        if not values:
            continue
        periods.append(
            PeriodAnomaly(
                start_year=start,
                end_year=end,
                anomaly=sum(values) / len(values),
                years=len(values),
            )
        )
    return periods
