"""
Classical additive seasonal decomposition of the monthly mean series.

    observed = trend + seasonal + residual

- Trend: centered 2x12 moving average,
  (0.5*x[i-6] + x[i-5] + ... + x[i+5] + 0.5*x[i+6]) / 12.
  Undefined (None) for the first and last 6 points, and wherever the
  13-month window is interrupted by a missing month.
- Seasonal: per calendar month, the mean of (observed - trend) over points
  with a defined trend; one fixed index per month for all years.
- Residual: observed - trend - seasonal, None where trend is None.

Single pass with no re-estimation loop. Operates on monthly means, not
anomalies.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from src.data.aggregation import monthly_aggregate
from src.data.schema import DailyRecord, MonthlyMean

from .schema import DecompositionPoint, DecompositionResult

logger = logging.getLogger(__name__)

HALF_WINDOW = 6


def _month_index(mm: MonthlyMean) -> int:
    return mm.year * 12 + (mm.month - 1)


def centered_trend(series: Sequence[MonthlyMean]) -> List[Optional[float]]:
    """
    2x12 centered moving average of a chronological monthly series.

    Returns one entry per input point; None where the window cannot center.
    """
    n = len(series)
    trend: List[Optional[float]] = [None] * n

    for i in range(HALF_WINDOW, n - HALF_WINDOW):
        # 13 consecutive points span exactly 12 calendar months only without gaps
        if _month_index(series[i + HALF_WINDOW]) - _month_index(series[i - HALF_WINDOW]) != 12:
            continue
        total = 0.5 * series[i - HALF_WINDOW].mean
        total += sum(series[j].mean for j in range(i - 5, i + 6))
        total += 0.5 * series[i + HALF_WINDOW].mean
        trend[i] = total / 12

    return trend


def seasonal_indices(
    series: Sequence[MonthlyMean],
    trend: Sequence[Optional[float]],
) -> Dict[int, float]:
    """
    Mean detrended value per calendar month (1-12); 0.0 where no trend exists.
    """
    detrended: Dict[int, List[float]] = {m: [] for m in range(1, 13)}
    for mm, t in zip(series, trend):
        if t is not None:
            detrended[mm.month].append(mm.mean - t)

    return {
        month: (sum(values) / len(values) if values else 0.0)
        for month, values in detrended.items()
    }


def decompose_seasonality(
    records: Iterable[DailyRecord],
    min_days: int = 20,
) -> DecompositionResult:
    """
    Decompose the monthly mean series built from daily records.

    Months with fewer than min_days observed days are dropped before
    decomposition; the trend is None around the resulting gaps.
    """
    series = monthly_aggregate(records, min_days)
    trend = centered_trend(series)
    indices = seasonal_indices(series, trend)

    points = []
    for mm, t in zip(series, trend):
        seasonal = indices[mm.month]
        points.append(
            DecompositionPoint(
                year=mm.year,
                month=mm.month,
                observed=mm.mean,
                trend=t,
                seasonal=seasonal,
                residual=(mm.mean - t - seasonal) if t is not None else None,
            )
        )

    defined = sum(1 for t in trend if t is not None)
    logger.debug(f"Decomposed {len(series)} months; trend defined for {defined}")

    return DecompositionResult(points=points, seasonal_indices=indices)
