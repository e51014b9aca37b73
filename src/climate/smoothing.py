"""
Centered moving average with shrinking edge windows.

Edge points average over the values that exist instead of padding, so the
output always has one defined value per input point.
"""

from __future__ import annotations

from typing import List, Sequence

from .schema import AnnualAnomaly, SmoothedPoint


def moving_average(values: Sequence[float], window: int) -> List[float]:
    """
    Centered moving average clipped to the series bounds.

    For each index i the mean is taken over
    [i - window // 2, i + window // 2] intersected with [0, len - 1].
    An even window therefore spans window + 1 points away from the edges.

    Raises:
        ValueError: If window < 1
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    values = list(values)
    n = len(values)
    half = window // 2

    result = []
    for i in range(n):
        start = max(0, i - half)
        end = min(n - 1, i + half)
        result.append(sum(values[start:end + 1]) / (end - start + 1))
    return result


def smooth_annual_anomalies(
    annual: Sequence[AnnualAnomaly],
    window: int = 10,
) -> List[SmoothedPoint]:
    """Moving average of the annual anomaly series, keyed by year."""
    smoothed = moving_average([a.anomaly for a in annual], window)
    return [SmoothedPoint(year=a.year, value=v) for a, v in zip(annual, smoothed)]
