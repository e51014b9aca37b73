"""
Outlier detection over the annual anomaly series.

Implements an explainable Z-score classification: each year's anomaly is
standardized against the population mean and standard deviation of the
whole series (divide by n, not n - 1).
"""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt
from typing import Optional, Sequence, Tuple

from .schema import AnnualAnomaly, AnomalyDetectionResult, AnomalyFlag


def population_stats(values: Sequence[float]) -> Tuple[float, float]:
    """
    Population mean and standard deviation.

    Returns (0.0, 0.0) for an empty sequence.
    """
    if not values:
        return 0.0, 0.0
    n = len(values)
    mean = sum(values) / n
    variance = sum((v - mean) ** 2 for v in values) / n
    return mean, sqrt(variance)


@dataclass
class ZScoreDetector:
    """
    Z-score detector for annual anomalies.

    A year is anomalous when |z| > threshold; a z-score exactly equal to
    the threshold is not. If the series has zero spread every z-score is 0.
    """

    threshold: float = 2.0

    def compute(self, value: float, mean: float, std: float) -> float:
        if std == 0:
            return 0.0
        return (value - mean) / std

    def is_anomalous(self, z_score: float) -> bool:
        return abs(z_score) > self.threshold

    def detect(self, annual: Sequence[AnnualAnomaly]) -> AnomalyDetectionResult:
        mean, std = population_stats([a.anomaly for a in annual])

        flags = []
        for a in annual:
            z = self.compute(a.anomaly, mean, std)
            flags.append(
                AnomalyFlag(
                    year=a.year,
                    anomaly=a.anomaly,
                    avg_temp=a.avg_temp,
                    z_score=z,
                    is_anomaly=self.is_anomalous(z),
                )
            )

        return AnomalyDetectionResult(flags=flags, mean=mean, std=std, threshold=self.threshold)


def detect_anomalies(
    annual: Sequence[AnnualAnomaly],
    threshold: Optional[float] = None,
) -> AnomalyDetectionResult:
    """
    Flag anomalous years with the default or a given Z-score threshold.
    """
    detector = ZScoreDetector() if threshold is None else ZScoreDetector(threshold=threshold)
    return detector.detect(annual)
