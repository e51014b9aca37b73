"""
Linear trend fitting and forecasting of annual anomalies.

Uses the closed-form OLS normal equations:

    slope     = (n*Σxy - Σx*Σy) / (n*Σx² - (Σx)²)
    intercept = (Σy - slope*Σx) / n
    R²        = 1 - SSres/SStot   (0 if SStot == 0)

Prediction intervals use the standard OLS formula with a fixed critical
value. The default 1.96 is the normal approximation of the 95% quantile,
not the t-distribution quantile for n - 2 degrees of freedom, so intervals
are slightly too narrow for short records (n < 30). Pass a t-quantile as
critical_value for a stricter interval.
"""

from __future__ import annotations

import logging
from math import sqrt
from typing import Dict, Iterable, List, Sequence

from src.core.exceptions import InsufficientDataError
from src.data.schema import ExceedanceCounts

from .schema import (
    AnnualAnomaly,
    ForecastPoint,
    ForecastResult,
    HorizonForecast,
    MultiHorizonForecast,
    RegressionFit,
)

logger = logging.getLogger(__name__)

MIN_POINTS = 3
DEFAULT_HORIZONS = (10, 20, 30, 50)


def linear_regression(xs: Sequence[float], ys: Sequence[float]) -> RegressionFit:
    """
    Fit y = slope * x + intercept by ordinary least squares.

    Raises:
        ValueError: If xs and ys differ in length
        InsufficientDataError: If fewer than 3 points, or all x are equal
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys differ in length: {len(xs)} != {len(ys)}")

    n = len(xs)
    if n < MIN_POINTS:
        raise InsufficientDataError(
            f"Regression needs at least {MIN_POINTS} points, got {n}"
        )

    xs = [float(x) for x in xs]
    ys = [float(y) for y in ys]

    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)

    denom = n * sum_x2 - sum_x ** 2
    x_mean = sum_x / n
    sxx = sum((x - x_mean) ** 2 for x in xs)
    if denom == 0 or sxx == 0:
        raise InsufficientDataError("Regression is undefined: all x values are equal")

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n

    y_mean = sum_y / n
    ss_tot = sum((y - y_mean) ** 2 for y in ys)
    ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, ys))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot != 0 else 0.0

    return RegressionFit(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        n=n,
        x_mean=x_mean,
        sxx=sxx,
        residual_se=sqrt(ss_res / (n - 2)),
    )


def fit_anomaly_trend(annual: Sequence[AnnualAnomaly]) -> RegressionFit:
    """Fit the OLS trend of anomaly against year."""
    return linear_regression([a.year for a in annual], [a.anomaly for a in annual])


def calc_forecast(
    annual: Sequence[AnnualAnomaly],
    years_ahead: int = 10,
    critical_value: float = 1.96,
) -> ForecastResult:
    """
    Project the annual anomaly trend forward with prediction intervals.

    Produces one ForecastPoint per year from last_year + 1 to
    last_year + years_ahead. Interval half-width:

        critical_value * se * sqrt(1 + 1/n + (year - x_mean)² / Sxx)

    Raises:
        InsufficientDataError: If fewer than 3 annual anomalies
        ValueError: If years_ahead < 0
    """
    if years_ahead < 0:
        raise ValueError("years_ahead must be >= 0")

    annual = sorted(annual, key=lambda a: a.year)
    fit = fit_anomaly_trend(annual)

    last_year = annual[-1].year
    forecast: List[ForecastPoint] = []
    for year in range(last_year + 1, last_year + years_ahead + 1):
        value = fit.predict(year)
        margin = critical_value * fit.residual_se * sqrt(
            1 + 1 / fit.n + (year - fit.x_mean) ** 2 / fit.sxx
        )
        forecast.append(
            ForecastPoint(year=year, value=value, lower=value - margin, upper=value + margin)
        )

    logger.debug(
        f"Fitted trend over {fit.n} years: {fit.slope * 10:+.3f} °C/decade, "
        f"R²={fit.r_squared:.3f}"
    )

    return ForecastResult(
        historical=annual,
        forecast=forecast,
        slope=fit.slope,
        intercept=fit.intercept,
        r_squared=fit.r_squared,
        slope_per_decade=fit.slope * 10,
    )


def recent_exceedance_means(
    exceedances: Dict[int, ExceedanceCounts],
    years: Iterable[int],
    window: int = 5,
) -> Dict[str, float]:
    """
    Mean exceedance-day counts over the last `window` of the given years.

    `years` are the qualifying years of the series, so gap years and years
    dropped for low coverage never enter the mean. The divisor is the number
    of years actually used; with none, every mean is 0.0.
    """
    recent = [y for y in sorted(set(years)) if y in exceedances][-window:]
    totals = {"tropical_nights": 0, "heatwave_days": 0, "summer_days": 0}
    for year in recent:
        counts = exceedances[year]
        totals["tropical_nights"] += counts.tropical_nights
        totals["heatwave_days"] += counts.heatwave_days
        totals["summer_days"] += counts.summer_days
    if not recent:
        return {key: 0.0 for key in totals}
    return {key: total / len(recent) for key, total in totals.items()}


def calc_multi_horizon_forecast(
    annual: Sequence[AnnualAnomaly],
    baseline_mean: float,
    exceedances: Dict[int, ExceedanceCounts],
    horizons: Sequence[int] = DEFAULT_HORIZONS,
    exceedance_window: int = 5,
) -> MultiHorizonForecast:
    """
    Point forecasts at several horizons after the last observed year.

    Temperature: same OLS trend as calc_forecast; avg_temp is
    baseline_mean + projected anomaly.

    Exceedance days: the mean of the last `exceedance_window` years present
    in `annual` is carried forward flat to every horizon. Gap years and years
    below the coverage threshold are skipped. No trend is applied to these
    counts.

    Raises:
        InsufficientDataError: If fewer than 3 annual anomalies
        ValueError: If a horizon < 1 or exceedance_window < 1
    """
    if exceedance_window < 1:
        raise ValueError("exceedance_window must be >= 1")
    if any(h < 1 for h in horizons):
        raise ValueError(f"horizons must be >= 1: {list(horizons)}")

    annual = sorted(annual, key=lambda a: a.year)
    fit = fit_anomaly_trend(annual)
    last_year = annual[-1].year
    carried = recent_exceedance_means(
        exceedances, [a.year for a in annual], exceedance_window
    )

    points = []
    for horizon in sorted(set(horizons)):
        year = last_year + horizon
        anomaly = fit.predict(year)
        points.append(
            HorizonForecast(
                horizon=horizon,
                year=year,
                anomaly=anomaly,
                avg_temp=baseline_mean + anomaly,
                **carried,
            )
        )

    return MultiHorizonForecast(
        baseline_mean=baseline_mean,
        slope=fit.slope,
        intercept=fit.intercept,
        exceedance_window=exceedance_window,
        points=points,
    )
