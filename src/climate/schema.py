"""
Schema definitions for derived climate indicators.

All outputs are deterministic value objects: created by a single function
call from an input series, never mutated afterwards, and safe to recompute.
No field is ever NaN; undefined values use None.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.data.schema import CityStats, DecadeStats, ExceedanceCounts


class AnnualAnomaly(BaseModel):
    """
    Deviation of one year's mean from the annual baseline.

    Fields:
    - year: calendar year (only years meeting the coverage threshold)
    - avg_temp: mean daily temperature of the year
    - anomaly: avg_temp minus the baseline annual mean
    """

    model_config = ConfigDict(frozen=True)

    year: int
    avg_temp: float
    anomaly: float


class MonthlyAnomaly(BaseModel):
    """
    Deviation of one month's mean from the matching calendar-month baseline.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    avg_temp: float
    anomaly: float


class PeriodAnomaly(BaseModel):
    """
    Mean annual anomaly across a fixed multi-year period.

    Fields:
    - start_year/end_year: inclusive period bounds
    - anomaly: mean of the annual anomalies inside the period
    - years: number of annual anomalies that contributed
    """

    model_config = ConfigDict(frozen=True)

    start_year: int
    end_year: int
    anomaly: float
    years: int = Field(ge=1)

    @property
    def label(self) -> str:
        return f"{self.start_year}-{self.end_year}"


class SmoothedPoint(BaseModel):
    """A moving-average value positioned at its source year."""

    model_config = ConfigDict(frozen=True)

    year: int
    value: float


class RegressionFit(BaseModel):
    """
    Ordinary least squares fit of y = slope * x + intercept.

    Fields:
    - slope, intercept, r_squared: fit coefficients (r_squared = 0 if SStot == 0)
    - n: number of points
    - x_mean: mean of x
    - sxx: sum of squared x deviations (> 0)
    - residual_se: sqrt(SSres / (n - 2))
    """

    model_config = ConfigDict(frozen=True)

    slope: float
    intercept: float
    r_squared: float
    n: int = Field(ge=3)
    x_mean: float
    sxx: float = Field(gt=0.0)
    residual_se: float = Field(ge=0.0)

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


class ForecastPoint(BaseModel):
    """
    Projected anomaly for one future year with its prediction interval.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    value: float
    lower: float
    upper: float


class ForecastResult(BaseModel):
    """
    Linear trend of the annual anomaly series and its forward projection.

    Fields:
    - historical: the annual anomalies the trend was fitted on
    - forecast: one point per year after the last observed year
    - slope/intercept/r_squared: OLS fit (anomaly per year)
    - slope_per_decade: slope * 10
    """

    model_config = ConfigDict(frozen=True)

    historical: List[AnnualAnomaly]
    forecast: List[ForecastPoint]
    slope: float
    intercept: float
    r_squared: float
    slope_per_decade: float


class HorizonForecast(BaseModel):
    """
    Point forecast at a fixed horizon after the last observed year.

    Exceedance-day counts are the recent observed mean carried forward flat;
    they do not follow the temperature trend.
    """

    model_config = ConfigDict(frozen=True)

    horizon: int = Field(ge=1)
    year: int
    anomaly: float
    avg_temp: float
    tropical_nights: float = Field(ge=0.0)
    heatwave_days: float = Field(ge=0.0)
    summer_days: float = Field(ge=0.0)


class MultiHorizonForecast(BaseModel):
    """
    Multi-horizon point forecasts sharing one trend fit.

    Fields:
    - baseline_mean: annual baseline used to convert anomalies back to °C
    - slope/intercept: trend fit shared by all horizons
    - exceedance_window: recent years averaged for exceedance projections
    - points: one HorizonForecast per requested horizon, ascending
    """

    model_config = ConfigDict(frozen=True)

    baseline_mean: float
    slope: float
    intercept: float
    exceedance_window: int = Field(ge=1)
    points: List[HorizonForecast]


class AnomalyFlag(BaseModel):
    """
    Z-score classification of one year's anomaly.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    anomaly: float
    avg_temp: float
    z_score: float
    is_anomaly: bool


class AnomalyDetectionResult(BaseModel):
    """
    Outlier flags plus the distribution parameters used to compute them.

    Fields:
    - flags: one AnomalyFlag per annual anomaly, in input order
    - mean/std: population mean and standard deviation of the anomalies
    - threshold: |z| strictly above this is anomalous
    """

    model_config = ConfigDict(frozen=True)

    flags: List[AnomalyFlag]
    mean: float
    std: float = Field(ge=0.0)
    threshold: float

    @property
    def anomalous_years(self) -> List[int]:
        return [f.year for f in self.flags if f.is_anomaly]


class DecompositionPoint(BaseModel):
    """
    One month of a classical additive decomposition.

    trend and residual are None where the centered window is unavailable
    (series edges or calendar gaps).
    """

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    observed: float
    trend: Optional[float] = None
    seasonal: float
    residual: Optional[float] = None


class DecompositionResult(BaseModel):
    """
    Decomposed monthly series.

    Fields:
    - points: chronological decomposition points
    - seasonal_indices: month (1-12) -> seasonal index applied to every year
    """

    model_config = ConfigDict(frozen=True)

    points: List[DecompositionPoint]
    seasonal_indices: Dict[int, float]


class ClimateReport(BaseModel):
    """
    Every derived indicator for one city, produced by ClimateAnalyzer.

    Fields:
    - city_id/city_name: identity of the analyzed series
    - first_year/last_year: observed year range
    - as_of_year: reference year for periods and highlights (explicit, never wall clock)
    - baseline_*: reference-period means
    - climate_normal_monthly: monthly means over the alternate normal period
    - remaining fields: outputs of the individual engine components
    """

    model_config = ConfigDict(frozen=True)

    city_id: str
    city_name: str
    first_year: int
    last_year: int
    as_of_year: int
    highlighted_years: List[int]

    baseline_annual_mean: float
    baseline_monthly_means: Dict[int, float]
    baseline_daily_means: Dict[str, float]
    climate_normal_monthly: Dict[int, float]

    annual_anomalies: List[AnnualAnomaly]
    monthly_anomalies: List[MonthlyAnomaly]
    period_anomalies: List[PeriodAnomaly]
    smoothed_anomalies: List[SmoothedPoint]
    decades: List[DecadeStats]
    exceedances: List[ExceedanceCounts]
    stats: CityStats

    forecast: ForecastResult
    horizons: MultiHorizonForecast
    outliers: AnomalyDetectionResult
    decomposition: DecompositionResult
