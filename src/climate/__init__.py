"""
Climate module: baselines, anomalies, trend forecasts, outliers,
seasonal decomposition and smoothing.

All functions are pure and deterministic; ClimateAnalyzer composes them
into a per-city ClimateReport.
"""

from .anomalies import (
    calc_annual_anomalies,
    calc_decade_stats,
    calc_monthly_anomalies,
    calc_period_anomalies,
)
from .baselines import baseline_annual_mean, baseline_daily_means, baseline_monthly_means
from .decomposition import decompose_seasonality
from .detectors import ZScoreDetector, detect_anomalies
from .engine import ClimateAnalyzer
from .regression import calc_forecast, calc_multi_horizon_forecast, linear_regression
from .schema import (
    AnnualAnomaly,
    AnomalyDetectionResult,
    AnomalyFlag,
    ClimateReport,
    DecompositionPoint,
    DecompositionResult,
    ForecastPoint,
    ForecastResult,
    HorizonForecast,
    MonthlyAnomaly,
    MultiHorizonForecast,
    PeriodAnomaly,
    RegressionFit,
    SmoothedPoint,
)
from .smoothing import moving_average, smooth_annual_anomalies

__all__ = [
	"ClimateAnalyzer",
	"ClimateReport",
	"AnnualAnomaly",
	"MonthlyAnomaly",
	"PeriodAnomaly",
	"SmoothedPoint",
	"RegressionFit",
	"ForecastPoint",
	"ForecastResult",
	"HorizonForecast",
	"MultiHorizonForecast",
	"AnomalyFlag",
	"AnomalyDetectionResult",
	"DecompositionPoint",
	"DecompositionResult",
	"baseline_annual_mean",
	"baseline_monthly_means",
	"baseline_daily_means",
	"calc_annual_anomalies",
	"calc_monthly_anomalies",
	"calc_decade_stats",
	"calc_period_anomalies",
	"linear_regression",
	"calc_forecast",
	"calc_multi_horizon_forecast",
	"ZScoreDetector",
	"detect_anomalies",
	"decompose_seasonality",
	"moving_average",
	"smooth_annual_anomalies",
]
