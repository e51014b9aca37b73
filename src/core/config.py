"""
Application configuration for the climate analytics engine.

Provides environment-aware settings with documented defaults. Reference periods,
coverage thresholds and exceedance limits are configurable so regional
recalibration never requires code changes.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaselineConfig(BaseModel):
	"""
	Reference periods for anomaly baselines.

	Notes:
	- baseline_start/baseline_end: zero point for annual and monthly anomalies.
	- normal_start/normal_end: alternate climate normal used for monthly
	  climatology (e.g. the WMO 1991-2020 normal).
	"""

	baseline_start: int = Field(1973, description="First year of the reference period")
	baseline_end: int = Field(2000, description="Last year of the reference period")
	normal_start: int = Field(1991, description="First year of the climate normal")
	normal_end: int = Field(2020, description="Last year of the climate normal")

	@model_validator(mode="after")
	def _check_ordering(self) -> "BaselineConfig":
		if self.baseline_start > self.baseline_end:
			raise ValueError("baseline_start must not be after baseline_end")
		if self.normal_start > self.normal_end:
			raise ValueError("normal_start must not be after normal_end")
		return self


class CoverageConfig(BaseModel):
	"""
	Missing-data thresholds.

	Years and months below these counts are dropped from every year- or
	month-keyed output (anomalies, decades, forecasts, decomposition).
	"""

	min_days_per_year: int = Field(300, ge=1, le=366)
	min_days_per_month: int = Field(20, ge=1, le=31)


class ExceedanceThresholds(BaseModel):
	"""
	Fixed temperature thresholds (°C) for exceedance-day counting.
	"""

	tropical_night_min_temp: float = Field(25.0, description="min_temp >= this is a tropical night")
	heatwave_max_temp: float = Field(33.0, description="max_temp >= this is a heatwave day")
	summer_day_max_temp: float = Field(25.0, description="max_temp >= this is a summer day")


class OutlierConfig(BaseModel):
	"""
	Z-score outlier classification. A year is anomalous when |z| > threshold.
	"""

	threshold: float = Field(2.0, ge=0.0)


class ForecastConfig(BaseModel):
	"""
	Trend forecast configuration.

	Notes:
	- critical_value: 1.96 approximates the 95% t-quantile; it understates the
	  interval width for short records (n < 30).
	- exceedance_window: number of most recent years whose mean exceedance-day
	  counts are carried forward flat for multi-horizon projections.
	"""

	years_ahead: int = Field(10, ge=1)
	horizons: List[int] = Field(default_factory=lambda: [10, 20, 30, 50])
	critical_value: float = Field(1.96, gt=0.0)
	exceedance_window: int = Field(5, ge=1)


class SmoothingConfig(BaseModel):
	"""
	Smoothing and period summaries used by presentation layers.
	"""

	window: int = Field(10, ge=1, description="Moving-average window in years")
	period_length: int = Field(5, ge=1, description="Years per period anomaly bucket")
	highlight_years: int = Field(3, ge=0, description="Most recent years to highlight")


class ClimateConfig(BaseModel):
	"""
	Climate analytics configuration.
	"""

	baselines: BaselineConfig = BaselineConfig()
	coverage: CoverageConfig = CoverageConfig()
	exceedance: ExceedanceThresholds = ExceedanceThresholds()
	outliers: OutlierConfig = OutlierConfig()
	forecast: ForecastConfig = ForecastConfig()
	smoothing: SmoothingConfig = SmoothingConfig()


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.

	Nested values use a double underscore, e.g.
	CLIMATE_CLIMATE__BASELINES__BASELINE_START=1981.
	"""

	model_config = SettingsConfigDict(
		env_prefix="CLIMATE_",
		env_nested_delimiter="__",
		env_file=".env",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	climate: ClimateConfig = ClimateConfig()

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


config = Config()
