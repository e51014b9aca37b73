"""
Canonical daily-observation schema for the climate analytics engine.

This module defines the validated representation of a single day of station
observations, the per-city series handed to the engine, and the bucket types
produced by aggregation. All other components consume these types.

Design rationale:
- Day precision dates (datetime.date); one record per calendar date
- Temperatures in °C, always finite (NaN/inf are rejected at construction)
- Aggregation keys are typed (int year, (year, month) pairs), never strings
- Derived buckets are frozen value objects
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DailyRecord(BaseModel):
    """
    One day of observations for one station.

    Attributes:
        date: Calendar date of the observation
        avg_temp: Daily mean temperature (°C)
        min_temp: Daily minimum temperature (°C)
        max_temp: Daily maximum temperature (°C)

    Notes:
        - Non-finite temperatures raise a ValidationError, so rows with
          missing readings must be filtered (see normalizers) before this point
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    date: datetime.date = Field(..., description="Observation date")
    avg_temp: float = Field(..., description="Daily mean temperature (°C)")
    min_temp: float = Field(..., description="Daily minimum temperature (°C)")
    max_temp: float = Field(..., description="Daily maximum temperature (°C)")


class CityTimeSeries(BaseModel):
    """
    Date-ordered daily records for one observation station.

    Attributes:
        city_id: Short identifier, e.g. "seoul"
        city_name: Display name
        station_id: Observing station number (None if unknown)
        records: DailyRecord list, strictly ascending by date

    Notes:
        - Immutable once loaded; the engine never mutates it
        - Duplicate or out-of-order dates are a validation error
    """

    model_config = ConfigDict(frozen=True)

    city_id: str = Field(..., min_length=1, max_length=64)
    city_name: str = Field(..., min_length=1, max_length=128)
    station_id: Optional[int] = Field(default=None, ge=0)
    records: List[DailyRecord] = Field(default_factory=list)

    @field_validator("records")
    @classmethod
    def _check_ordering(cls, records: List[DailyRecord]) -> List[DailyRecord]:
        for previous, current in zip(records, records[1:]):
            if current.date <= previous.date:
                raise ValueError(
                    f"records must be strictly ascending by date: "
                    f"{current.date.isoformat()} follows {previous.date.isoformat()}"
                )
        return records

    @property
    def record_count(self) -> int:
        """Total number of daily records."""
        return len(self.records)

    @property
    def first_year(self) -> Optional[int]:
        return self.records[0].date.year if self.records else None

    @property
    def last_year(self) -> Optional[int]:
        return self.records[-1].date.year if self.records else None


class YearlyMean(BaseModel):
    """Mean daily temperature of one calendar year."""

    model_config = ConfigDict(frozen=True)

    year: int
    mean: float
    count: int = Field(..., ge=1, description="Observed days in the year")


class MonthlyMean(BaseModel):
    """Mean daily temperature of one (year, month)."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    mean: float
    count: int = Field(..., ge=1, description="Observed days in the month")


class DayOfYearPoint(BaseModel):
    """A single day positioned within its year (1..366)."""

    model_config = ConfigDict(frozen=True)

    day_of_year: int = Field(..., ge=1, le=366)
    avg_temp: float
    date: datetime.date


class ExceedanceCounts(BaseModel):
    """
    Threshold-exceedance day counts for one year.

    Each record is classified independently, so one day can count as both a
    summer day and a heatwave day.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    tropical_nights: int = Field(0, ge=0)
    heatwave_days: int = Field(0, ge=0)
    summer_days: int = Field(0, ge=0)
    observed_days: int = Field(0, ge=0)


class ExtremeRecord(BaseModel):
    """An all-time extreme value and the date it was first observed."""

    model_config = ConfigDict(frozen=True)

    value: float
    date: datetime.date


class YearCount(BaseModel):
    """A per-year event count."""

    model_config = ConfigDict(frozen=True)

    year: int
    count: int = Field(..., ge=0)


class DecadeStats(BaseModel):
    """
    Summary of one fixed decade (e.g. 1990-1999).

    Attributes:
        decade: Label such as "1990s"
        start_year / end_year: Inclusive decade bounds
        avg_temp: Mean of the qualifying yearly means in the decade
        diff_from_first: avg_temp minus the earliest decade present
        years: Number of qualifying years that contributed
    """

    model_config = ConfigDict(frozen=True)

    decade: str
    start_year: int
    end_year: int
    avg_temp: float
    diff_from_first: float = 0.0
    years: int = Field(..., ge=1)


class CityStats(BaseModel):
    """
    Headline statistics for one city.

    Notes:
        - all_time_high/low are None only for an empty series
        - first/recent decade windows are relative to the observed years,
          not to fixed calendar decades
        - per-year counts list only years with at least one event
        - early/recent averages are taken over the first/last five entries
          of those per-year lists
    """

    model_config = ConfigDict(frozen=True)

    all_time_high: Optional[ExtremeRecord] = None
    all_time_low: Optional[ExtremeRecord] = None
    first_decade_avg: float = 0.0
    recent_decade_avg: float = 0.0
    temp_change: float = 0.0
    tropical_nights: List[YearCount] = Field(default_factory=list)
    heatwave_days: List[YearCount] = Field(default_factory=list)
    summer_days: List[YearCount] = Field(default_factory=list)
    early_tropical_nights_avg: float = 0.0
    recent_tropical_nights_avg: float = 0.0
    early_heatwave_days_avg: float = 0.0
    recent_heatwave_days_avg: float = 0.0
