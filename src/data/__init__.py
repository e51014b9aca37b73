"""
Data module: daily record schema, normalization, ingestion and aggregation.

Responsible for turning raw per-station daily rows into validated, typed
buckets suitable for climate analytics. Pipeline:

    Raw daily rows (dicts / DataFrame / city payload)
        ↓
    Normalization (src/data/normalizers.py) → DailyRecord
        ↓
    Ingestion (src/data/ingestion.py) → CityTimeSeries
        ↓
    Aggregation (src/data/aggregation.py) → YearlyMean / MonthlyMean / DecadeStats
        ↓
    Ready for climate analytics (src/climate)
"""

from src.data.aggregation import (
    all_time_extremes,
    annual_aggregate,
    city_stats,
    day_of_year,
    decade_aggregate,
    exceedance_counts,
    group_by_year,
    monthly_aggregate,
    monthly_means,
    yearly_means,
)
from src.data.ingestion import (
    IngestionError,
    load_city_series,
    records_from_frame,
)
from src.data.normalizers import (
    NormalizationError,
    normalize_date,
    normalize_record,
    normalize_records,
    normalize_temperature,
)
from src.data.schema import (
    CityStats,
    CityTimeSeries,
    DailyRecord,
    DayOfYearPoint,
    DecadeStats,
    ExceedanceCounts,
    ExtremeRecord,
    MonthlyMean,
    YearCount,
    YearlyMean,
)

__all__ = [
    # Schema
    "DailyRecord",
    "CityTimeSeries",
    "YearlyMean",
    "MonthlyMean",
    "DayOfYearPoint",
    "DecadeStats",
    "ExceedanceCounts",
    "ExtremeRecord",
    "YearCount",
    "CityStats",

    # Normalization
    "normalize_date",
    "normalize_temperature",
    "normalize_record",
    "normalize_records",
    "NormalizationError",

    # Ingestion
    "load_city_series",
    "records_from_frame",
    "IngestionError",

    # Aggregation
    "day_of_year",
    "group_by_year",
    "yearly_means",
    "monthly_means",
    "annual_aggregate",
    "monthly_aggregate",
    "decade_aggregate",
    "exceedance_counts",
    "all_time_extremes",
    "city_stats",
]
