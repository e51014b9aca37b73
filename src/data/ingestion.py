"""
In-memory ingestion adapters.

Converts already-loaded city payloads and pandas DataFrames into a validated
CityTimeSeries. Reading files, calling weather APIs and decoding CSV
encodings stay with the caller; these adapters only reshape data that is
already in memory.

Supported inputs:
- City payload dict: {"cityId", "cityName", "stationId", "records": [...]}
- DataFrame with date / avg_temp / min_temp / max_temp columns
  (camelCase column names are accepted too)
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from src.data.normalizers import NormalizationError, normalize_records
from src.data.schema import CityTimeSeries, DailyRecord

logger = logging.getLogger(__name__)


class IngestionError(NormalizationError):
    """Raised when a payload cannot be turned into a city series."""
    pass


FRAME_COLUMNS = {
    "avgTemp": "avg_temp",
    "minTemp": "min_temp",
    "maxTemp": "max_temp",
}


def records_from_frame(df: pd.DataFrame) -> List[DailyRecord]:
    """
    Build DailyRecords from a DataFrame.

    Args:
        df: Frame with a "date" column (or a DatetimeIndex) and the three
            temperature columns

    Returns:
        Records sorted by date, duplicates and incomplete rows removed

    Raises:
        IngestionError: If required columns are missing
    """
    frame = df.rename(columns=FRAME_COLUMNS)
    if "date" not in frame.columns:
        if isinstance(frame.index, pd.DatetimeIndex):
            frame = frame.rename_axis("date").reset_index()
        else:
            raise IngestionError("DataFrame has no 'date' column or DatetimeIndex")

    required = ["date", "avg_temp", "min_temp", "max_temp"]
    missing = [c for c in required if c not in frame.columns]
    if missing:
        raise IngestionError(f"DataFrame missing columns: {missing}")

    frame = frame[required].copy()
    frame["date"] = pd.to_datetime(frame["date"]).dt.date
    for column in required[1:]:
        frame[column] = pd.to_numeric(frame[column], errors="coerce")

    before = len(frame)
    frame = frame.dropna()
    if len(frame) < before:
        logger.debug(f"Dropped {before - len(frame)} rows with missing temperatures")

    records, skipped = normalize_records(frame.to_dict(orient="records"))
    if skipped:
        logger.debug(f"Skipped {skipped} rows while building records from frame")
    return records


def load_city_series(
    payload: Dict[str, Any],
    city_id: Optional[str] = None,
) -> CityTimeSeries:
    """
    Build a CityTimeSeries from a city payload dict.

    Args:
        payload: Parsed city document with cityId/cityName/stationId/records
                 (snake_case keys are accepted as well)
        city_id: Override for the city identifier

    Returns:
        Validated CityTimeSeries

    Raises:
        IngestionError: If the payload has no records list or no city id
    """
    if not isinstance(payload, dict):
        raise IngestionError(f"Expected dict payload, got {type(payload)}")

    raw_records = payload.get("records")
    if not isinstance(raw_records, list):
        raise IngestionError("Payload has no 'records' list")

    city_id = city_id or payload.get("cityId") or payload.get("city_id")
    if not city_id:
        raise IngestionError("Payload has no city id")
    city_name = payload.get("cityName") or payload.get("city_name") or city_id

    station = payload.get("stationId", payload.get("station_id"))
    try:
        station_id = int(station) if station not in (None, "") else None
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric station id {station!r} for {city_id}")
        station_id = None

    records, skipped = normalize_records(raw_records)
    logger.info(
        f"Loaded {len(records)} daily records for {city_id} (skipped {skipped})"
    )

    return CityTimeSeries(
        city_id=str(city_id),
        city_name=str(city_name),
        station_id=station_id,
        records=records,
    )
