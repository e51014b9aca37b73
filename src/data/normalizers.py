"""
Record normalization: turn loosely-typed daily rows into DailyRecord objects.

Upstream producers (API clients, CSV converters) hand over plain dicts whose
keys and value types vary. Normalization enforces the engine's input
contract before any aggregation happens.

Design:
- Dates accepted as ISO strings ("YYYY-MM-DD", "YYYYMMDD"), date or datetime
- Key aliases: camelCase (avgTemp) and snake_case (avg_temp)
- Rows with a missing, non-numeric or NaN temperature are rejected
- Duplicate dates keep the first occurrence; output sorted ascending
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Tuple

from src.core.exceptions import DataValidationError
from src.data.schema import DailyRecord

logger = logging.getLogger(__name__)


class NormalizationError(DataValidationError):
    """Raised when a raw daily row cannot be normalized."""
    pass


FIELD_ALIASES = {
    "date": ("date", "tm", "day"),
    "avg_temp": ("avg_temp", "avgTemp", "avgTa", "temp_mean"),
    "min_temp": ("min_temp", "minTemp", "minTa", "temp_min"),
    "max_temp": ("max_temp", "maxTemp", "maxTa", "temp_max"),
}


def normalize_date(value: Any) -> date:
    """
    Normalize a date value to datetime.date.

    Supports:
    - datetime.date / datetime.datetime (time part dropped)
    - ISO 8601 date: 2024-07-15
    - Compact date: 20240715

    Args:
        value: Raw date value

    Returns:
        Calendar date

    Raises:
        NormalizationError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        raise NormalizationError("Empty date")

    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d", "%Y/%m/%d"):
        try:
            return datetime.strptime(text[:10], fmt).date()
        except ValueError:
            continue

    raise NormalizationError(f"Could not parse date: {value!r}")


def normalize_temperature(value: Any, field: str) -> float:
    """
    Normalize a temperature reading to a finite float.

    Args:
        value: Raw reading (number or numeric string)
        field: Field name, used in error messages

    Returns:
        Temperature in °C

    Raises:
        NormalizationError: If missing, non-numeric, NaN or infinite
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise NormalizationError(f"Missing {field}")
    try:
        temp = float(value)
    except (TypeError, ValueError) as e:
        raise NormalizationError(f"Non-numeric {field}: {value!r}") from e
    if not math.isfinite(temp):
        raise NormalizationError(f"Non-finite {field}: {value!r}")
    return temp


def _lookup(raw: Dict[str, Any], field: str) -> Any:
    for alias in FIELD_ALIASES[field]:
        if alias in raw:
            return raw[alias]
    return None


def normalize_record(raw: Dict[str, Any]) -> DailyRecord:
    """
    Normalize a single raw daily row.

    Args:
        raw: Dict with a date and the three temperature readings

    Returns:
        Validated DailyRecord

    Raises:
        NormalizationError: If any required field is missing or invalid
    """
    if isinstance(raw, DailyRecord):
        return raw
    if not isinstance(raw, dict):
        raise NormalizationError(f"Expected dict, got {type(raw)}")

    try:
        record_date = normalize_date(_lookup(raw, "date"))
    except NormalizationError as e:
        raise NormalizationError(f"Invalid date: {e}") from e

    return DailyRecord(
        date=record_date,
        avg_temp=normalize_temperature(_lookup(raw, "avg_temp"), "avg_temp"),
        min_temp=normalize_temperature(_lookup(raw, "min_temp"), "min_temp"),
        max_temp=normalize_temperature(_lookup(raw, "max_temp"), "max_temp"),
    )


def normalize_records(
    raws: Iterable[Dict[str, Any]]
) -> Tuple[List[DailyRecord], int]:
    """
    Normalize many raw rows into an engine-ready series.

    Args:
        raws: Iterable of raw dicts (or DailyRecord objects)

    Returns:
        Tuple of (records sorted by date, skipped_count)

    Notes:
        - Invalid rows and duplicate dates are skipped and counted
        - The first row seen for a date wins
    """
    by_date: Dict[date, DailyRecord] = {}
    skipped = 0

    for raw in raws:
        try:
            record = normalize_record(raw)
        except NormalizationError as e:
            logger.debug(f"Skipped row due to normalization error: {e}")
            skipped += 1
            continue

        if record.date in by_date:
            logger.debug(f"Skipped duplicate row for {record.date.isoformat()}")
            skipped += 1
            continue
        by_date[record.date] = record

    if skipped:
        logger.info(f"Normalized {len(by_date)} rows, skipped {skipped}")

    return [by_date[d] for d in sorted(by_date)], skipped
