"""
Reference-period baselines.

Computes the zero points used by every anomaly calculation: a single annual
mean, twelve calendar-month means, and calendar-day ("MM-DD") means over an
inclusive [start_year, end_year] reference period.

Empty or fully out-of-range inputs return 0.0 / empty mappings instead of
raising. This keeps the engine total, but it also hides a missing reference
period from callers who do not check for it, so the degenerate case is
logged.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from src.data.schema import DailyRecord

logger = logging.getLogger(__name__)

BASELINE_START = 1973
BASELINE_END = 2000


def _in_period(record: DailyRecord, start_year: int, end_year: int) -> bool:
    return start_year <= record.date.year <= end_year


def baseline_annual_mean(
    records: Iterable[DailyRecord],
    start_year: int = BASELINE_START,
    end_year: int = BASELINE_END,
) -> float:
    """
    Mean avg_temp over all records whose year falls in the reference period.

    Returns 0.0 if no record qualifies.
    """
    total = 0.0
    count = 0
    for r in records:
        if _in_period(r, start_year, end_year):
            total += r.avg_temp
            count += 1

    if count == 0:
        logger.debug(f"No records in baseline period {start_year}-{end_year}; using 0.0")
        return 0.0
    return total / count


def baseline_monthly_means(
    records: Iterable[DailyRecord],
    start_year: int = BASELINE_START,
    end_year: int = BASELINE_END,
) -> Dict[int, float]:
    """
    Mean avg_temp per calendar month (1-12) over the reference period.

    Every month key is present; months without in-range data map to 0.0.
    Pass a different period (e.g. 1991-2020) for a climate-normal view.
    """
    by_month: Dict[int, List[float]] = {m: [] for m in range(1, 13)}
    for r in records:
        if _in_period(r, start_year, end_year):
            by_month[r.date.month].append(r.avg_temp)

    empty = [m for m, temps in by_month.items() if not temps]
    if empty:
        logger.debug(
            f"Months {empty} have no data in {start_year}-{end_year}; using 0.0"
        )

    return {
        month: (sum(temps) / len(temps) if temps else 0.0)
        for month, temps in by_month.items()
    }


def baseline_daily_means(
    records: Iterable[DailyRecord],
    start_year: int = BASELINE_START,
    end_year: int = BASELINE_END,
) -> Dict[str, float]:
    """
    Mean avg_temp per calendar day, keyed "MM-DD", across reference years.

    "02-29" appears only when leap-year data exists in the period and is
    averaged over those leap years alone. Keys are returned in calendar order.
    """
    by_day: Dict[str, List[float]] = defaultdict(list)
    for r in records:
        if _in_period(r, start_year, end_year):
            by_day[r.date.strftime("%m-%d")].append(r.avg_temp)

    return {day: sum(temps) / len(temps) for day, temps in sorted(by_day.items())}
