"""
Calendar aggregation for daily temperature records.

Groups daily records into yearly, monthly and decadal buckets and derives
per-bucket statistics (means, exceedance-day counts, all-time extremes).
Produces the typed bucket objects consumed by the anomaly, forecast and
decomposition steps.

Design:
- Grouping keys are typed: int year or (year, month) tuples
- Coverage thresholds are a systemic missing-data policy: a year below
  min_days is dropped from every year-keyed output, not just one
- A decade's value is the mean of its qualifying yearly means, so every
  year weighs the same regardless of how complete it is
- Empty inputs produce empty outputs, never exceptions
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.core.config import ExceedanceThresholds
from src.data.schema import (
    CityStats,
    DailyRecord,
    DayOfYearPoint,
    DecadeStats,
    ExceedanceCounts,
    ExtremeRecord,
    MonthlyMean,
    YearCount,
    YearlyMean,
)

logger = logging.getLogger(__name__)

DEFAULT_DECADE_STARTS: Tuple[int, ...] = (1960, 1970, 1980, 1990, 2000, 2010, 2020)
STATS_YEARS = 5


def day_of_year(d: date) -> int:
    """
    Day of year (1..366) computed as the offset from Jan 1 of the same year.

    Example:
    - 2023-03-01 -> 60
    - 2024-03-01 -> 61 (leap year)
    """
    return (d - date(d.year, 1, 1)).days + 1


def group_by_year(records: Iterable[DailyRecord]) -> Dict[int, List[DayOfYearPoint]]:
    """
    Partition records by calendar year.

    Args:
        records: Daily records in any order

    Returns:
        Dict mapping year -> points sorted by day of year (ascending years)
    """
    grouped: Dict[int, List[DayOfYearPoint]] = defaultdict(list)
    for r in records:
        grouped[r.date.year].append(
            DayOfYearPoint(day_of_year=day_of_year(r.date), avg_temp=r.avg_temp, date=r.date)
        )

    for points in grouped.values():
        points.sort(key=lambda p: p.day_of_year)

    return dict(sorted(grouped.items()))


def yearly_means(records: Iterable[DailyRecord]) -> Dict[int, YearlyMean]:
    """
    Mean avg_temp per calendar year, without any coverage filter.

    Returns:
        Dict mapping year -> YearlyMean, ascending by year
    """
    sums: Dict[int, float] = defaultdict(float)
    counts: Dict[int, int] = defaultdict(int)
    for r in records:
        sums[r.date.year] += r.avg_temp
        counts[r.date.year] += 1

    return {
        year: YearlyMean(year=year, mean=sums[year] / counts[year], count=counts[year])
        for year in sorted(counts)
    }


def monthly_means(records: Iterable[DailyRecord]) -> Dict[Tuple[int, int], MonthlyMean]:
    """
    Mean avg_temp per (year, month), without any coverage filter.

    Returns:
        Dict mapping (year, month) -> MonthlyMean, in chronological order
    """
    sums: Dict[Tuple[int, int], float] = defaultdict(float)
    counts: Dict[Tuple[int, int], int] = defaultdict(int)
    for r in records:
        key = (r.date.year, r.date.month)
        sums[key] += r.avg_temp
        counts[key] += 1

    return {
        key: MonthlyMean(year=key[0], month=key[1], mean=sums[key] / counts[key], count=counts[key])
        for key in sorted(counts)
    }


def annual_aggregate(
    records: Iterable[DailyRecord],
    min_days: int = 300,
) -> List[YearlyMean]:
    """
    Yearly means for years with at least min_days observed days.

    Args:
        records: Daily records
        min_days: Coverage threshold (inclusive)

    Returns:
        Qualifying YearlyMean objects ascending by year
    """
    qualifying = []
    for ym in yearly_means(records).values():
        if ym.count < min_days:
            logger.debug(f"Dropping year {ym.year}: {ym.count} observed days < {min_days}")
            continue
        qualifying.append(ym)
    return qualifying


def monthly_aggregate(
    records: Iterable[DailyRecord],
    min_days: int = 20,
) -> List[MonthlyMean]:
    """
    Monthly means for (year, month) buckets with at least min_days observed days.

    Returns:
        Qualifying MonthlyMean objects in chronological order
    """
    qualifying = []
    for mm in monthly_means(records).values():
        if mm.count < min_days:
            logger.debug(
                f"Dropping {mm.year}-{mm.month:02d}: {mm.count} observed days < {min_days}"
            )
            continue
        qualifying.append(mm)
    return qualifying


def decade_aggregate(
    records: Iterable[DailyRecord],
    min_days: int = 300,
    decade_starts: Sequence[int] = DEFAULT_DECADE_STARTS,
) -> List[DecadeStats]:
    """
    Decade summaries over fixed decade boundaries.

    Args:
        records: Daily records
        min_days: Per-year coverage threshold
        decade_starts: First year of each decade, e.g. 1960 for 1960-1969

    Returns:
        DecadeStats for every decade with at least one qualifying year.
        diff_from_first is relative to the earliest decade present.
    """
    annual = {ym.year: ym.mean for ym in annual_aggregate(records, min_days)}

    summaries = []
    for start in sorted(decade_starts):
        end = start + 9
        means = [annual[y] for y in range(start, end + 1) if y in annual]
        if not means:
            continue
        summaries.append((start, end, sum(means) / len(means), len(means)))

    if not summaries:
        return []

    first_avg = summaries[0][2]
    return [
        DecadeStats(
            decade=f"{start}s",
            start_year=start,
            end_year=end,
            avg_temp=avg,
            diff_from_first=avg - first_avg,
            years=n,
        )
        for start, end, avg, n in summaries
    ]


def exceedance_counts(
    records: Iterable[DailyRecord],
    thresholds: Optional[ExceedanceThresholds] = None,
) -> Dict[int, ExceedanceCounts]:
    """
    Count threshold-exceedance days per year.

    Classification (each independent, inclusive thresholds):
    - tropical night: min_temp >= tropical_night_min_temp
    - heatwave day:   max_temp >= heatwave_max_temp
    - summer day:     max_temp >= summer_day_max_temp

    Returns:
        Dict mapping year -> ExceedanceCounts for every year with records
    """
    thresholds = thresholds or ExceedanceThresholds()
    tallies: Dict[int, List[int]] = defaultdict(lambda: [0, 0, 0, 0])

    for r in records:
        tally = tallies[r.date.year]
        if r.min_temp >= thresholds.tropical_night_min_temp:
            tally[0] += 1
        if r.max_temp >= thresholds.heatwave_max_temp:
            tally[1] += 1
        if r.max_temp >= thresholds.summer_day_max_temp:
            tally[2] += 1
        tally[3] += 1

    return {
        year: ExceedanceCounts(
            year=year,
            tropical_nights=t[0],
            heatwave_days=t[1],
            summer_days=t[2],
            observed_days=t[3],
        )
        for year, t in sorted(tallies.items())
    }


def all_time_extremes(
    records: Iterable[DailyRecord],
) -> Tuple[Optional[ExtremeRecord], Optional[ExtremeRecord]]:
    """
    All-time highest max_temp and lowest min_temp.

    Uses strict comparisons, so on a tie the first record seen wins.

    Returns:
        Tuple of (high, low), or (None, None) if records is empty
    """
    high: Optional[ExtremeRecord] = None
    low: Optional[ExtremeRecord] = None

    for r in records:
        if high is None or r.max_temp > high.value:
            high = ExtremeRecord(value=r.max_temp, date=r.date)
        if low is None or r.min_temp < low.value:
            low = ExtremeRecord(value=r.min_temp, date=r.date)

    return high, low


def _window_mean(records: Sequence[DailyRecord], start: int, end: int) -> float:
    temps = [r.avg_temp for r in records if start <= r.date.year <= end]
    return sum(temps) / len(temps) if temps else 0.0


def _mean_count(counts: Sequence[YearCount]) -> float:
    return sum(c.count for c in counts) / len(counts) if counts else 0.0


def city_stats(
    records: Sequence[DailyRecord],
    thresholds: Optional[ExceedanceThresholds] = None,
) -> CityStats:
    """
    Headline statistics for one city.

    The first and recent "decades" are the first and last 10 observed
    calendar years (min_year..min_year+9 and max_year-9..max_year), averaged
    over all days in them. Per-year exceedance lists include only years with
    at least one event; the early/recent event averages cover the first and
    last STATS_YEARS entries of those lists.

    Returns:
        CityStats; an empty series yields None extremes and zero averages
    """
    if not records:
        return CityStats()

    high, low = all_time_extremes(records)
    years = [r.date.year for r in records]
    min_year, max_year = min(years), max(years)

    first_avg = _window_mean(records, min_year, min_year + 9)
    recent_avg = _window_mean(records, max_year - 9, max_year)

    counts = exceedance_counts(records, thresholds).values()
    tropical = [YearCount(year=c.year, count=c.tropical_nights) for c in counts if c.tropical_nights]
    heatwave = [YearCount(year=c.year, count=c.heatwave_days) for c in counts if c.heatwave_days]

    return CityStats(
        all_time_high=high,
        all_time_low=low,
        first_decade_avg=first_avg,
        recent_decade_avg=recent_avg,
        temp_change=recent_avg - first_avg,
        tropical_nights=tropical,
        heatwave_days=heatwave,
        summer_days=[
            YearCount(year=c.year, count=c.summer_days) for c in counts if c.summer_days
        ],
        early_tropical_nights_avg=_mean_count(tropical[:STATS_YEARS]),
        recent_tropical_nights_avg=_mean_count(tropical[-STATS_YEARS:]),
        early_heatwave_days_avg=_mean_count(heatwave[:STATS_YEARS]),
        recent_heatwave_days_avg=_mean_count(heatwave[-STATS_YEARS:]),
    )
