"""
Academic Period Generator

Partitions a calendar year into academic periods and groups them into seasons:

1. Every month gets a regular period of 28 days starting on its first Monday.
2. Weeks (Monday to Sunday) of the year that no regular period fully contains
   become special weeks.
3. Special weeks close seasons: each season runs up to and including the next
   special week, and the last season runs to the end of the last regular period.
4. Every period is assigned to the season containing its start or end date.

Periods are generated month by month rather than by chaining 28-day blocks.
Results are plain dataclasses; persisting them is up to the caller.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple

from .calendar_utils import (
    get_first_monday_of_month,
    get_first_monday_on_or_after,
    iter_months,
    utc_today,
)

REGULAR_PERIOD_DAYS = 28
WEEK_DAYS = 7

SEASON_NAMES = [
    'Temporada Aurora',
    'Temporada Brisa',
    'Temporada Cenit',
    'Temporada Ocaso',
    'Temporada Cosecha',
    'Temporada Escarcha',
]


@dataclass
class GeneratedSeason:
    id: str
    number: int
    name: str
    start_date: date
    end_date: date

    def contains_date(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class GeneratedPeriod:
    id: str
    name: str
    start_date: date
    end_date: date
    season_id: str
    is_special_week: bool = False
    is_active: bool = False


@dataclass
class _DateRange:
    start: date
    end: date


def get_season_name(index: int) -> str:
    """
    Name for the season at zero-based ``index``.

    Once the pool runs out the names repeat with a numeric suffix
    ("Temporada Aurora 2", ...).
    """
    cycle, position = divmod(index, len(SEASON_NAMES))
    name = SEASON_NAMES[position]
    if cycle:
        name = f"{name} {cycle + 1}"
    return name


def build_regular_period_ranges(year: int) -> List[_DateRange]:
    """One 28-day range per month, starting on the month's first Monday."""
    ranges = []
    for first_of_month in iter_months(year):
        first_monday = get_first_monday_of_month(first_of_month.year, first_of_month.month)
        ranges.append(_DateRange(
            start=first_monday,
            end=first_monday + timedelta(days=REGULAR_PERIOD_DAYS - 1),
        ))
    return ranges


def find_loose_weeks(year: int, period_ranges: List[_DateRange]) -> List[_DateRange]:
    """Weeks of the year not fully contained in any regular period."""
    year_end = date(year, 12, 31)
    loose_weeks = []

    week_start = get_first_monday_on_or_after(date(year, 1, 1))
    while week_start <= year_end:
        week_end = week_start + timedelta(days=WEEK_DAYS - 1)

        is_included = any(
            period.start <= week_start and week_end <= period.end
            for period in period_ranges
        )

        # A trailing week that spills into next year is not a special week of this year
        if not is_included and week_end <= year_end:
            loose_weeks.append(_DateRange(start=week_start, end=week_end))

        week_start += timedelta(days=WEEK_DAYS)

    return loose_weeks


def build_season_ranges(period_ranges: List[_DateRange], loose_weeks: List[_DateRange]) -> List[_DateRange]:
    """Seasons bounded by the loose weeks; the whole span is one season if there are none."""
    if not period_ranges:
        return []

    first_start = period_ranges[0].start
    last_end = period_ranges[-1].end

    if not loose_weeks:
        return [_DateRange(start=first_start, end=last_end)]

    seasons = [_DateRange(start=first_start, end=loose_weeks[0].end)]
    for previous_week, current_week in zip(loose_weeks, loose_weeks[1:]):
        seasons.append(_DateRange(
            start=previous_week.end + timedelta(days=1),
            end=current_week.end,
        ))
    seasons.append(_DateRange(
        start=loose_weeks[-1].end + timedelta(days=1),
        end=last_end,
    ))
    return seasons


def _find_season(seasons: List[GeneratedSeason], start: date, end: date) -> GeneratedSeason:
    for season in seasons:
        if season.contains_date(start) or season.contains_date(end):
            return season
    return seasons[0]


def generate_academic_periods(
    year: int,
    activate_current: bool = True,
    today: Optional[date] = None,
) -> Tuple[List[GeneratedPeriod], List[GeneratedSeason]]:
    """
    Generate the academic periods and seasons of a year.

    Args:
        year: Calendar year to partition
        activate_current: Flag the period(s) containing ``today`` as active.
            The flag is informational; lookups use date containment.
        today: Date (or datetime, taken in UTC) used for activation;
            defaults to the current UTC date.

    Returns:
        (periods, seasons): regular periods first, then special weeks,
        each in chronological order.
    """
    today = utc_today(today)

    period_ranges = build_regular_period_ranges(year)
    loose_weeks = find_loose_weeks(year, period_ranges)
    season_ranges = build_season_ranges(period_ranges, loose_weeks)

    seasons = [
        GeneratedSeason(
            id=f"season-{year}-{index + 1}",
            number=index + 1,
            name=get_season_name(index),
            start_date=season_range.start,
            end_date=season_range.end,
        )
        for index, season_range in enumerate(season_ranges)
    ]

    if not seasons:
        return [], []

    periods = []
    for index, period_range in enumerate(period_ranges):
        season = _find_season(seasons, period_range.start, period_range.end)
        periods.append(GeneratedPeriod(
            id=f"period-{year}-regular-{index + 1}",
            name=f"Período {index + 1}",
            start_date=period_range.start,
            end_date=period_range.end,
            season_id=season.id,
            is_special_week=False,
            is_active=activate_current and period_range.start <= today <= period_range.end,
        ))

    for index, week in enumerate(loose_weeks):
        season = _find_season(seasons, week.start, week.end)
        periods.append(GeneratedPeriod(
            id=f"period-{year}-special-{index + 1}",
            name=f"Semana Especial {index + 1}",
            start_date=week.start,
            end_date=week.end,
            season_id=season.id,
            is_special_week=True,
            is_active=activate_current and week.start <= today <= week.end,
        ))

    return periods, seasons
