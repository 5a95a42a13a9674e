"""
Period Locator

Finds the academic period a request should be anchored to:

1. The regular period whose date range contains today (UTC). When several
   contain it, the one that started most recently wins.
2. Otherwise the regular period starting soonest after today.
3. Otherwise a synthetic default window of ``default_days`` starting today.

Special weeks are never returned, and the persisted ``is_active`` flag is
ignored: it can go stale, date containment cannot.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from .calendar_utils import end_of_day_utc, start_of_day_utc

DEFAULT_PERIOD_NAME = 'Período por defecto'
DEFAULT_PERIOD_DAYS = 28


@dataclass
class PeriodWindow:
    """The date range a calculation is anchored to."""
    name: str
    start_date: date
    end_date: date
    period_id: Optional[str] = None
    is_default: bool = False

    @classmethod
    def from_period(cls, period) -> 'PeriodWindow':
        period_id = getattr(period, 'pk', None) or getattr(period, 'id', None)
        return cls(
            name=period.name,
            start_date=period.start_date,
            end_date=period.end_date,
            period_id=str(period_id) if period_id is not None else None,
        )

    @classmethod
    def default(cls, now, days: int = DEFAULT_PERIOD_DAYS) -> 'PeriodWindow':
        today = start_of_day_utc(now).date()
        return cls(
            name=DEFAULT_PERIOD_NAME,
            start_date=today,
            end_date=today + timedelta(days=days),
            is_default=True,
        )

    def to_dict(self):
        return {
            'id': self.period_id,
            'name': self.name,
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
            'isDefault': self.is_default,
        }


def find_current_period(now, periods: Iterable):
    """Regular period containing ``now``; the latest start wins ties."""
    today_start = start_of_day_utc(now).date()
    today_end = end_of_day_utc(now).date()

    current = None
    for period in periods:
        if period.is_special_week:
            continue
        if period.start_date <= today_end and period.end_date >= today_start:
            if current is None or period.start_date > current.start_date:
                current = period
    return current


def find_next_period(now, periods: Iterable):
    """Regular period with the earliest start strictly after today."""
    today_end = end_of_day_utc(now).date()

    upcoming = None
    for period in periods:
        if period.is_special_week:
            continue
        if period.start_date > today_end:
            if upcoming is None or period.start_date < upcoming.start_date:
                upcoming = period
    return upcoming


def find_current_or_next_period(now, periods: Iterable, default_days: int = DEFAULT_PERIOD_DAYS) -> PeriodWindow:
    """
    Locate the current or upcoming regular period.

    Args:
        now: Reference instant (naive datetimes are treated as UTC)
        periods: Objects with ``start_date``, ``end_date``, ``is_special_week``
            and ``name`` attributes (model instances or generated periods)
        default_days: Length of the fallback window

    Returns:
        PeriodWindow; ``is_default`` is True when no period was found.
    """
    periods = list(periods)

    period = find_current_period(now, periods) or find_next_period(now, periods)
    if period is not None:
        return PeriodWindow.from_period(period)

    return PeriodWindow.default(now, days=default_days)
