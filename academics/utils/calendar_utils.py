"""
Calendar utilities shared by the period generator, locator and counters.

Day boundaries are always taken in UTC so that stored period dates and the
server clock agree regardless of the server's local timezone.
"""
from datetime import datetime, date, time, timedelta, timezone as dt_timezone

from dateutil.relativedelta import relativedelta
from django.utils import timezone

MONDAY = 0

MONTH_NAMES = [
    'Enero',
    'Febrero',
    'Marzo',
    'Abril',
    'Mayo',
    'Junio',
    'Julio',
    'Agosto',
    'Septiembre',
    'Octubre',
    'Noviembre',
    'Diciembre',
]


def to_utc(value):
    """
    Return ``value`` as an aware UTC datetime.

    Naive datetimes are treated as already being in UTC.
    """
    if timezone.is_naive(value):
        return timezone.make_aware(value, dt_timezone.utc)
    return value.astimezone(dt_timezone.utc)


def utc_today(now=None):
    """Calendar date of ``now`` (default: the current instant) in UTC."""
    if now is None:
        now = timezone.now()
    if isinstance(now, datetime):
        return to_utc(now).date()
    return now


def start_of_day_utc(now):
    """First instant of the UTC day containing ``now``."""
    return datetime.combine(utc_today(now), time.min, tzinfo=dt_timezone.utc)


def end_of_day_utc(now):
    """Last instant of the UTC day containing ``now``."""
    return datetime.combine(utc_today(now), time.max, tzinfo=dt_timezone.utc)


def as_date(value):
    """Reduce a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def get_first_monday_of_month(year, month):
    """
    First Monday on or after the 1st of the month.

    Args:
        year (int): The year
        month (int): The month (1-12)
    """
    first_day = date(year, month, 1)
    days_to_monday = (MONDAY - first_day.weekday()) % 7
    return first_day + timedelta(days=days_to_monday)


def get_first_monday_on_or_after(day):
    days_to_monday = (MONDAY - day.weekday()) % 7
    return day + timedelta(days=days_to_monday)


def iter_months(year):
    """Yield the first day of every month of ``year``."""
    current = date(year, 1, 1)
    while current.year == year:
        yield current
        current += relativedelta(months=1)


def iter_days(start_date, end_date):
    """Yield every calendar date from start_date to end_date inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def get_month_name(month):
    """Spanish name of a month number (1-12)."""
    return MONTH_NAMES[month - 1]


def is_date_in_period(day, period):
    """
    Check whether a date (or instant, taken in UTC) falls inside a period.

    ``period`` is anything with ``start_date`` and ``end_date`` attributes.
    """
    check_date = utc_today(day) if isinstance(day, datetime) else day
    return period.start_date <= check_date <= period.end_date
