"""
Recurring schedule timezone conversion.

Students pick weekly slots in their instructor's local timezone; schedules are
stored in UTC. A recurring slot has no date, so it is anchored to a fixed
reference week (Sunday 2024-01-07 to Saturday 2024-01-13), localized,
converted, and the day of week is re-derived from the converted instant.
The day shifts along with the hour: Tuesday 23:30 in Lima is Wednesday
04:30 UTC.

Local times are localized with fold=0: an ambiguous fall-back time resolves
to its earlier instant and a nonexistent spring-forward time takes the
offset in force before the transition.
"""

from datetime import date, datetime, timedelta, timezone as dt_timezone
from typing import Iterable, List, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.core.exceptions import ValidationError
from django.utils import timezone

from .slots import ScheduleSlot, TimeLike, day_of_week, format_time, parse_time, validate_day_of_week

# A Sunday; reference_date(d) is this date plus d days
REFERENCE_SUNDAY = date(2024, 1, 7)

UTC = dt_timezone.utc


def get_zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
        # OSError covers keys naming a tzdata directory, e.g. "America"
        raise ValidationError(f"Unknown timezone '{tz_name}'")


def reference_date(day_of_week_value: int) -> date:
    """Date in the reference week falling on the given Sunday-first weekday."""
    return REFERENCE_SUNDAY + timedelta(days=validate_day_of_week(day_of_week_value))


def _convert(day_of_week_value: int, start_time: TimeLike, end_time: TimeLike, source_tz, target_tz) -> ScheduleSlot:
    anchor = reference_date(day_of_week_value)
    start = timezone.make_aware(datetime.combine(anchor, parse_time(start_time)), source_tz)
    end = timezone.make_aware(datetime.combine(anchor, parse_time(end_time)), source_tz)

    converted_start = timezone.localtime(start, target_tz)
    converted_end = timezone.localtime(end, target_tz)

    return ScheduleSlot(
        day_of_week=day_of_week(converted_start.date()),
        start_time=converted_start.time().replace(second=0, microsecond=0, tzinfo=None),
        end_time=converted_end.time().replace(second=0, microsecond=0, tzinfo=None),
    )


def convert_recurring_slot_to_utc(day_of_week_value: int, start_time: TimeLike, end_time: TimeLike, tz_name: str) -> ScheduleSlot:
    """
    Convert a local weekly slot to its canonical UTC form.

    Args:
        day_of_week_value: Local day of week (0=Sunday..6=Saturday)
        start_time: Local start, "HH:MM" or ``time``
        end_time: Local end, "HH:MM" or ``time``
        tz_name: IANA timezone of the local times (e.g. 'America/Lima')

    Returns:
        ScheduleSlot in UTC; its day of week follows the start instant.
    """
    return _convert(day_of_week_value, start_time, end_time, get_zone(tz_name), UTC)


def convert_recurring_slot_from_utc(day_of_week_value: int, start_time: TimeLike, end_time: TimeLike, tz_name: str) -> ScheduleSlot:
    """Inverse of convert_recurring_slot_to_utc: project a UTC slot into ``tz_name``."""
    return _convert(day_of_week_value, start_time, end_time, UTC, get_zone(tz_name))


def convert_schedule_to_utc(slots: Iterable[ScheduleSlot], tz_name: str) -> List[ScheduleSlot]:
    return [
        convert_recurring_slot_to_utc(slot.day_of_week, slot.start_time, slot.end_time, tz_name)
        for slot in slots
    ]


def convert_schedule_from_utc(slots: Iterable[ScheduleSlot], tz_name: str) -> List[ScheduleSlot]:
    return [
        convert_recurring_slot_from_utc(slot.day_of_week, slot.start_time, slot.end_time, tz_name)
        for slot in slots
    ]


def _split_time_slot(time_slot: str) -> Tuple[str, str]:
    try:
        start, end = time_slot.split('-')
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time slot '{time_slot}', expected HH:MM-HH:MM")
    return start, end


def _convert_dated(day: date, time_slot: str, source_tz, target_tz) -> Tuple[date, str]:
    start_str, end_str = _split_time_slot(time_slot)
    start = timezone.make_aware(datetime.combine(day, parse_time(start_str)), source_tz)
    end = timezone.make_aware(datetime.combine(day, parse_time(end_str)), source_tz)

    converted_start = timezone.localtime(start, target_tz)
    converted_end = timezone.localtime(end, target_tz)

    return converted_start.date(), f"{format_time(converted_start.time())}-{format_time(converted_end.time())}"


def convert_time_slot_to_utc(day: date, time_slot: str, tz_name: str) -> Tuple[date, str]:
    """
    Convert a one-off class on a specific local date to UTC.

    Args:
        day: Local date of the class
        time_slot: "HH:MM-HH:MM" in local time
        tz_name: IANA timezone of the local time

    Returns:
        (utc_date, "HH:MM-HH:MM" in UTC); the date follows the start time.
    """
    return _convert_dated(day, time_slot, get_zone(tz_name), UTC)


def convert_time_slot_from_utc(day: date, time_slot: str, tz_name: str) -> Tuple[date, str]:
    """Inverse of convert_time_slot_to_utc."""
    return _convert_dated(day, time_slot, UTC, get_zone(tz_name))
