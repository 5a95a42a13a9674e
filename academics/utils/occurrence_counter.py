"""
Occurrence Counter for Weekly Class Schedules

Counts the class days a weekly schedule produces inside a date range.
A day counts once when any slot falls on its day of week, however many
slots share that day: it represents "a class happens this day".

Dates are stepped one calendar day at a time (never 24-hour durations),
so the result does not depend on DST or the server timezone.
"""

from datetime import date
from typing import Iterable, List

from .calendar_utils import as_date, iter_days
from .slots import ScheduleSlot, day_of_week


def _slot_weekdays(slots: Iterable[ScheduleSlot]) -> set:
    return {slot.day_of_week for slot in slots}


def generate_occurrence_dates(start_date: date, end_date: date, slots: Iterable[ScheduleSlot]) -> List[date]:
    """
    Dates between start_date and end_date (inclusive) with at least one class.

    Args:
        start_date: First day of the range (datetimes are reduced to their date)
        end_date: Last day of the range, inclusive
        slots: Weekly schedule slots (Sunday-first day of week)

    Returns:
        Sorted list of matching dates; empty for an empty schedule or an
        inverted range.
    """
    selected_weekdays = _slot_weekdays(slots)
    if not selected_weekdays:
        return []

    scan_start = as_date(start_date)
    scan_end = as_date(end_date)

    return [
        current_date
        for current_date in iter_days(scan_start, scan_end)
        if day_of_week(current_date) in selected_weekdays
    ]


def count_occurrences(start_date: date, end_date: date, slots: Iterable[ScheduleSlot]) -> int:
    """Number of class days in the inclusive range. See generate_occurrence_dates."""
    return len(generate_occurrence_dates(start_date, end_date, slots))


def classes_per_week(slots: Iterable[ScheduleSlot]) -> int:
    """Weekly class count of a schedule: one class per slot."""
    return len(list(slots))
