"""
Weekly schedule slots.

A slot is one recurring weekly commitment: a day of the week plus a time
range. Days use the 0=Sunday..6=Saturday convention everywhere in the
project (wire format, storage and engine).
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, Tuple, Union

from django.core.exceptions import ValidationError

SUNDAY = 0
SATURDAY = 6

DAY_NAMES = [
    'Domingo',
    'Lunes',
    'Martes',
    'Miércoles',
    'Jueves',
    'Viernes',
    'Sábado',
]

TimeLike = Union[str, time]


def parse_time(value: TimeLike) -> time:
    """Parse an "HH:MM" string (or pass through a ``time``)."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        return datetime.strptime(str(value).strip(), '%H:%M').time()
    except ValueError:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")


def format_time(value: time) -> str:
    return value.strftime('%H:%M')


def day_of_week(day: date) -> int:
    """Sunday-first day of week for a date (Python's weekday() is Monday-first)."""
    return (day.weekday() + 1) % 7


def validate_day_of_week(value) -> int:
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid day of week '{value}'")
    if not SUNDAY <= value <= SATURDAY:
        raise ValidationError(f"Day of week must be between {SUNDAY} and {SATURDAY}, got {value}")
    return value


@dataclass(frozen=True)
class ScheduleSlot:
    """One weekly recurring class slot."""
    day_of_week: int
    start_time: time
    end_time: time

    @classmethod
    def create(cls, day_of_week: int, start_time: TimeLike, end_time: TimeLike) -> 'ScheduleSlot':
        return cls(
            day_of_week=validate_day_of_week(day_of_week),
            start_time=parse_time(start_time),
            end_time=parse_time(end_time),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleSlot':
        """Build a slot from the wire format ``{dayOfWeek, startTime, endTime}``."""
        try:
            return cls.create(data['dayOfWeek'], data['startTime'], data['endTime'])
        except KeyError as exc:
            raise ValidationError(f"Schedule slot is missing '{exc.args[0]}'")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dayOfWeek': self.day_of_week,
            'startTime': format_time(self.start_time),
            'endTime': format_time(self.end_time),
        }

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    def to_minutes(self) -> Tuple[int, int]:
        """Convert to minutes since midnight; an end at or before the start runs into the next day."""
        start_mins = self.start_time.hour * 60 + self.start_time.minute
        end_mins = self.end_time.hour * 60 + self.end_time.minute
        if end_mins <= start_mins:
            end_mins += 24 * 60
        return (start_mins, end_mins)

    def overlaps(self, other: 'ScheduleSlot') -> bool:
        """Check if two slots fall on the same day with overlapping times."""
        if self.day_of_week != other.day_of_week:
            return False
        s1, e1 = self.to_minutes()
        s2, e2 = other.to_minutes()
        return s1 < e2 and s2 < e1

    def __str__(self):
        return f"{self.day_name} {format_time(self.start_time)}-{format_time(self.end_time)}"
