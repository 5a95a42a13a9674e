"""
Enrollment Proration
====================

Prices a plan for a student joining part-way through an academic period.

Calculation Flow:
1. Enrollment start = later of today and the period start
2. Total occurrences = class days of the schedule in the whole period
3. Occurrences from now = class days from enrollment start to period end
4. Prorated price = base price / total occurrences × occurrences from now
5. Full price when the plan disallows proration, the schedule has no class
   day in the period, or the period is the synthetic default window

compute_plan_proration is the schedule-free variant: it scales the price by
the days left in the period instead of the class days left.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from .calendar_utils import utc_today
from .occurrence_counter import classes_per_week, count_occurrences
from .period_locator import PeriodWindow
from .slots import ScheduleSlot

CENT = Decimal('0.01')

# Below this share of the period left, the whole period is charged
MIN_PRORATION_SHARE = Decimal('0.10')

ALMOST_COMPLETE_MESSAGE = 'Período casi completo, se cobra el precio completo'

# Volume discounts for fixed class packages (not applied to prorated packages)
PACKAGE_DISCOUNTS = {
    'basic': Decimal('0.00'),
    'standard': Decimal('0.05'),
    'intensive': Decimal('0.10'),
    'custom': Decimal('0.00'),
}

# Classes in a full four-week period per package
PACKAGE_CLASS_COUNTS = {
    'basic': 8,
    'standard': 12,
    'intensive': 16,
    'custom': 0,
}


@dataclass
class ProrationResult:
    """Price breakdown for one enrollment request."""
    plan_id: str
    plan_name: str
    original_price: Decimal
    prorated_price: Decimal
    classes_from_now: int
    total_classes_in_period: int
    classes_per_week: int
    period_name: str
    period_start: date
    period_end: date
    enrollment_start: date
    days_remaining: int
    weeks_remaining: int
    allow_proration: bool
    proration_applied: bool
    is_default_period: bool = False
    schedule: List[ScheduleSlot] = field(default_factory=list)

    def to_dict(self):
        """JSON representation (camelCase keys, ISO-8601 dates)."""
        return {
            'planId': self.plan_id,
            'planName': self.plan_name,
            'originalPrice': float(self.original_price),
            'proratedPrice': float(self.prorated_price),
            'classesFromNow': self.classes_from_now,
            'totalClassesInFullPeriod': self.total_classes_in_period,
            'classesPerWeek': self.classes_per_week,
            'periodName': self.period_name,
            'periodStart': self.period_start.isoformat(),
            'periodEnd': self.period_end.isoformat(),
            'enrollmentStart': self.enrollment_start.isoformat(),
            'daysRemaining': self.days_remaining,
            'weeksRemaining': self.weeks_remaining,
            'allowProration': self.allow_proration,
            'prorationApplied': self.proration_applied,
            'isDefaultPeriod': self.is_default_period,
            'schedule': [slot.to_dict() for slot in self.schedule],
        }


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def prorate_price(base_price: Decimal, total_occurrences: int, remaining_occurrences: int) -> Decimal:
    """(base price / total occurrences) × remaining occurrences, rounded half-up to the cent."""
    base_price = Decimal(base_price)
    price_per_class = base_price / Decimal(total_occurrences)
    return round_money(price_per_class * Decimal(remaining_occurrences))


def compute_proration(plan, window: PeriodWindow, slots: List[ScheduleSlot], now) -> ProrationResult:
    """
    Compute the proration breakdown of ``plan`` for ``slots`` within ``window``.

    Args:
        plan: Object with ``pk``, ``name``, ``price``, ``allow_proration`` and
            ``includes_classes`` attributes
        window: Located period (possibly the default window)
        slots: Weekly schedule chosen by the student
        now: Reference instant; its UTC date is "today"

    Returns:
        ProrationResult
    """
    today = utc_today(now)
    period_start = window.start_date
    period_end = window.end_date

    enrollment_start = max(today, period_start)

    total_occurrences = count_occurrences(period_start, period_end, slots)
    occurrences_from_now = count_occurrences(enrollment_start, period_end, slots)

    base_price = Decimal(plan.price)
    proration_allowed = bool(plan.allow_proration) and getattr(plan, 'includes_classes', True)

    if proration_allowed and total_occurrences > 0 and not window.is_default:
        prorated_price = prorate_price(base_price, total_occurrences, occurrences_from_now)
        proration_applied = True
    else:
        prorated_price = round_money(base_price)
        proration_applied = False

    days_remaining = max((period_end - enrollment_start).days, 0)
    weeks_remaining = math.ceil(days_remaining / 7)

    return ProrationResult(
        plan_id=str(plan.pk),
        plan_name=plan.name,
        original_price=round_money(base_price),
        prorated_price=prorated_price,
        classes_from_now=occurrences_from_now,
        total_classes_in_period=total_occurrences,
        classes_per_week=classes_per_week(slots),
        period_name=window.name,
        period_start=period_start,
        period_end=period_end,
        enrollment_start=enrollment_start,
        days_remaining=days_remaining,
        weeks_remaining=weeks_remaining,
        allow_proration=bool(plan.allow_proration),
        proration_applied=proration_applied,
        is_default_period=window.is_default,
        schedule=list(slots),
    )


@dataclass
class PlanProrationResult:
    """Day-based proration of a plan, independent of any class schedule."""
    original_price: Decimal
    prorated_price: Decimal
    original_classes: int
    prorated_classes: int
    remaining_days: int
    total_days: int
    proration_applied: bool
    period_name: str
    period_start: date
    period_end: date
    is_default_period: bool = False
    message: str = ''

    def to_dict(self):
        data = {
            'originalPrice': float(self.original_price),
            'proratedPrice': float(self.prorated_price),
            'originalClasses': self.original_classes,
            'proratedClasses': self.prorated_classes,
            'remainingDays': self.remaining_days,
            'totalDays': self.total_days,
            'prorationApplied': self.proration_applied,
            'periodName': self.period_name,
            'periodStart': self.period_start.isoformat(),
            'periodEnd': self.period_end.isoformat(),
            'isDefaultPeriod': self.is_default_period,
        }
        if self.message:
            data['message'] = self.message
        return data


def compute_plan_proration(plan, window: PeriodWindow, now) -> PlanProrationResult:
    """
    Prorate a plan by the days left in ``window``.

    Calculation Flow:
    1. Full price for plans without classes or proration, and for the
       synthetic default window
    2. Total days = period end - period start;
       remaining days = period end - enrollment start
    3. Full price when less than 10% of the period is left
    4. Prorated price = price × remaining days / total days
    5. Prorated classes = min(ceil(remaining days / 7) × classes per week,
       classes per period), when the plan defines both
    """
    enrollment_start = max(utc_today(now), window.start_date)
    total_days = (window.end_date - window.start_date).days
    remaining_days = max((window.end_date - enrollment_start).days, 0)

    base_price = round_money(Decimal(plan.price))
    classes_per_period = plan.classes_per_period or 0

    result = PlanProrationResult(
        original_price=base_price,
        prorated_price=base_price,
        original_classes=classes_per_period,
        prorated_classes=classes_per_period,
        remaining_days=remaining_days,
        total_days=total_days,
        proration_applied=False,
        period_name=window.name,
        period_start=window.start_date,
        period_end=window.end_date,
        is_default_period=window.is_default,
    )

    if not (plan.allow_proration and plan.includes_classes) or window.is_default or total_days <= 0:
        return result

    if Decimal(remaining_days) / Decimal(total_days) < MIN_PRORATION_SHARE:
        result.message = ALMOST_COMPLETE_MESSAGE
        return result

    result.prorated_price = round_money(base_price * remaining_days / total_days)
    if plan.classes_per_week and plan.classes_per_period:
        remaining_weeks = math.ceil(remaining_days / 7)
        result.prorated_classes = min(remaining_weeks * plan.classes_per_week, plan.classes_per_period)
    result.proration_applied = True
    return result


def calculate_package_price(package_type: str, is_prorated: bool, prorated_classes: int, base_price) -> Decimal:
    """
    Price of a class package.

    Args:
        package_type: 'basic', 'standard', 'intensive' or 'custom'
        is_prorated: Whether the student pays only for ``prorated_classes``
        prorated_classes: Classes charged when prorated
        base_price: Price of a single class

    Volume discounts only apply to full (non-prorated) packages.
    """
    if package_type not in PACKAGE_DISCOUNTS:
        raise ValueError(f"Unknown package type: {package_type}")

    class_count = prorated_classes if is_prorated else PACKAGE_CLASS_COUNTS[package_type]
    discount = Decimal('0.00') if is_prorated else PACKAGE_DISCOUNTS[package_type]
    price_per_class = Decimal(base_price) * (Decimal('1.00') - discount)

    return round_money(price_per_class * class_count)
