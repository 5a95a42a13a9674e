"""
Academic calendar services.

ORM-facing entry points around the pure engine in ``academics.utils``:
plan lookup, period location, proration and yearly calendar generation.
"""
import logging
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from .exceptions import DataSourceError, PeriodsAlreadyExistError, PlanNotFoundError
from .models import AcademicPeriod, Plan, Season
from .utils.calendar_utils import utc_today
from .utils.period_generator import generate_academic_periods
from .utils.period_locator import find_current_or_next_period, DEFAULT_PERIOD_DAYS
from .utils.proration import compute_plan_proration, compute_proration

logger = logging.getLogger(__name__)

MIN_YEAR = 2020
MAX_YEAR = 2100


def get_default_period_days():
    return getattr(settings, 'ACADEMICS_DEFAULT_PERIOD_DAYS', DEFAULT_PERIOD_DAYS)


def get_plan(plan_id):
    """Active plan by id; malformed ids are reported as not found."""
    try:
        plan_uuid = uuid.UUID(str(plan_id))
    except (TypeError, ValueError):
        raise PlanNotFoundError(plan_id)

    try:
        return Plan.objects.get(pk=plan_uuid, is_active=True)
    except Plan.DoesNotExist:
        raise PlanNotFoundError(plan_id)
    except DatabaseError as e:
        logger.exception(f"Failed to load plan {plan_id}")
        raise DataSourceError("Plan store unavailable") from e


def locate_period(now=None):
    """
    Current or next regular period as a PeriodWindow.

    Falls back to the default window when no period exists. Store failures
    propagate as DataSourceError and never fall back.
    """
    if now is None:
        now = timezone.now()
    today = utc_today(now)

    try:
        candidates = list(
            AcademicPeriod.objects.regular().filter(end_date__gte=today).order_by('start_date')
        )
    except DatabaseError as e:
        logger.exception("Failed to load academic periods")
        raise DataSourceError("Academic period store unavailable") from e

    window = find_current_or_next_period(now, candidates, default_days=get_default_period_days())
    if window.is_default:
        logger.info(f"No current or upcoming academic period for {today}, using default window")
    return window


def calculate_proration(plan_id, slots, now=None):
    """
    Prorated price of a plan for a weekly schedule.

    Args:
        plan_id: Plan UUID (string or UUID)
        slots: Non-empty list of ScheduleSlot (validated by the caller)
        now: Reference instant, defaults to the current time

    Returns:
        ProrationResult

    Raises:
        PlanNotFoundError: Unknown, malformed or inactive plan id
        DataSourceError: Plan or period store unavailable
    """
    if now is None:
        now = timezone.now()

    plan = get_plan(plan_id)
    window = locate_period(now)
    result = compute_proration(plan, window, slots, now)

    logger.info(
        f"Proration for plan {plan.pk}: {result.classes_from_now}/{result.total_classes_in_period} "
        f"classes in {result.period_name}, price {result.prorated_price} (applied={result.proration_applied})"
    )
    return result


def calculate_plan_proration(plan_id, now=None):
    """
    Day-based prorated price of a plan, without a class schedule.

    Raises:
        PlanNotFoundError: Unknown, malformed or inactive plan id
        DataSourceError: Plan or period store unavailable
    """
    if now is None:
        now = timezone.now()

    plan = get_plan(plan_id)
    window = locate_period(now)
    result = compute_plan_proration(plan, window, now)

    logger.info(
        f"Plan proration for {plan.pk}: {result.remaining_days}/{result.total_days} days "
        f"left in {result.period_name}, price {result.prorated_price} (applied={result.proration_applied})"
    )
    return result


def get_period_by_date(day):
    """Regular period containing ``day`` (latest start wins), or None."""
    return (
        AcademicPeriod.objects.regular()
        .containing(day)
        .select_related('season')
        .order_by('-start_date')
        .first()
    )


def get_active_and_future_periods(now=None):
    """Regular periods that contain today or start after it, ordered by start date."""
    today = utc_today(now)
    return (
        AcademicPeriod.objects.regular()
        .filter(end_date__gte=today)
        .select_related('season')
        .order_by('start_date')
    )


def set_active_period(period_id):
    """Flag one period as active and clear the flag everywhere else."""
    with transaction.atomic():
        period = AcademicPeriod.objects.select_for_update().get(pk=period_id)
        AcademicPeriod.objects.filter(is_active=True).exclude(pk=period.pk).update(is_active=False)
        if not period.is_active:
            period.is_active = True
            period.save(update_fields=['is_active', 'updated_at'])
    return period


def validate_year(year):
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")


def get_year_calendar(year):
    """
    Persisted seasons and periods of a year.

    Returns:
        (seasons, periods) querysets ordered by start date
    """
    validate_year(year)
    seasons = Season.objects.filter(year=year).order_by('start_date')
    periods = AcademicPeriod.objects.for_year(year).order_by('start_date', 'is_special_week')
    return seasons, periods


@transaction.atomic
def create_periods_for_year(year, now=None, activate_current=True, replace=False):
    """
    Generate and persist the seasons and periods of a year.

    Args:
        year: Calendar year (2020-2100)
        now: Reference instant for the informational active flag
        activate_current: Flag the period containing today
        replace: Delete the year's existing seasons and periods first

    Returns:
        (seasons, periods) as saved model instances

    Raises:
        ValidationError: Year out of range
        PeriodsAlreadyExistError: Periods exist and ``replace`` is False
    """
    validate_year(year)

    existing_count = AcademicPeriod.objects.for_year(year).count()
    if existing_count:
        if not replace:
            raise PeriodsAlreadyExistError(year, existing_count)
        logger.info(f"Replacing {existing_count} existing academic periods for {year}")

    # Periods cascade with their seasons
    Season.objects.filter(year=year).delete()

    generated_periods, generated_seasons = generate_academic_periods(
        year, activate_current=activate_current, today=now
    )

    seasons_by_id = {}
    for generated in generated_seasons:
        seasons_by_id[generated.id] = Season.objects.create(
            name=generated.name,
            year=year,
            description=f"{generated.name} del año {year}",
            start_date=generated.start_date,
            end_date=generated.end_date,
        )

    periods = AcademicPeriod.objects.bulk_create([
        AcademicPeriod(
            name=generated.name,
            start_date=generated.start_date,
            end_date=generated.end_date,
            season=seasons_by_id[generated.season_id],
            is_special_week=generated.is_special_week,
            is_active=generated.is_active,
        )
        for generated in generated_periods
    ])

    logger.info(f"Generated {len(seasons_by_id)} seasons and {len(periods)} academic periods for {year}")
    return list(seasons_by_id.values()), periods
