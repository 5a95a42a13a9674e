from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST
from django.views.decorators.csrf import csrf_exempt
from django.utils import timezone
import json
import logging

from .exceptions import DataSourceError, PlanNotFoundError
from .forms import (
    PackagePriceForm,
    PeriodLookupForm,
    ProrationRequestForm,
    ScheduleConversionForm,
    TimeSlotConversionForm,
    build_schedule_formset,
)
from .services import (
    calculate_plan_proration,
    calculate_proration,
    get_active_and_future_periods,
    get_period_by_date,
    get_year_calendar,
    locate_period,
)
from .utils.proration import calculate_package_price
from .utils.timezone_converter import (
    convert_schedule_from_utc,
    convert_schedule_to_utc,
    convert_time_slot_from_utc,
    convert_time_slot_to_utc,
)

logger = logging.getLogger(__name__)


def _error(message, status, details=None):
    payload = {'error': message}
    if details:
        payload['details'] = details
    return JsonResponse(payload, status=status)


def _load_json(request):
    try:
        payload = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _formset_errors(formset):
    details = [form.errors.get_json_data() for form in formset.forms if form.errors]
    details.extend(formset.non_form_errors().get_json_data())
    return details


def _bind_schedule(schedule):
    """Bound formset for a JSON schedule, or None when it is not a non-empty list of objects."""
    if not isinstance(schedule, list) or not schedule:
        return None
    if not all(isinstance(slot, dict) for slot in schedule):
        return None
    return build_schedule_formset(schedule)


@csrf_exempt
@require_POST
def calculate_proration_view(request):
    """
    Prorated price of a plan for a weekly schedule.

    Body: {"planId": "...", "schedule": [{"dayOfWeek": 1, "startTime": "10:00", "endTime": "11:00"}]}
    """
    payload = _load_json(request)
    if payload is None:
        return _error('Invalid JSON body', 400)

    form = ProrationRequestForm({'plan_id': payload.get('planId')})
    if not form.is_valid():
        return _error('planId is required', 400, form.errors.get_json_data())

    formset = _bind_schedule(payload.get('schedule'))
    if formset is None:
        return _error('schedule must be a non-empty list of slots', 400)
    if not formset.is_valid():
        return _error('Invalid schedule', 400, _formset_errors(formset))

    try:
        result = calculate_proration(form.cleaned_data['plan_id'], formset.get_slots(), now=timezone.now())
    except PlanNotFoundError:
        logger.info(f"Proration requested for unknown plan {form.cleaned_data['plan_id']}")
        return _error('Plan not found', 404)
    except DataSourceError:
        return _error('Academic data is temporarily unavailable', 503)

    return JsonResponse(result.to_dict())


@require_GET
def current_period_view(request):
    """Current or upcoming regular period, or the default window."""
    try:
        window = locate_period(timezone.now())
    except DataSourceError:
        return _error('Academic data is temporarily unavailable', 503)
    return JsonResponse(window.to_dict())


@require_GET
def academic_periods_view(request):
    """Seasons and periods of a year (?year=YYYY, default current year)."""
    year_param = request.GET.get('year') or str(timezone.now().year)
    try:
        year = int(year_param)
        seasons, periods = get_year_calendar(year)
    except (ValueError, ValidationError):
        return _error(f"Invalid year '{year_param}'", 400)

    return JsonResponse({
        'year': year,
        'seasons': [
            {
                'id': str(season.pk),
                'name': season.name,
                'startDate': season.start_date.isoformat(),
                'endDate': season.end_date.isoformat(),
            }
            for season in seasons
        ],
        'periods': [period.to_dict() for period in periods],
    })


@csrf_exempt
@require_POST
def convert_schedule_view(request):
    """
    Convert a weekly schedule between a timezone and UTC.

    Body: {"timezone": "America/Lima", "direction": "to_utc" | "from_utc", "schedule": [...]}
    """
    payload = _load_json(request)
    if payload is None:
        return _error('Invalid JSON body', 400)

    form = ScheduleConversionForm({
        'timezone': payload.get('timezone'),
        'direction': payload.get('direction', 'to_utc'),
    })
    if not form.is_valid():
        return _error('Invalid conversion request', 400, form.errors.get_json_data())

    formset = _bind_schedule(payload.get('schedule'))
    if formset is None:
        return _error('schedule must be a non-empty list of slots', 400)
    if not formset.is_valid():
        return _error('Invalid schedule', 400, _formset_errors(formset))

    tz_name = form.cleaned_data['timezone']
    if form.cleaned_data['direction'] == 'to_utc':
        converted = convert_schedule_to_utc(formset.get_slots(), tz_name)
    else:
        converted = convert_schedule_from_utc(formset.get_slots(), tz_name)

    return JsonResponse({
        'timezone': tz_name,
        'direction': form.cleaned_data['direction'],
        'schedule': [slot.to_dict() for slot in converted],
    })


@require_GET
def plan_proration_view(request, plan_id):
    """Day-based prorated price of a plan for the current period."""
    try:
        result = calculate_plan_proration(plan_id, now=timezone.now())
    except PlanNotFoundError:
        logger.info(f"Plan proration requested for unknown plan {plan_id}")
        return _error('Plan not found', 404)
    except DataSourceError:
        return _error('Academic data is temporarily unavailable', 503)
    return JsonResponse(result.to_dict())


@csrf_exempt
@require_POST
def package_price_view(request):
    """
    Price of a class package.

    Body: {"packageType": "standard", "isProrated": false, "proratedClasses": 0, "basePrice": 10}
    """
    payload = _load_json(request)
    if payload is None:
        return _error('Invalid JSON body', 400)

    form = PackagePriceForm({
        'package_type': payload.get('packageType'),
        'is_prorated': payload.get('isProrated', False),
        'prorated_classes': payload.get('proratedClasses'),
        'base_price': payload.get('basePrice'),
    })
    if not form.is_valid():
        return _error('Invalid package request', 400, form.errors.get_json_data())

    price = calculate_package_price(
        form.cleaned_data['package_type'],
        form.cleaned_data['is_prorated'],
        form.cleaned_data['prorated_classes'] or 0,
        form.cleaned_data['base_price'],
    )
    return JsonResponse({
        'packageType': form.cleaned_data['package_type'],
        'isProrated': form.cleaned_data['is_prorated'],
        'price': float(price),
    })


@require_GET
def period_by_date_view(request):
    """Regular period containing ?date=YYYY-MM-DD (default: today in UTC)."""
    form = PeriodLookupForm({'date': request.GET.get('date') or timezone.now().date().isoformat()})
    if not form.is_valid():
        return _error('Invalid date', 400, form.errors.get_json_data())

    period = get_period_by_date(form.cleaned_data['date'])
    if period is None:
        return _error('No academic period contains this date', 404)
    return JsonResponse(period.to_dict())


@require_GET
def upcoming_periods_view(request):
    """Regular periods that contain today or start later."""
    periods = get_active_and_future_periods(timezone.now())
    return JsonResponse({'periods': [period.to_dict() for period in periods]})


@csrf_exempt
@require_POST
def convert_time_slot_view(request):
    """
    Convert a one-off class on a specific date between a timezone and UTC.

    Body: {"timezone": "America/Lima", "direction": "to_utc", "date": "2025-01-14", "timeSlot": "23:30-23:59"}
    """
    payload = _load_json(request)
    if payload is None:
        return _error('Invalid JSON body', 400)

    form = TimeSlotConversionForm({
        'timezone': payload.get('timezone'),
        'direction': payload.get('direction', 'to_utc'),
        'date': payload.get('date'),
        'time_slot': payload.get('timeSlot'),
    })
    if not form.is_valid():
        return _error('Invalid conversion request', 400, form.errors.get_json_data())

    convert = convert_time_slot_to_utc if form.cleaned_data['direction'] == 'to_utc' else convert_time_slot_from_utc
    try:
        converted_date, converted_slot = convert(
            form.cleaned_data['date'], form.cleaned_data['time_slot'], form.cleaned_data['timezone']
        )
    except ValidationError as e:
        return _error('Invalid conversion request', 400, e.messages)

    return JsonResponse({
        'timezone': form.cleaned_data['timezone'],
        'direction': form.cleaned_data['direction'],
        'date': converted_date.isoformat(),
        'timeSlot': converted_slot,
    })
