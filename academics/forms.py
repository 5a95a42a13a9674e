from django import forms

from .utils.proration import PACKAGE_DISCOUNTS
from .utils.slots import SATURDAY, SUNDAY, ScheduleSlot
from .utils.timezone_converter import get_zone

TIME_INPUT_FORMATS = ['%H:%M']
DATE_INPUT_FORMATS = ['%Y-%m-%d']

# Two classes a day, every day of the week
MAX_SLOTS_PER_SCHEDULE = 14


class ProrationRequestForm(forms.Form):
    """Plan part of a proration request; the schedule is a ScheduleSlotFormSet."""
    plan_id = forms.CharField(max_length=64, error_messages={'required': 'planId is required.'})


class ScheduleConversionForm(forms.Form):
    DIRECTION_CHOICES = [
        ('to_utc', 'Local to UTC'),
        ('from_utc', 'UTC to local'),
    ]

    timezone = forms.CharField(max_length=64)
    direction = forms.ChoiceField(choices=DIRECTION_CHOICES)

    def clean_timezone(self):
        tz_name = self.cleaned_data['timezone']
        get_zone(tz_name)
        return tz_name


class TimeSlotConversionForm(ScheduleConversionForm):
    """A one-off class on a specific date: {date, timeSlot: "HH:MM-HH:MM"}."""
    date = forms.DateField(input_formats=DATE_INPUT_FORMATS)
    time_slot = forms.RegexField(
        regex=r'^\d{2}:\d{2}-\d{2}:\d{2}$',
        error_messages={'invalid': 'Expected HH:MM-HH:MM.'}
    )


class PeriodLookupForm(forms.Form):
    date = forms.DateField(input_formats=DATE_INPUT_FORMATS)


class PackagePriceForm(forms.Form):
    package_type = forms.ChoiceField(choices=[(name, name.title()) for name in PACKAGE_DISCOUNTS])
    is_prorated = forms.BooleanField(required=False)
    prorated_classes = forms.IntegerField(min_value=0, required=False)
    base_price = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('is_prorated') and cleaned_data.get('prorated_classes') is None:
            raise forms.ValidationError("Prorated packages need proratedClasses.")
        return cleaned_data


class ScheduleSlotForm(forms.Form):
    """One weekly slot: {dayOfWeek, startTime, endTime}."""
    day_of_week = forms.IntegerField(min_value=SUNDAY, max_value=SATURDAY)
    start_time = forms.TimeField(input_formats=TIME_INPUT_FORMATS)
    end_time = forms.TimeField(input_formats=TIME_INPUT_FORMATS)

    def clean(self):
        cleaned_data = super().clean()
        start_time = cleaned_data.get('start_time')
        end_time = cleaned_data.get('end_time')

        # UTC slots may wrap past midnight, so only an empty range is rejected
        if start_time and end_time and start_time == end_time:
            raise forms.ValidationError("End time must differ from start time.")

        return cleaned_data

    def to_slot(self):
        return ScheduleSlot(
            day_of_week=self.cleaned_data['day_of_week'],
            start_time=self.cleaned_data['start_time'],
            end_time=self.cleaned_data['end_time'],
        )


class BaseScheduleSlotFormSet(forms.BaseFormSet):
    """A weekly schedule: at least one slot, no two overlapping on the same day."""

    def clean(self):
        if any(self.errors):
            return

        slots = []
        for index, form in enumerate(self.forms):
            if not form.has_changed():
                raise forms.ValidationError(f"Schedule slot {index + 1} is empty.")
            slots.append(form.to_slot())

        for index, slot in enumerate(slots):
            for other in slots[index + 1:]:
                if slot.overlaps(other):
                    raise forms.ValidationError(f"Schedule slots overlap: {slot} and {other}.")

    def get_slots(self):
        return [form.to_slot() for form in self.forms]


ScheduleSlotFormSet = forms.formset_factory(
    ScheduleSlotForm,
    formset=BaseScheduleSlotFormSet,
    extra=0,
    min_num=1,
    validate_min=True,
    max_num=MAX_SLOTS_PER_SCHEDULE,
    validate_max=True,
)


def build_schedule_formset(schedule):
    """
    Bind a ScheduleSlotFormSet to a JSON schedule list.

    Args:
        schedule: list of {dayOfWeek, startTime, endTime} dicts

    Returns:
        Bound ScheduleSlotFormSet (call is_valid() before get_slots())
    """
    data = {
        'form-TOTAL_FORMS': str(len(schedule)),
        'form-INITIAL_FORMS': '0',
    }
    for index, slot in enumerate(schedule):
        for field_name, key in (('day_of_week', 'dayOfWeek'), ('start_time', 'startTime'), ('end_time', 'endTime')):
            value = slot.get(key)
            data[f'form-{index}-{field_name}'] = '' if value is None else str(value)
    return ScheduleSlotFormSet(data)
