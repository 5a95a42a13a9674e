from django.db import models
from django.core.validators import MinValueValidator
from django.core.exceptions import ValidationError
from decimal import Decimal
import uuid


class Season(models.Model):
    """
    Named group of consecutive academic periods within a year.

    Seasons are bounded by special weeks and are created in bulk by the
    period generator; they are not edited afterwards.
    """
    name = models.CharField(max_length=100, help_text="e.g., Temporada Aurora")
    year = models.PositiveIntegerField()
    description = models.TextField(blank=True)
    start_date = models.DateField()
    end_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['year', 'start_date']
        unique_together = ['name', 'year']

    def __str__(self):
        return f"{self.name} {self.year}"

    def clean(self):
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError("End date must be after start date.")

    @property
    def date_range_display(self):
        return f"{self.start_date.strftime('%d/%m/%Y')} - {self.end_date.strftime('%d/%m/%Y')}"


class AcademicPeriodQuerySet(models.QuerySet):
    def regular(self):
        """Exclude special weeks."""
        return self.filter(is_special_week=False)

    def special_weeks(self):
        return self.filter(is_special_week=True)

    def overlapping(self, start_date, end_date):
        """Periods whose range intersects [start_date, end_date]."""
        return self.filter(start_date__lte=end_date, end_date__gte=start_date)

    def containing(self, day):
        return self.overlapping(day, day)

    def starting_after(self, day):
        return self.filter(start_date__gt=day)

    def for_year(self, year):
        return self.filter(season__year=year)


class AcademicPeriod(models.Model):
    """
    A regular 28-day period or a special week.

    ``is_active`` is informational only. The current period is always
    derived from the date range, never from this flag.
    """
    name = models.CharField(max_length=100)
    start_date = models.DateField()
    end_date = models.DateField()
    season = models.ForeignKey(
        Season,
        on_delete=models.CASCADE,
        related_name='periods'
    )
    is_special_week = models.BooleanField(
        default=False,
        help_text="Leftover week not covered by a regular period"
    )
    is_active = models.BooleanField(
        default=False,
        help_text="Informational flag; lookups use the date range"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AcademicPeriodQuerySet.as_manager()

    class Meta:
        ordering = ['start_date', 'is_special_week']
        indexes = [
            models.Index(fields=['start_date', 'end_date'], name='academics_period_dates_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.start_date.isoformat()} - {self.end_date.isoformat()})"

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date.")

    @property
    def duration_days(self):
        return (self.end_date - self.start_date).days + 1

    def contains_date(self, day):
        return self.start_date <= day <= self.end_date

    def to_dict(self):
        return {
            'id': str(self.pk),
            'name': self.name,
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
            'seasonId': str(self.season_id),
            'isSpecialWeek': self.is_special_week,
            'isActive': self.is_active,
        }


class Plan(models.Model):
    """Purchasable plan; its price is what proration scales down."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    allow_proration = models.BooleanField(
        default=True,
        help_text="Charge only the classes remaining in the current period"
    )
    includes_classes = models.BooleanField(
        default=True,
        help_text="Plans without live classes are always charged in full"
    )
    classes_per_period = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Nominal classes in a full period"
    )
    classes_per_week = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Nominal classes per week; caps prorated classes with classes_per_period"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name
