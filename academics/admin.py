from django.contrib import admin, messages
from django.utils.html import format_html
from .models import Season, AcademicPeriod, Plan
from .services import set_active_period


class AcademicPeriodInline(admin.TabularInline):
    model = AcademicPeriod
    extra = 0
    fields = ['name', 'start_date', 'end_date', 'is_special_week', 'is_active']
    readonly_fields = ['name', 'start_date', 'end_date', 'is_special_week']
    ordering = ['start_date']
    can_delete = False


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    list_display = ['name', 'year', 'start_date', 'end_date', 'period_count']
    list_filter = ['year']
    search_fields = ['name', 'description']
    ordering = ['-year', 'start_date']
    inlines = [AcademicPeriodInline]

    def period_count(self, obj):
        return obj.periods.count()
    period_count.short_description = 'Periods'


@admin.register(AcademicPeriod)
class AcademicPeriodAdmin(admin.ModelAdmin):
    list_display = ['name', 'season', 'start_date', 'end_date', 'period_type', 'is_active']
    list_filter = ['is_special_week', 'is_active', 'season__year']
    search_fields = ['name', 'season__name']
    date_hierarchy = 'start_date'
    ordering = ['start_date']
    actions = ['mark_as_active']

    def period_type(self, obj):
        if obj.is_special_week:
            return format_html('<span style="color: #b45309;">{}</span>', 'Special week')
        return 'Regular'
    period_type.short_description = 'Type'

    def mark_as_active(self, request, queryset):
        if queryset.count() != 1:
            self.message_user(request, 'Select exactly one period to mark as active.', level=messages.ERROR)
            return
        period = set_active_period(queryset.get().pk)
        self.message_user(request, f'{period.name} is now marked as active.', level=messages.SUCCESS)
    mark_as_active.short_description = 'Mark selected period as active'


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ['name', 'price', 'allow_proration', 'includes_classes', 'classes_per_period', 'classes_per_week', 'is_active']
    list_filter = ['allow_proration', 'includes_classes', 'is_active']
    search_fields = ['name', 'description']
    readonly_fields = ['id', 'created_at', 'updated_at']
