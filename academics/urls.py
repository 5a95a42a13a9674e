from django.urls import path
from . import views

app_name = 'academics'

urlpatterns = [
    # Enrollment pricing
    path('plans/calculate-proration/', views.calculate_proration_view, name='calculate_proration'),
    path('plans/package-price/', views.package_price_view, name='package_price'),
    path('plans/<str:plan_id>/proration/', views.plan_proration_view, name='plan_proration'),

    # Academic calendar
    path('periods/', views.academic_periods_view, name='academic_periods'),
    path('periods/current/', views.current_period_view, name='current_period'),
    path('periods/lookup/', views.period_by_date_view, name='period_by_date'),
    path('periods/upcoming/', views.upcoming_periods_view, name='upcoming_periods'),

    # Booking grid support
    path('schedule/convert/', views.convert_schedule_view, name='convert_schedule'),
    path('schedule/convert-slot/', views.convert_time_slot_view, name='convert_time_slot'),
]
