"""
URL configuration for the academic calendar project.

The engine's JSON endpoints live under ``/academics/``; the Django admin is
used to review generated seasons and periods and to maintain plans.
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('academics/', include('academics.urls')),
]
