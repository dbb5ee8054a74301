"""URL routing for analytics endpoints."""

from django.urls import path  # type: ignore

from .views import StatsView


urlpatterns = [
    # Do not prefix with 'analytics/' here; the namespace is defined in config.urls
    path('stats/', StatsView.as_view(), name='analytics-stats'),
]
