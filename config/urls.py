"""
URL Configuration for AgentSpace Scoreboard Backend

All routes are prefixed with /api/ to match Next.js conventions.
"""
from django.urls import include, path

from apps.core.views import health_check

urlpatterns = [
    # Health check endpoint (public)
    path('api/health', health_check, name='health_check'),

    # Dashboard endpoints (scoreboard)
    path('api/dashboard/', include('apps.dashboard.urls')),

    # Agencies endpoints (scoreboard settings)
    path('api/agencies/', include('apps.agencies.urls')),
]
