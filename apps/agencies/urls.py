"""
Agency API URLs

All routes are relative to /api/agencies/
"""
from django.urls import path

from .views import AgencyScoreboardSettingsView

urlpatterns = [
    path('<str:agency_id>/scoreboard-settings', AgencyScoreboardSettingsView.as_view(), name='agency_scoreboard_settings'),
]
