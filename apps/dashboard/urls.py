"""
Dashboard API URLs

All routes are relative to /api/dashboard/
"""
from django.urls import re_path

from . import views

urlpatterns = [
    # The frontend proxy calls the route with a trailing slash
    re_path(r'^scoreboard/?$', views.ScoreboardView.as_view(), name='dashboard_scoreboard'),
]
