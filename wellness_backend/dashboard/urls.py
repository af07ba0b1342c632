"""
Dashboard URL Configuration (mounted under /api/)
"""
from django.urls import path

from .views import DashboardStatsView

app_name = 'dashboard'

urlpatterns = [
    path('admin/dashboard/stats/', DashboardStatsView.as_view(), name='stats'),
]
