"""Dashboard URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.dashboard.views import DashboardView

urlpatterns = [
    path("admin/dashboard/", DashboardView.as_view(), name="admin-dashboard"),
]
