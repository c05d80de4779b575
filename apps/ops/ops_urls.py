from django.urls import path
from .views import MetricsView, EmployeeDashboardView, AdminDashboardView

urlpatterns = [
    path("metrics/",          MetricsView.as_view(),           name="ops-metrics"),
    path("dashboard/",        EmployeeDashboardView.as_view(), name="ops-dashboard"),
    path("admin-dashboard/",  AdminDashboardView.as_view(),    name="ops-admin-dashboard"),
]
