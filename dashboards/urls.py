"""
Dashboard URL Configuration
"""
from django.urls import path

from .views import (
    DashboardStatsView,
    ReportView,
    ReportExcelExportView,
    ReportPDFExportView,
)

app_name = 'dashboards'

urlpatterns = [
    path('stats/', DashboardStatsView.as_view(), name='dashboard-stats'),
    path('reports/', ReportView.as_view(), name='reports'),
    path('reports/export/excel/', ReportExcelExportView.as_view(), name='reports-export-excel'),
    path('reports/export/pdf/', ReportPDFExportView.as_view(), name='reports-export-pdf'),
]
