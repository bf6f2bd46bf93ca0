"""
Dashboard Views

Admin dashboard counters, reports and report downloads.
"""
import logging

from django.http import HttpResponse
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsRegistryAdmin

from .exports import build_report_pdf, build_report_workbook, export_filename
from .serializers import ReportRequestSerializer
from .services import RegistryReportService, RegistryStatsService

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


class DashboardStatsView(APIView):
    """
    GET /api/dashboard/stats/

    Applicant, registered and not-qualified counts per farmer type, plus
    events and concerns, each with a "today" count.
    """
    permission_classes = [IsRegistryAdmin]

    def get(self, request):
        return Response(RegistryStatsService().get_stats())


class BaseReportView(APIView):
    permission_classes = [IsRegistryAdmin]

    def build_report(self, request):
        params = ReportRequestSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        options = dict(params.validated_data)

        report_type = options.pop('report_type')
        service = RegistryReportService(**options)
        return report_type, service.generate(report_type), service.period_label()


class ReportView(BaseReportView):
    """
    GET /api/dashboard/reports/?report_type=overview&start_date=&end_date=&status=&search=&farmer_type=

    report_type: overview, farmers, events, concerns, allocations,
    allocation-analysis, allocation-types
    """

    def get(self, request):
        report_type, data, period = self.build_report(request)
        return Response({'report_type': report_type, 'period': period, **data})


class ReportExcelExportView(BaseReportView):
    """GET /api/dashboard/reports/export/excel/ (same query as the report)"""

    def get(self, request):
        report_type, data, period = self.build_report(request)
        content = build_report_workbook(report_type, data, period_label=period)
        logger.info(f"{request.user.username} exported {report_type} report as Excel")

        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{export_filename(report_type, "xlsx")}"'
        return response


class ReportPDFExportView(BaseReportView):
    """GET /api/dashboard/reports/export/pdf/ (same query as the report)"""

    def get(self, request):
        report_type, data, period = self.build_report(request)
        content = build_report_pdf(report_type, data, period_label=period)
        logger.info(f"{request.user.username} exported {report_type} report as PDF")

        response = HttpResponse(content, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{export_filename(report_type, "pdf")}"'
        return response
