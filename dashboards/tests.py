"""
Tests for the admin dashboard counters and reports.

SCENARIO: An admin opens the dashboard, checks today's counters, then
pulls reports for a date window and downloads them as Excel or PDF.
"""
import io
from datetime import datetime, time, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from openpyxl import load_workbook
from rest_framework import status

from allocations.services import AllocationService
from concerns.services import ConcernService
from dashboards.services import RegistryReportService, RegistryStatsService
from events.models import Event
from farmers.models import ApplicantStatus, Farmer

pytestmark = pytest.mark.django_db


def local_datetime(day, hour, minute=0):
    return timezone.make_aware(datetime.combine(day, time(hour, minute)))


# =============================================================================
# STATS
# =============================================================================

class TestDashboardStats:

    def test_counts_per_status(self, admin_client, make_farmer, make_organic_farmer):
        make_farmer()
        make_farmer(status=ApplicantStatus.REGISTERED)
        make_organic_farmer(status=ApplicantStatus.NOT_QUALIFIED)

        response = admin_client.get('/api/dashboard/stats/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['farmer_applicants'] == {'total': 1, 'today': 1}
        assert response.data['farmer_registered'] == {'total': 1, 'today': 1}
        assert response.data['organic_farmer_not_qualified'] == {'total': 1, 'today': 1}
        assert response.data['organic_farmer_applicants'] == {'total': 0, 'today': 0}
        assert response.data['as_of'] == timezone.localdate().isoformat()

    def test_today_uses_status_change_date(self, make_farmer):
        yesterday = timezone.now() - timedelta(days=1)
        old_applicant = make_farmer()
        approved_today = make_farmer(status=ApplicantStatus.REGISTERED)
        Farmer.objects.filter(pk__in=[old_applicant.pk, approved_today.pk]).update(created_at=yesterday)

        stats = RegistryStatsService().get_stats()

        assert stats['farmer_applicants'] == {'total': 1, 'today': 0}
        assert stats['farmer_registered'] == {'total': 1, 'today': 1}

    def test_events_and_concerns(self, farmer):
        Event.objects.create(title='Assembly', location='Hall', event_date=timezone.now())
        ConcernService.create_concern(farmer.user, 'Pests', 'Armyworms')

        stats = RegistryStatsService().get_stats()

        assert stats['events'] == {'total': 1, 'today': 1}
        assert stats['concerns'] == {'total': 1, 'today': 1}

    def test_registrant_is_forbidden(self, client_for, farmer):
        response = client_for(farmer.user).get('/api/dashboard/stats/')

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# REPORTS
# =============================================================================

class TestReports:

    def test_overview(self, admin_client, farmer, make_farmer, organic_farmer):
        make_farmer()
        AllocationService.create_allocation(Decimal('500'), 'Seeds', farmer=farmer)
        AllocationService.create_allocation(Decimal('250'), 'Seeds', organic_farmer=organic_farmer)

        response = admin_client.get('/api/dashboard/reports/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['report_type'] == 'overview'
        assert response.data['period'].endswith('- today')
        assert response.data['total_farmers'] == 2
        assert response.data['total_organic_farmers'] == 1
        assert response.data['farmers_with_allocations'] == 1
        assert response.data['farmers_without_allocations'] == 1
        assert response.data['allocation_type_stats'] == [
            {'allocation_type': 'Seeds', 'count': 2, 'total_amount': 750.0},
        ]
        assert len(response.data['registration_trends']) == 12
        assert response.data['registration_trends'][-1]['farmers'] == 2

    def test_farmers_report_status_and_type(self, admin_client, farmer, make_farmer, organic_farmer):
        make_farmer()

        response = admin_client.get('/api/dashboard/reports/', {
            'report_type': 'farmers', 'status': 'REGISTERED', 'farmer_type': 'farmer',
        })

        rows = response.data['farmers_list']
        assert [row['id'] for row in rows] == [farmer.id]
        assert rows[0]['primary_crop'] == 'Rice'
        assert rows[0]['hectares'] == 1.5

    def test_farmers_report_search(self, admin_client, make_farmer):
        make_farmer(municipality_city='Lipa')
        target = make_farmer(municipality_city='Malvar')

        response = admin_client.get('/api/dashboard/reports/', {'report_type': 'farmers', 'search': 'malvar'})

        assert [row['id'] for row in response.data['farmers_list']] == [target.id]

    def test_end_date_covers_whole_day(self, make_farmer):
        yesterday = timezone.localdate() - timedelta(days=1)
        late_entry = make_farmer()
        Farmer.objects.filter(pk=late_entry.pk).update(created_at=local_datetime(yesterday, 23, 30))
        make_farmer()

        service = RegistryReportService(start_date=yesterday - timedelta(days=1), end_date=yesterday)
        rows = service.generate('farmers')['farmers_list']

        assert [row['id'] for row in rows] == [late_entry.id]

    def test_allocations_report_nests_recipients(self, admin_client, farmer):
        AllocationService.create_allocation(Decimal('1000'), 'Cash', farmer=farmer)

        response = admin_client.get('/api/dashboard/reports/', {'report_type': 'allocations'})

        allocation = response.data['allocations_list'][0]
        assert allocation['amount'] == 1000.0
        assert allocation['farmers'][0]['name'] == f'{farmer.first_name} {farmer.surname}'

    def test_allocation_analysis(self, admin_client, farmer, make_farmer):
        make_farmer()
        AllocationService.create_allocation(Decimal('100'), farmer=farmer)

        response = admin_client.get('/api/dashboard/reports/', {'report_type': 'allocation-analysis'})

        regular, organic, combined = response.data['allocation_analysis']
        assert regular['allocation_rate'] == 50.0
        assert organic['total_farmers'] == 0
        assert organic['allocation_rate'] == 0
        assert combined['farmers_with_allocations'] == 1

    def test_concerns_report(self, admin_client, farmer, admin_user):
        concern = ConcernService.create_concern(farmer.user, 'Pests', 'Armyworms')
        ConcernService.send_message(admin_user, concern, 'On it')

        response = admin_client.get('/api/dashboard/reports/', {'report_type': 'concerns'})

        row = response.data['concerns_list'][0]
        assert row['type'] == 'farmer'
        assert row['message_count'] == 1

    @pytest.mark.parametrize('params', [
        {'report_type': 'sales'},
        {'start_date': '2025-05-01', 'end_date': '2025-04-01'},
        {'status': 'APPROVED'},
        {'farmer_type': 'fisherfolk'},
    ])
    def test_bad_query_is_400(self, admin_client, params):
        response = admin_client.get('/api/dashboard/reports/', params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_report_type_raises(self):
        with pytest.raises(ValueError):
            RegistryReportService().generate('sales')


# =============================================================================
# EXPORTS
# =============================================================================

class TestExports:

    def test_excel_export(self, admin_client, farmer):
        response = admin_client.get('/api/dashboard/reports/export/excel/', {'report_type': 'farmers'})

        assert response.status_code == status.HTTP_200_OK
        assert 'attachment; filename="farmers_report_' in response['Content-Disposition']

        workbook = load_workbook(io.BytesIO(response.content))
        sheet = workbook.worksheets[0]
        values = [cell.value for row in sheet.iter_rows() for cell in row]
        assert f'{farmer.first_name} {farmer.surname}' in values

    def test_overview_excel_has_summary(self, admin_client):
        response = admin_client.get('/api/dashboard/reports/export/excel/')

        workbook = load_workbook(io.BytesIO(response.content))
        assert workbook.sheetnames[0] == 'Summary'

    def test_pdf_export(self, admin_client, farmer):
        AllocationService.create_allocation(Decimal('100'), 'Seeds & Tools', farmer=farmer)

        response = admin_client.get('/api/dashboard/reports/export/pdf/', {'report_type': 'allocations'})

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert response.content.startswith(b'%PDF')
