"""
Integration tests for the applicant review workflow.

SCENARIO: An admin pages through the applicant worklist, approves or
rejects applicants, and each decision goes out by email and, for local
09 numbers only, by SMS through the TextBee gateway. A failed or skipped
notification never undoes the saved status.

Run with: pytest tests/integration/test_status_workflow.py -v
"""
import math
from datetime import datetime, time, timedelta
from unittest.mock import Mock, patch

import pytest
import requests
from django.core import mail
from django.utils import timezone
from rest_framework import status

from concerns.models import Concern
from concerns.services import ConcernService
from farmers.models import ApplicantNotification, ApplicantStatus

pytestmark = pytest.mark.django_db


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def gateway_settings(settings):
    settings.SMS_ENABLED = True
    settings.TEXTBEE_API_KEY = 'test-api-key'
    settings.TEXTBEE_DEVICE_ID = 'device-123'
    settings.TEXTBEE_BASE_URL = 'https://gateway.example.com/api/v1'
    return settings


@pytest.fixture
def gateway_post(gateway_settings):
    """Patch the HTTP call to the SMS gateway with a successful answer."""
    response = Mock(status_code=201, content=b'{"data": {}}', text='')
    response.json.return_value = {'data': {'smsBatchId': 'batch-001'}}
    with patch('core.sms_service.requests.post', return_value=response) as post:
        yield post


def sms_recipients(post):
    return [c.kwargs['json']['recipients'] for c in post.call_args_list]


# =============================================================================
# SMS ON STATUS CHANGE
# =============================================================================

class TestStatusChangeSMS:

    def test_local_number_gets_exactly_one_sms(self, admin_client, make_farmer, gateway_post):
        applicant = make_farmer(contact_number=' 09171234567 ')

        response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert response.status_code == status.HTTP_200_OK
        assert gateway_post.call_count == 1
        assert sms_recipients(gateway_post) == [['09171234567']]

        call = gateway_post.call_args
        assert call.args[0] == 'https://gateway.example.com/api/v1/gateway/devices/device-123/send-sms'
        assert call.kwargs['headers']['x-api-key'] == 'test-api-key'
        assert 'Registered' in call.kwargs['json']['message']

        sms = ApplicantNotification.objects.get(farmer=applicant, channel='sms')
        assert sms.status == 'sent'
        assert sms.provider_message_id == 'batch-001'

    def test_rejection_reason_is_in_the_text(self, admin_client, make_organic_farmer, gateway_post):
        applicant = make_organic_farmer()

        admin_client.post(
            f'/api/organic-farmers/{applicant.id}/status/',
            {'status': 'NOT_QUALIFIED', 'rejection_reason': 'No farm visit record'}
        )

        message = gateway_post.call_args.kwargs['json']['message']
        assert 'Not Qualified' in message
        assert 'Reason: No farm visit record' in message

    @pytest.mark.parametrize('contact_number', [
        '+639171234567',
        '9171234567',
        '0917123456',
        '091712345678',
        '0917-123-4567',
        '',
    ])
    def test_non_local_number_sends_nothing(self, admin_client, make_farmer, gateway_post, contact_number):
        applicant = make_farmer(contact_number=contact_number)

        response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert response.status_code == status.HTTP_200_OK
        assert gateway_post.call_count == 0
        assert [n['channel'] for n in response.data['notifications']] == ['email']

        applicant.refresh_from_db()
        assert applicant.status == ApplicantStatus.REGISTERED

    def test_double_submit_sends_twice(self, admin_client, make_farmer, gateway_post):
        applicant = make_farmer()

        for _ in range(2):
            admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert gateway_post.call_count == 2
        assert len(mail.outbox) == 2


class TestGatewayFailures:

    def test_network_error_keeps_status(self, admin_client, make_farmer, gateway_settings):
        applicant = make_farmer()

        with patch('core.sms_service.requests.post', side_effect=requests.ConnectionError('refused')):
            response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert response.status_code == status.HTTP_200_OK
        applicant.refresh_from_db()
        assert applicant.status == ApplicantStatus.REGISTERED

        sms = ApplicantNotification.objects.get(farmer=applicant, channel='sms')
        assert sms.status == 'failed'
        assert 'refused' in sms.failure_reason

    def test_gateway_error_response_is_recorded(self, admin_client, make_farmer, gateway_settings):
        applicant = make_farmer()
        failure = Mock(status_code=401, content=b'Unauthorized', text='Unauthorized')

        with patch('core.sms_service.requests.post', return_value=failure):
            response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'NOT_QUALIFIED'})

        assert response.status_code == status.HTTP_200_OK
        failed = [n for n in response.data['notifications'] if n['status'] == 'failed']
        assert [n['channel'] for n in failed] == ['sms']

    def test_email_failure_still_sends_sms(self, admin_client, make_farmer, gateway_post):
        applicant = make_farmer()

        with patch('farmers.services.notification_service.send_mail', side_effect=OSError('smtp down')):
            response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert response.status_code == status.HTTP_200_OK
        statuses = {n['channel']: n['status'] for n in response.data['notifications']}
        assert statuses == {'email': 'failed', 'sms': 'sent'}
        assert gateway_post.call_count == 1


# =============================================================================
# WORKLIST PAGING & DATE RANGES
# =============================================================================

class TestWorklistPaging:

    def test_second_page_holds_records_eleven_to_twenty(self, admin_client, make_farmer):
        for _ in range(25):
            make_farmer()

        everything = admin_client.get('/api/farmers/', {'limit': 100}).data['results']
        page = admin_client.get('/api/farmers/', {'page': 2, 'limit': 10}).data

        assert page['total'] == 25
        assert page['pages'] == math.ceil(25 / 10)
        assert page['current_page'] == 2
        assert [row['id'] for row in page['results']] == [row['id'] for row in everything[10:20]]

    def test_filters_apply_before_paging(self, admin_client, make_farmer):
        for _ in range(12):
            make_farmer(status=ApplicantStatus.REGISTERED)
        for _ in range(5):
            make_farmer()

        page = admin_client.get('/api/farmers/', {'status': 'REGISTERED', 'page': 2, 'limit': 10}).data

        assert page['total'] == 12
        assert page['pages'] == 2
        assert len(page['results']) == 2

    def test_concerns_date_to_includes_the_whole_day(self, admin_client, farmer):
        today = timezone.localdate()
        late = ConcernService.create_concern(farmer.user, 'Late', 'Filed just before midnight')
        Concern.objects.filter(pk=late.pk).update(
            created_at=timezone.make_aware(datetime.combine(today, time(23, 59, 59)))
        )
        tomorrow = ConcernService.create_concern(farmer.user, 'Tomorrow', 'Next day')
        Concern.objects.filter(pk=tomorrow.pk).update(
            created_at=timezone.make_aware(datetime.combine(today + timedelta(days=1), time(0, 0)))
        )

        response = admin_client.get('/api/concerns/', {
            'date_from': today.isoformat(), 'date_to': today.isoformat(),
        })

        assert [row['id'] for row in response.data['results']] == [late.id]
