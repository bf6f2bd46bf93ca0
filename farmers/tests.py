"""
Tests for the farmer and organic farmer registry endpoints.

SCENARIO: An applicant signs up, an admin finds them in the worklist,
reviews and edits the record, approves or rejects it, and prints or
scans the registered farmer's card.
"""
from datetime import datetime
from io import StringIO

import pytest
from django.core import mail
from django.core.management import call_command
from django.utils import timezone
from rest_framework import status

from concerns.models import Concern
from dashboards.services import RegistryReportService
from events.models import Event
from farmers.models import (
    ApplicantNotification, ApplicantStatus, Farmer, FarmworkerDetails, LotDetail, OrganicFarmer,
)
from farmers.services.scanner import parse_scanned_id
from tests.factories import registrant_payload

pytestmark = pytest.mark.django_db


def local(year, month, day, hour, minute, second=0):
    return timezone.make_aware(datetime(year, month, day, hour, minute, second))


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def farmer_signup():
    payload = registrant_payload(username='new_farmer')
    payload.update({
        'category_type': 'FARMER',
        'crop_details': {'rice': True, 'corn': False, 'other_crops': 'Eggplant'},
        'farmworker_details': {'harvesting': True},
        'house_head': {'household_head': 'Juan', 'household_members_total': 5},
        'parcels': [
            {
                'location': 'Poblacion, Tanauan',
                'total_area_ha': '2.00',
                'ownership_document_number': 'TCT-2001',
                'registered_owner': True,
                'lot': {'crop_or_commodity': 'Rice', 'size_ha': '1.50'},
            },
        ],
    })
    return payload


@pytest.fixture
def organic_signup():
    payload = registrant_payload(username='new_organic')
    payload.update({
        'has_organic_certification': True,
        'certification': 'THIRD_PARTY_CERTIFICATION',
        'commodities': [
            {'commodity_type': 'Grains', 'name': 'Black rice', 'size_ha': '0.80', 'annual_volume_kg': 900},
        ],
        'facilities': [
            {
                'equipment': 'Vermicomposting bed',
                'ownership': 'Owned',
                'model': 'VB-2',
                'quantity': '3',
                'service_area': '0.5 ha',
                'working_hours_per_day': '2',
            },
        ],
    })
    return payload


# =============================================================================
# REGISTRATION
# =============================================================================

class TestFarmerRegistration:

    def test_creates_applicant_with_nested_records(self, api_client, farmer_signup):
        response = api_client.post('/api/farmers/register/', farmer_signup, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'APPLICANTS'
        assert response.data['username'] == 'new_farmer'
        assert response.data['number_of_farms'] == 1

        farmer = Farmer.objects.get(pk=response.data['id'])
        assert farmer.user.role == 'FARMER'
        assert farmer.user.check_password('testpass123')
        assert farmer.crop_details.rice is True
        assert farmer.parcels.get().lot.crop_or_commodity == 'Rice'
        assert farmer.house_head.household_members_total == 5

    def test_only_matching_category_details_are_kept(self, api_client, farmer_signup):
        response = api_client.post('/api/farmers/register/', farmer_signup, format='json')

        farmer = Farmer.objects.get(pk=response.data['id'])
        assert not FarmworkerDetails.objects.filter(farmer=farmer).exists()

    def test_duplicate_username_is_409(self, api_client, farmer_signup, make_farmer):
        make_farmer(username='new_farmer')

        response = api_client.post('/api/farmers/register/', farmer_signup, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Username already exists'
        assert Farmer.objects.count() == 1

    def test_missing_required_field_is_400(self, api_client, farmer_signup):
        del farmer_signup['surname']

        response = api_client.post('/api/farmers/register/', farmer_signup, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'surname' in response.data


class TestOrganicFarmerRegistration:

    def test_creates_applicant_with_commodities(self, api_client, organic_signup):
        response = api_client.post('/api/organic-farmers/register/', organic_signup, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        organic = OrganicFarmer.objects.get(pk=response.data['id'])
        assert organic.status == ApplicantStatus.APPLICANTS
        assert organic.commodities.get().name == 'Black rice'
        assert organic.facilities.count() == 1

    def test_emergency_contact_number_is_required(self, api_client, organic_signup):
        organic_signup['emergency_contact_number'] = ''

        response = api_client.post('/api/organic-farmers/register/', organic_signup, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'emergency_contact_number' in response.data

    def test_username_shared_across_registrant_types(self, api_client, organic_signup, make_farmer):
        make_farmer(username='new_organic')

        response = api_client.post('/api/organic-farmers/register/', organic_signup, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT


# =============================================================================
# WORKLIST
# =============================================================================

class TestFarmerList:

    def test_requires_admin(self, client_for, farmer):
        response = client_for(farmer.user).get('/api/farmers/')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_paginated_shape(self, admin_client, make_farmer):
        for _ in range(3):
            make_farmer()

        response = admin_client.get('/api/farmers/', {'limit': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 3
        assert response.data['pages'] == 2
        assert response.data['current_page'] == 1
        assert response.data['limit'] == 2
        assert len(response.data['results']) == 2

    def test_status_filter(self, admin_client, make_farmer):
        make_farmer(status=ApplicantStatus.APPLICANTS)
        registered = make_farmer(status=ApplicantStatus.REGISTERED)

        response = admin_client.get('/api/farmers/', {'status': 'REGISTERED'})

        assert [row['id'] for row in response.data['results']] == [registered.id]

    def test_search_matches_any_name_part(self, admin_client, make_farmer):
        make_farmer(first_name='Pedro', surname='Reyes')
        target = make_farmer(first_name='Liza', middle_name='Bautista', surname='Ramos')

        response = admin_client.get('/api/farmers/', {'search': 'bautista'})

        assert [row['id'] for row in response.data['results']] == [target.id]

    def test_search_matches_whole_term_within_one_name(self, admin_client, make_farmer):
        make_farmer(first_name='Maria', middle_name='Lopez', surname='Santos')
        target = make_farmer(first_name='Jose', middle_name='', surname='San Pedro')

        split_across_names = admin_client.get('/api/farmers/', {'search': 'Maria Santos'})
        within_surname = admin_client.get('/api/farmers/', {'search': 'san pedro'})
        report = RegistryReportService(search='Maria Santos').get_farmers_report()

        assert split_across_names.data['results'] == []
        assert split_across_names.data['total'] == 0
        assert report['farmers_list'] == []
        assert [row['id'] for row in within_surname.data['results']] == [target.id]

    def test_date_range_is_inclusive_through_end_of_day(self, admin_client, make_farmer):
        before = make_farmer()
        first_moment = make_farmer()
        last_moment = make_farmer()
        after = make_farmer()
        for record, moment in [
            (before, local(2025, 3, 9, 23, 59, 59)),
            (first_moment, local(2025, 3, 10, 0, 0)),
            (last_moment, local(2025, 3, 12, 23, 59, 59)),
            (after, local(2025, 3, 13, 0, 0)),
        ]:
            Farmer.objects.filter(pk=record.pk).update(created_at=moment)

        response = admin_client.get('/api/farmers/', {'date_from': '2025-03-10', 'date_to': '2025-03-12'})

        assert response.data['total'] == 2
        assert [row['id'] for row in response.data['results']] == [last_moment.id, first_moment.id]

    def test_organic_date_to_covers_whole_day(self, admin_client, make_organic_farmer):
        late = make_organic_farmer()
        next_day = make_organic_farmer()
        OrganicFarmer.objects.filter(pk=late.pk).update(created_at=local(2025, 3, 12, 23, 59, 59))
        OrganicFarmer.objects.filter(pk=next_day.pk).update(created_at=local(2025, 3, 13, 0, 0))

        response = admin_client.get('/api/organic-farmers/', {'date_to': '2025-03-12'})

        assert [row['id'] for row in response.data['results']] == [late.id]

    def test_page_past_the_end_is_empty(self, admin_client, make_farmer):
        make_farmer()

        response = admin_client.get('/api/farmers/', {'page': 5})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []
        assert response.data['total'] == 1

    def test_organic_list_filters_certification(self, admin_client, make_organic_farmer):
        make_organic_farmer(has_organic_certification=False)
        certified = make_organic_farmer()

        response = admin_client.get('/api/organic-farmers/', {'has_organic_certification': 'true'})

        assert [row['id'] for row in response.data['results']] == [certified.id]


# =============================================================================
# DETAIL & EDIT
# =============================================================================

class TestFarmerDetail:

    def test_returns_nested_records(self, admin_client, farmer):
        response = admin_client.get(f'/api/farmers/{farmer.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['crop_details']['rice'] is True
        assert len(response.data['parcels']) == 1
        assert response.data['parcels'][0]['lot']['crop_or_commodity'] == 'Rice'

    def test_category_change_drops_old_details(self, admin_client, farmer):
        response = admin_client.patch(
            f'/api/farmers/{farmer.id}/',
            {'category_type': 'FISHERFOLK', 'fisherfolk_details': {'fish_capture': True}},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['category_type'] == 'FISHERFOLK'
        assert response.data['crop_details'] is None
        assert response.data['fisherfolk_details']['fish_capture'] is True

    def test_leaving_farmer_category_drops_lot_details(self, admin_client, farmer):
        response = admin_client.patch(
            f'/api/farmers/{farmer.id}/',
            {'category_type': 'FARMWORKER', 'farmworker_details': {'harvesting': True}},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['parcels'][0]['lot'] is None
        assert not LotDetail.objects.filter(parcel__farmer=farmer).exists()
        assert farmer.parcels.count() == 1

    def test_username_taken_by_someone_else_is_rejected(self, admin_client, farmer, make_farmer):
        other = make_farmer()

        response = admin_client.patch(
            f'/api/farmers/{farmer.id}/', {'username': other.user.username}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_id_is_404(self, admin_client):
        response = admin_client.get('/api/farmers/999999/')

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# STATUS
# =============================================================================

class TestStatusUpdate:

    def test_approval_saves_and_notifies(self, admin_client, make_farmer):
        applicant = make_farmer()

        response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'REGISTERED'
        assert response.data['message'] == 'Status updated to Registered'
        channels = sorted(n['channel'] for n in response.data['notifications'])
        assert channels == ['email', 'sms']

        applicant.refresh_from_db()
        assert applicant.status == ApplicantStatus.REGISTERED
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [applicant.email]
        assert 'Registered' in mail.outbox[0].body

    def test_rejection_stores_reason(self, admin_client, make_organic_farmer):
        applicant = make_organic_farmer()

        response = admin_client.post(
            f'/api/organic-farmers/{applicant.id}/status/',
            {'status': 'NOT_QUALIFIED', 'rejection_reason': 'Missing land title'}
        )

        assert response.status_code == status.HTTP_200_OK
        applicant.refresh_from_db()
        assert applicant.not_qualified_reason == 'Missing land title'
        assert 'Missing land title' in mail.outbox[0].body

    def test_invalid_status_is_400(self, admin_client, farmer):
        response = admin_client.post(f'/api/farmers/{farmer.id}/status/', {'status': 'APPROVED'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_no_email_on_file_skips_email(self, admin_client, make_farmer):
        applicant = make_farmer(email='')

        response = admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        assert [n['channel'] for n in response.data['notifications']] == ['sms']
        assert mail.outbox == []

    def test_notification_log(self, admin_client, make_farmer):
        applicant = make_farmer()
        admin_client.post(f'/api/farmers/{applicant.id}/status/', {'status': 'REGISTERED'})

        response = admin_client.get(f'/api/farmers/{applicant.id}/notifications/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 2
        assert ApplicantNotification.objects.filter(farmer=applicant, status='sent').count() == 2


# =============================================================================
# SELF-SERVICE
# =============================================================================

class TestMyProfile:

    def test_farmer_sees_own_record(self, client_for, farmer):
        response = client_for(farmer.user).get('/api/farmers/profile/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == farmer.id

    def test_organic_farmer_cannot_use_farmer_profile(self, client_for, organic_farmer):
        response = client_for(organic_farmer.user).get('/api/farmers/profile/')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_organic_profile(self, client_for, organic_farmer):
        response = client_for(organic_farmer.user).get('/api/organic-farmers/profile/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['commodities'][0]['name'] == 'Lettuce'


class TestLatest:

    def test_newest_record(self, admin_client, make_farmer):
        make_farmer()
        newest = make_farmer()

        response = admin_client.get('/api/farmers/latest/')

        assert response.data['id'] == newest.id

    def test_pinned_id(self, admin_client, make_farmer):
        first = make_farmer()
        make_farmer()

        response = admin_client.get('/api/farmers/latest/', {'id': first.id})

        assert response.data['id'] == first.id

    def test_nothing_registered_is_404(self, admin_client):
        response = admin_client.get('/api/farmers/latest/')

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# CARDS, QR & SCANNER
# =============================================================================

class TestScanner:

    def test_registered_farmer_found(self, admin_client, farmer):
        response = admin_client.get('/api/scanner/lookup/', {'id': str(farmer.id), 'type': 'farmer'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['found'] is True
        assert response.data['farmer']['id'] == farmer.id
        assert response.data['farmer']['category_type'] == 'FARMER'
        assert response.data['farmer']['age'] >= 18

    def test_trailing_text_after_id_is_ignored(self, admin_client, organic_farmer):
        response = admin_client.get(
            '/api/scanner/lookup/', {'id': f'{organic_farmer.id}-card', 'type': 'organic_farmer'}
        )

        assert response.data['farmer']['id'] == organic_farmer.id

    def test_applicant_not_found(self, admin_client, make_farmer):
        applicant = make_farmer()

        response = admin_client.get('/api/scanner/lookup/', {'id': str(applicant.id)})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['found'] is False

    def test_unknown_type_is_400(self, admin_client):
        response = admin_client.get('/api/scanner/lookup/', {'id': '1', 'type': 'fisher'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize('raw, expected', [
        ('42', 42),
        ('  7abc', 7),
        ('abc', None),
        ('', None),
    ])
    def test_parse_scanned_id(self, raw, expected):
        assert parse_scanned_id(raw) == expected


class TestPrintAndQR:

    def test_qr_code_is_png_data_url(self, admin_client, farmer):
        response = admin_client.get(f'/api/farmers/{farmer.id}/qr-code/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['qr_code'].startswith('data:image/png;base64,')

    def test_profile_pdf_download(self, admin_client, farmer):
        response = admin_client.get(f'/api/farmers/{farmer.id}/print/')

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'application/pdf'
        assert response.content.startswith(b'%PDF')

    def test_organic_profile_pdf_download(self, admin_client, organic_farmer):
        response = admin_client.get(f'/api/organic-farmers/{organic_farmer.id}/print/')

        assert response.status_code == status.HTTP_200_OK
        assert 'attachment' in response['Content-Disposition']


class TestSMSGatewayCheck:

    def test_simulated_send(self, admin_client):
        response = admin_client.post(
            '/api/farmers/test-sms/', {'phone_number': '09171234567', 'message': 'Hello'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['simulated'] is True

    def test_non_local_number_is_400(self, admin_client):
        response = admin_client.post(
            '/api/farmers/test-sms/', {'phone_number': '+639171234567', 'message': 'Hello'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSeedRegistryCommand:

    def test_seeds_and_clears(self):
        out = StringIO()
        call_command('seed_registry', '--farmers', '3', '--organic-farmers', '2', '--events', '4', stdout=out)

        assert Farmer.objects.filter(user__username__startswith='seed_').count() == 3
        assert OrganicFarmer.objects.count() == 2
        assert Event.objects.count() == 4
        assert Concern.objects.count() == 5
        assert 'Seeded 3 farmers' in out.getvalue()

        call_command('seed_registry', '--farmers', '1', '--organic-farmers', '0', '--events', '0', '--clear',
                     stdout=StringIO())

        assert Farmer.objects.count() == 1
        assert OrganicFarmer.objects.count() == 0
        assert Event.objects.count() == 0
