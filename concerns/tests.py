"""
Tests for farmer concerns and their message threads.

SCENARIO: A farmer raises a concern, an admin replies and moves it
along. Each registrant only ever sees their own concerns.
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework import status

from concerns.models import Concern, ConcernMessage
from concerns.services import ConcernService

pytestmark = pytest.mark.django_db


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def concern(farmer):
    return ConcernService.create_concern(farmer.user, 'Irrigation schedule', 'Water arrives late.')


@pytest.fixture
def farmer_client(client_for, farmer):
    return client_for(farmer.user)


# =============================================================================
# RAISING CONCERNS
# =============================================================================

class TestCreateConcern:

    def test_farmer_raises_concern(self, farmer_client, farmer):
        response = farmer_client.post('/api/concerns/', {
            'title': 'Delayed subsidy',
            'description': 'Still waiting for the fertilizer voucher.',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'OPEN'
        assert response.data['type'] == 'farmer'
        assert response.data['owner']['id'] == farmer.id
        assert response.data['message_count'] == 0

    def test_organic_farmer_raises_concern(self, client_for, organic_farmer):
        response = client_for(organic_farmer.user).post('/api/concerns/', {
            'title': 'Certification renewal',
            'description': 'When is the next PGS visit?',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert Concern.objects.get(pk=response.data['id']).organic_farmer == organic_farmer

    def test_markup_is_stripped(self, farmer_client):
        response = farmer_client.post('/api/concerns/', {
            'title': '<b>Pests</b>',
            'description': '<script>x</script>Armyworms in the corn field',
        })

        assert response.data['title'] == 'Pests'
        assert '<' not in response.data['description']

    def test_admin_cannot_raise_concern(self, admin_client):
        response = admin_client.post('/api/concerns/', {'title': 'x', 'description': 'y'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Only farmers can perform this action.'

    def test_status_cannot_be_set_on_create(self, farmer_client):
        response = farmer_client.post('/api/concerns/', {
            'title': 'Pests', 'description': 'Armyworms', 'status': 'RESOLVED',
        })

        assert response.data['status'] == 'OPEN'

    def test_anonymous_is_401(self, api_client):
        response = api_client.get('/api/concerns/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# LISTING
# =============================================================================

class TestConcernList:

    def test_registrant_sees_only_own(self, farmer_client, concern, make_farmer):
        other = make_farmer()
        ConcernService.create_concern(other.user, 'Other', 'Not mine')

        response = farmer_client.get('/api/concerns/')

        assert [row['id'] for row in response.data['results']] == [concern.id]

    def test_admin_sees_all(self, admin_client, concern, organic_farmer):
        ConcernService.create_concern(organic_farmer.user, 'Organic', 'Question')

        response = admin_client.get('/api/concerns/')

        assert response.data['total'] == 2

    def test_most_recently_active_first(self, admin_client, farmer, admin_user):
        older = ConcernService.create_concern(farmer.user, 'First', 'One')
        newer = ConcernService.create_concern(farmer.user, 'Second', 'Two')
        ConcernService.send_message(admin_user, older, 'Reply bumps this one')

        response = admin_client.get('/api/concerns/')

        assert [row['id'] for row in response.data['results']] == [older.id, newer.id]

    def test_status_and_search_filters(self, admin_client, farmer):
        ConcernService.create_concern(farmer.user, 'Irrigation', 'Canal is dry')
        target = ConcernService.create_concern(farmer.user, 'Pests', 'Armyworms')
        ConcernService.update_status(target, Concern.Status.IN_PROGRESS)

        response = admin_client.get('/api/concerns/', {'status': 'IN_PROGRESS', 'search': 'army'})

        assert [row['id'] for row in response.data['results']] == [target.id]

    def test_search_uses_whole_term(self, admin_client, farmer):
        target = ConcernService.create_concern(farmer.user, 'Irrigation', 'Canal is dry')
        ConcernService.create_concern(farmer.user, 'Canal repair', 'Gate is dry and stuck')

        phrase = admin_client.get('/api/concerns/', {'search': 'canal is dry'})
        scattered = admin_client.get('/api/concerns/', {'search': 'canal stuck'})

        assert [row['id'] for row in phrase.data['results']] == [target.id]
        assert scattered.data['results'] == []

    def test_message_count_is_annotated(self, admin_client, concern, farmer, admin_user):
        ConcernService.send_message(farmer.user, concern, 'Hello')
        ConcernService.send_message(admin_user, concern, 'Hi')

        response = admin_client.get('/api/concerns/')

        assert response.data['results'][0]['message_count'] == 2

    def test_date_range_filter(self, admin_client, concern, farmer):
        old = ConcernService.create_concern(farmer.user, 'Old', 'From last month')
        Concern.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=40))
        today = timezone.localdate().isoformat()

        response = admin_client.get('/api/concerns/', {'date_from': today, 'date_to': today})

        assert [row['id'] for row in response.data['results']] == [concern.id]


# =============================================================================
# ACCESS & THREADS
# =============================================================================

class TestConcernAccess:

    def test_owner_can_view(self, farmer_client, concern):
        response = farmer_client.get(f'/api/concerns/{concern.id}/')

        assert response.status_code == status.HTTP_200_OK

    def test_other_registrant_is_403(self, client_for, concern, make_farmer):
        intruder = make_farmer()

        detail = client_for(intruder.user).get(f'/api/concerns/{concern.id}/')
        thread = client_for(intruder.user).get(f'/api/concerns/{concern.id}/messages/')

        assert detail.status_code == status.HTTP_403_FORBIDDEN
        assert thread.status_code == status.HTTP_403_FORBIDDEN

    def test_missing_concern_is_404(self, admin_client):
        response = admin_client.get('/api/concerns/424242/')

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestConcernMessages:

    def test_thread_round_trip(self, farmer_client, admin_client, concern):
        farmer_client.post(f'/api/concerns/{concern.id}/messages/', {'content': 'Any update?'})
        reply = admin_client.post(f'/api/concerns/{concern.id}/messages/', {'content': 'Scheduled Friday.'})

        assert reply.status_code == status.HTTP_201_CREATED
        assert reply.data['sender_type'] == 'ADMIN'

        response = farmer_client.get(f'/api/concerns/{concern.id}/messages/')

        assert response.data['concern']['id'] == concern.id
        assert [m['content'] for m in response.data['messages']] == ['Any update?', 'Scheduled Friday.']
        assert response.data['messages'][0]['sender_name'] == 'Juan Santos Dela Cruz'

    def test_blank_message_is_400(self, farmer_client, concern):
        response = farmer_client.post(f'/api/concerns/{concern.id}/messages/', {'content': '<p> </p>'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_message_bumps_updated_at(self, farmer_client, concern):
        Concern.objects.filter(pk=concern.pk).update(updated_at=timezone.now() - timedelta(days=1))

        farmer_client.post(f'/api/concerns/{concern.id}/messages/', {'content': 'Ping'})

        concern.refresh_from_db()
        assert concern.updated_at > timezone.now() - timedelta(minutes=1)
        assert ConcernMessage.objects.get(concern=concern).sender_type == 'FARMER'


class TestConcernStatus:

    def test_admin_updates_status(self, admin_client, concern):
        response = admin_client.patch(f'/api/concerns/{concern.id}/status/', {'status': 'RESOLVED'})

        assert response.status_code == status.HTTP_200_OK
        concern.refresh_from_db()
        assert concern.status == Concern.Status.RESOLVED

    def test_registrant_cannot_update_status(self, farmer_client, concern):
        response = farmer_client.patch(f'/api/concerns/{concern.id}/status/', {'status': 'CLOSED'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_status_is_400(self, admin_client, concern):
        response = admin_client.patch(f'/api/concerns/{concern.id}/status/', {'status': 'DONE'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
