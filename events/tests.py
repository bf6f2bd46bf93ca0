"""
Tests for events and the event calendar.

SCENARIO: Admins post events aimed at regular farmers, organic farmers
or both. Each login browses only what is aimed at it, by month, by day
or as a calendar.
"""
from datetime import date, datetime, timedelta

import pytest
from django.utils import timezone
from rest_framework import status

from events.models import Event
from events.services import EventService, month_bounds

pytestmark = pytest.mark.django_db


def local(year, month, day, hour=9, minute=0):
    return timezone.make_aware(datetime(year, month, day, hour, minute))


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def make_event(db):
    def _make_event(event_date, title='Seed Distribution', **kwargs):
        return Event.objects.create(title=title, location='Municipal Hall', event_date=event_date, **kwargs)
    return _make_event


# =============================================================================
# MANAGEMENT
# =============================================================================

class TestEventManagement:

    def test_admin_creates_event(self, admin_client, admin_user):
        response = admin_client.post('/api/events/', {
            'title': 'Soil Testing Caravan',
            'location': 'Barangay Hall',
            'event_date': '2025-03-10T08:00:00+08:00',
            'for_organic_farmers': False,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        event = Event.objects.get(pk=response.data['id'])
        assert event.created_by == admin_user
        assert event.for_farmers is True
        assert event.for_organic_farmers is False

    def test_registrant_cannot_create(self, client_for, farmer):
        response = client_for(farmer.user).post('/api/events/', {
            'title': 'x', 'location': 'y', 'event_date': '2025-03-10T08:00:00+08:00',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_edits_and_deletes(self, admin_client, make_event):
        event = make_event(local(2025, 3, 10))

        patched = admin_client.patch(f'/api/events/{event.id}/', {'location': 'Covered Court'}, format='json')
        deleted = admin_client.delete(f'/api/events/{event.id}/')

        assert patched.data['location'] == 'Covered Court'
        assert deleted.status_code == status.HTTP_204_NO_CONTENT
        assert not Event.objects.filter(pk=event.pk).exists()

    def test_list_is_paginated_newest_first(self, admin_client, make_event):
        early = make_event(local(2025, 1, 5))
        late = make_event(local(2025, 6, 5))

        response = admin_client.get('/api/events/')

        assert response.data['total'] == 2
        assert [row['id'] for row in response.data['results']] == [late.id, early.id]


# =============================================================================
# VISIBILITY
# =============================================================================

class TestVisibility:

    def test_each_role_sees_its_events(self, client_for, admin_client, farmer, organic_farmer, make_event):
        both = make_event(local(2025, 3, 1))
        farmers_only = make_event(local(2025, 3, 2), for_organic_farmers=False)
        organic_only = make_event(local(2025, 3, 3), for_farmers=False)

        def ids(client):
            return {row['id'] for row in client.get('/api/events/').data['results']}

        assert ids(client_for(farmer.user)) == {both.id, farmers_only.id}
        assert ids(client_for(organic_farmer.user)) == {both.id, organic_only.id}
        assert ids(admin_client) == {both.id, farmers_only.id, organic_only.id}

    def test_hidden_event_detail_is_404(self, client_for, organic_farmer, make_event):
        event = make_event(local(2025, 3, 2), for_organic_farmers=False)

        response = client_for(organic_farmer.user).get(f'/api/events/{event.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# CALENDAR QUERIES
# =============================================================================

class TestByMonth:

    def test_local_month_boundaries(self, admin_client, make_event):
        last_of_march = make_event(local(2025, 3, 31, 23, 30))
        make_event(local(2025, 4, 1, 0, 0))
        first_of_march = make_event(local(2025, 3, 1, 0, 0))

        response = admin_client.get('/api/events/by-month/', {'month': 3, 'year': 2025})

        assert [row['id'] for row in response.data] == [first_of_march.id, last_of_march.id]

    def test_december_rolls_into_next_year(self):
        start, end = month_bounds(12, 2024)

        assert timezone.localtime(start).date() == date(2024, 12, 1)
        assert timezone.localtime(end).date() == date(2025, 1, 1)

    @pytest.mark.parametrize('params', [
        {'month': 13, 'year': 2025},
        {'month': 0, 'year': 2025},
        {'month': 3},
    ])
    def test_bad_month_query_is_400(self, admin_client, params):
        response = admin_client.get('/api/events/by-month/', params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_month_bounds_rejects_bad_month(self):
        with pytest.raises(ValueError):
            month_bounds(13, 2025)


class TestByDate:

    def test_whole_local_day(self, admin_client, make_event):
        morning = make_event(local(2025, 3, 10, 0, 0))
        night = make_event(local(2025, 3, 10, 23, 59))
        make_event(local(2025, 3, 11, 0, 0))

        response = admin_client.get('/api/events/by-date/', {'date': '2025-03-10'})

        assert [row['id'] for row in response.data] == [morning.id, night.id]

    def test_bad_date_is_400(self, admin_client):
        response = admin_client.get('/api/events/by-date/', {'date': '10/03/2025'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestCalendar:

    def test_grouped_by_local_day(self, admin_client, make_event):
        first = make_event(local(2025, 3, 5, 8))
        second = make_event(local(2025, 3, 5, 14))
        third = make_event(local(2025, 3, 20))

        response = admin_client.get('/api/events/calendar/', {'month': 3, 'year': 2025})

        assert list(response.data.keys()) == ['2025-03-05', '2025-03-20']
        assert [e['id'] for e in response.data['2025-03-05']] == [first.id, second.id]
        assert response.data['2025-03-20'][0]['id'] == third.id

    def test_service_respects_visibility(self, organic_farmer, make_event):
        make_event(local(2025, 3, 5), for_organic_farmers=False)

        assert EventService.calendar(organic_farmer.user, 3, 2025) == {}


class TestUpcoming:

    def test_soonest_first_with_default_limit(self, admin_client, make_event):
        now = timezone.now()
        make_event(now - timedelta(days=1))
        future = [make_event(now + timedelta(days=d)) for d in range(7, 0, -1)]

        response = admin_client.get('/api/events/upcoming/')

        assert len(response.data) == 5
        assert [row['id'] for row in response.data] == [e.id for e in reversed(future)][:5]

    def test_custom_limit(self, admin_client, make_event):
        for d in range(1, 4):
            make_event(timezone.now() + timedelta(days=d))

        response = admin_client.get('/api/events/upcoming/', {'limit': 2})

        assert len(response.data) == 2

    def test_limit_over_cap_is_400(self, admin_client):
        response = admin_client.get('/api/events/upcoming/', {'limit': 500})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
