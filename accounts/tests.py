"""
Tests for registry logins.

SCENARIO: Each role has its own login endpoint. Regular farmers can only
log in after approval; organic farmers can log in while still applying.
Every rejection reads the same so usernames are not leaked.
"""
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command
from rest_framework import status

from farmers.models import ApplicantStatus

User = get_user_model()

pytestmark = pytest.mark.django_db


ADMIN_LOGIN = '/api/auth/admin/login/'
FARMER_LOGIN = '/api/auth/farmer/login/'
ORGANIC_LOGIN = '/api/auth/organic-farmer/login/'


class TestAdminLogin:

    def test_valid_credentials_return_tokens(self, api_client, admin_user):
        response = api_client.post(ADMIN_LOGIN, {'username': 'registry_admin', 'password': 'adminpass123'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['user']['role'] == 'ADMIN'
        assert response.data['tokens']['access']
        assert response.data['tokens']['refresh']

        admin_user.refresh_from_db()
        assert admin_user.last_login_at is not None

    def test_wrong_password_is_401(self, api_client, admin_user):
        response = api_client.post(ADMIN_LOGIN, {'username': 'registry_admin', 'password': 'nope'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid credentials'

    def test_email_is_not_accepted_for_admins(self, api_client, admin_user):
        response = api_client.post(ADMIN_LOGIN, {'username': 'admin@example.com', 'password': 'adminpass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_farmer_cannot_use_admin_login(self, api_client, make_farmer):
        farmer = make_farmer(status=ApplicantStatus.REGISTERED)

        response = api_client.post(ADMIN_LOGIN, {'username': farmer.user.username, 'password': 'testpass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestFarmerLogin:

    def test_registered_farmer_logs_in(self, api_client, make_farmer):
        farmer = make_farmer(status=ApplicantStatus.REGISTERED)

        response = api_client.post(FARMER_LOGIN, {'username': farmer.user.username, 'password': 'testpass123'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['registrant_id'] == farmer.id

    def test_login_by_email(self, api_client, make_farmer):
        farmer = make_farmer(status=ApplicantStatus.REGISTERED)

        response = api_client.post(FARMER_LOGIN, {'username': farmer.user.email.upper(), 'password': 'testpass123'})

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.parametrize('applicant_status', [
        ApplicantStatus.APPLICANTS,
        ApplicantStatus.NOT_QUALIFIED,
        ApplicantStatus.ARCHIVED,
    ])
    def test_unapproved_farmer_is_rejected(self, api_client, make_farmer, applicant_status):
        farmer = make_farmer(status=applicant_status)

        response = api_client.post(FARMER_LOGIN, {'username': farmer.user.username, 'password': 'testpass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid credentials'

    def test_unknown_user_reads_the_same(self, api_client):
        response = api_client.post(FARMER_LOGIN, {'username': 'ghost', 'password': 'testpass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid credentials'


class TestOrganicFarmerLogin:

    def test_applicant_can_log_in(self, api_client, make_organic_farmer):
        organic = make_organic_farmer(status=ApplicantStatus.APPLICANTS)

        response = api_client.post(ORGANIC_LOGIN, {'username': organic.user.username, 'password': 'testpass123'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['role'] == 'ORGANIC_FARMER'

    def test_regular_farmer_cannot_use_organic_login(self, api_client, farmer):
        response = api_client.post(ORGANIC_LOGIN, {'username': farmer.user.username, 'password': 'testpass123'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSession:

    def test_me_requires_authentication(self, api_client):
        response = api_client.get('/api/auth/me/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_summary(self, client_for, farmer):
        response = client_for(farmer.user).get('/api/auth/me/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == farmer.user.username
        assert response.data['registrant_id'] == farmer.id

    def test_logout_blacklists_refresh_token(self, api_client, admin_user):
        login = api_client.post(ADMIN_LOGIN, {'username': 'registry_admin', 'password': 'adminpass123'})
        tokens = login.data['tokens']

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = api_client.post('/api/auth/logout/', {'refresh_token': tokens['refresh']})
        assert response.status_code == status.HTTP_200_OK

        api_client.credentials()
        refresh = api_client.post('/api/auth/token/refresh/', {'refresh': tokens['refresh']})
        assert refresh.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_without_token_is_400(self, client_for, admin_user):
        response = client_for(admin_user).post('/api/auth/logout/', {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestCreateRegistryAdminCommand:

    def test_creates_admin(self):
        call_command('create_registry_admin', '--username', 'boss', '--password', 'secret123', stdout=StringIO())

        user = User.objects.get(username='boss')
        assert user.role == 'ADMIN'
        assert user.is_staff is True
        assert user.check_password('secret123')

    def test_resets_existing_admin_password(self, admin_user):
        call_command(
            'create_registry_admin', '--username', 'registry_admin', '--password', 'newpass123', stdout=StringIO()
        )

        admin_user.refresh_from_db()
        assert admin_user.check_password('newpass123')

    def test_refuses_to_promote_a_farmer(self, farmer):
        with pytest.raises(CommandError):
            call_command(
                'create_registry_admin', '--username', farmer.user.username, '--password', 'secret123',
                stdout=StringIO()
            )

    def test_short_password_is_rejected(self):
        with pytest.raises(CommandError):
            call_command('create_registry_admin', '--password', '123', stdout=StringIO())
