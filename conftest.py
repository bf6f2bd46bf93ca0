"""
Shared pytest fixtures for the registry apps.
"""
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from farmers.models import ApplicantStatus, Farmer
from farmers.services.registration import RegistrationService
from tests.factories import registrant_payload, service_data

User = get_user_model()


# =============================================================================
# CLIENTS & USERS
# =============================================================================

@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='registry_admin',
        password='adminpass123',
        email='admin@example.com',
        role=User.UserRole.ADMIN,
    )


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def client_for():
    """Build an authenticated client for any user."""
    def _client_for(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client_for


# =============================================================================
# REGISTRANTS
# =============================================================================

@pytest.fixture
def make_farmer(db):
    """Register a regular farmer through the service layer."""
    def _make_farmer(status=ApplicantStatus.APPLICANTS, category_type=Farmer.CategoryType.FARMER, **overrides):
        data = service_data(registrant_payload(**overrides))
        data.update({
            'category_type': category_type,
            'status': status,
            'crop_details': {'rice': True, 'other_crops': 'Eggplant'},
            'house_head': {'household_head': data['first_name'], 'household_members_total': 4},
            'parcels': [{
                'location': 'Poblacion, Tanauan',
                'total_area_ha': Decimal('1.50'),
                'ownership_document_number': 'TCT-1001',
                'registered_owner': True,
                'lot': {'crop_or_commodity': 'Rice', 'size_ha': Decimal('1.00')},
            }],
        })
        return RegistrationService.register_farmer(data)
    return _make_farmer


@pytest.fixture
def make_organic_farmer(db):
    """Register an organic farmer through the service layer."""
    def _make_organic_farmer(status=ApplicantStatus.APPLICANTS, has_organic_certification=True, **overrides):
        data = service_data(registrant_payload(**overrides))
        data.update({
            'status': status,
            'has_organic_certification': has_organic_certification,
            'certification': 'PARTICIPATORY_GUARANTEE_SYSTEM' if has_organic_certification else '',
            'commodities': [
                {'commodity_type': 'LowlandVegetables', 'name': 'Lettuce', 'size_ha': Decimal('0.50')},
            ],
        })
        return RegistrationService.register_organic_farmer(data)
    return _make_organic_farmer


@pytest.fixture
def farmer(make_farmer):
    return make_farmer(status=ApplicantStatus.REGISTERED)


@pytest.fixture
def organic_farmer(make_organic_farmer):
    return make_organic_farmer(status=ApplicantStatus.REGISTERED)
