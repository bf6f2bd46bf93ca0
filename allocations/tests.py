"""
Tests for farmer allocations.

SCENARIO: An admin looks up a farmer, grants them an allocation of a
given kind and amount, then approves it. Each allocation has exactly
one recipient.
"""
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from rest_framework import status

from allocations.models import Allocation, AllocationRecipient
from allocations.services import AllocationService

pytestmark = pytest.mark.django_db


class TestCreateAllocation:

    def test_grant_to_farmer(self, admin_client, farmer):
        response = admin_client.post('/api/allocations/', {
            'amount': '1500.00', 'allocation_type': 'Fertilizer', 'farmer_id': farmer.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['amount'] == '1500.00'
        assert response.data['approved'] is False
        assert response.data['recipients'] == [{
            'type': 'FARMER',
            'registrant_id': farmer.id,
            'name': farmer.full_name,
            'municipality_city': farmer.municipality_city,
            'status': farmer.status,
            'farmer_image': farmer.farmer_image,
        }]

    def test_grant_to_organic_farmer(self, admin_client, organic_farmer):
        response = admin_client.post('/api/allocations/', {
            'amount': '800', 'organic_farmer_id': organic_farmer.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['recipients'][0]['type'] == 'ORGANIC_FARMER'
        assert organic_farmer.allocations.count() == 1

    def test_both_recipients_is_400(self, admin_client, farmer, organic_farmer):
        response = admin_client.post('/api/allocations/', {
            'amount': '100', 'farmer_id': farmer.id, 'organic_farmer_id': organic_farmer.id,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Allocation.objects.count() == 0

    def test_no_recipient_is_400(self, admin_client):
        response = admin_client.post('/api/allocations/', {'amount': '100'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_farmer_is_400(self, admin_client):
        response = admin_client.post('/api/allocations/', {'amount': '100', 'farmer_id': 999999}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'farmer_id' in response.data

    def test_non_positive_amount_is_400(self, admin_client, farmer):
        response = admin_client.post('/api/allocations/', {'amount': '0', 'farmer_id': farmer.id}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_registrant_is_forbidden(self, client_for, farmer):
        response = client_for(farmer.user).post(
            '/api/allocations/', {'amount': '100', 'farmer_id': farmer.id}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestAllocationService:

    def test_requires_exactly_one_recipient(self, farmer, organic_farmer):
        with pytest.raises(ValueError):
            AllocationService.create_allocation(Decimal('10'), farmer=farmer, organic_farmer=organic_farmer)
        with pytest.raises(ValueError):
            AllocationService.create_allocation(Decimal('10'))

    def test_recipient_row_needs_exactly_one_owner(self, farmer, organic_farmer):
        allocation = Allocation.objects.create(amount=Decimal('10'))

        with pytest.raises(IntegrityError), transaction.atomic():
            AllocationRecipient.objects.create(allocation=allocation, farmer=farmer, organic_farmer=organic_farmer)

    def test_approve_is_idempotent(self, farmer, admin_user):
        allocation = AllocationService.create_allocation(Decimal('10'), farmer=farmer)

        AllocationService.approve(allocation, approved_by=admin_user)
        first_approved_at = allocation.approved_at
        AllocationService.approve(allocation, approved_by=admin_user)

        allocation.refresh_from_db()
        assert allocation.approved is True
        assert allocation.approved_at == first_approved_at
        assert allocation.approved_by == admin_user


class TestAllocationList:

    def test_filters_and_search(self, admin_client, farmer, make_farmer):
        other = make_farmer(first_name='Rosa', surname='Navarro')
        AllocationService.create_allocation(Decimal('100'), 'Seeds', farmer=farmer)
        target = AllocationService.create_allocation(Decimal('200'), 'Seeds', farmer=other)
        AllocationService.create_allocation(Decimal('300'), 'Cash', farmer=other)

        response = admin_client.get('/api/allocations/', {'allocation_type': 'Seeds', 'search': 'navarro'})

        assert [row['id'] for row in response.data['results']] == [target.id]

    def test_approve_endpoint(self, admin_client, farmer):
        allocation = AllocationService.create_allocation(Decimal('100'), 'Seeds', farmer=farmer)

        response = admin_client.post(f'/api/allocations/{allocation.id}/approve/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['approved'] is True
        assert response.data['approved_at'] is not None

        listing = admin_client.get('/api/allocations/', {'approved': 'true'})
        assert listing.data['total'] == 1


class TestRecipientLookup:

    def test_finds_applicant_too(self, admin_client, make_farmer):
        applicant = make_farmer()

        response = admin_client.get('/api/allocations/recipient/', {'type': 'farmer', 'id': str(applicant.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'APPLICANTS'
        assert response.data['full_name'] == applicant.full_name

    def test_unknown_id_is_404(self, admin_client):
        response = admin_client.get('/api/allocations/recipient/', {'type': 'organic_farmer', 'id': '999999'})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Farmer not found'

    def test_unknown_type_is_400(self, admin_client):
        response = admin_client.get('/api/allocations/recipient/', {'type': 'coop', 'id': '1'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
