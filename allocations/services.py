"""
Allocation Service
"""
import logging

from django.db import transaction
from django.utils import timezone

from .models import Allocation, AllocationRecipient

logger = logging.getLogger(__name__)


class AllocationService:

    @staticmethod
    @transaction.atomic
    def create_allocation(amount, allocation_type='', farmer=None, organic_farmer=None):
        """
        Grant ``amount`` to one farmer or organic farmer.

        Exactly one of ``farmer`` / ``organic_farmer`` must be given. The
        allocation starts unapproved.
        """
        if (farmer is None) == (organic_farmer is None):
            raise ValueError("Either a farmer or an organic farmer must be set, but not both.")

        allocation = Allocation.objects.create(
            amount=amount,
            allocation_type=allocation_type or '',
            approved=False,
        )
        AllocationRecipient.objects.create(
            allocation=allocation,
            farmer=farmer,
            organic_farmer=organic_farmer,
        )

        logger.info(f"Allocation #{allocation.pk} of {amount} created for {farmer or organic_farmer}")
        return allocation

    @staticmethod
    def approve(allocation, approved_by=None):
        if allocation.approved:
            return allocation

        allocation.approved = True
        allocation.approved_at = timezone.now()
        allocation.approved_by = approved_by
        allocation.save(update_fields=['approved', 'approved_at', 'approved_by'])

        logger.info(
            f"Allocation #{allocation.pk} approved by {getattr(approved_by, 'username', 'system')}"
        )
        return allocation
