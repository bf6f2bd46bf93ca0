"""
Allocation Models
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from farmers.models import Farmer, OrganicFarmer


class Allocation(models.Model):
    """
    An amount granted to farmers, pending until an administrator approves it.
    """

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    allocation_type = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        help_text="Free-text kind of assistance, e.g. Seeds, Fertilizer, Cash"
    )
    approved = models.BooleanField(default=False, db_index=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_allocations'
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'allocations'
        ordering = ['-created_at']

    def __str__(self):
        label = self.allocation_type or 'Allocation'
        return f"{label} #{self.pk}: {self.amount}"


class AllocationRecipient(models.Model):
    """Links an allocation to exactly one farmer or organic farmer."""

    allocation = models.ForeignKey(Allocation, on_delete=models.CASCADE, related_name='recipients')
    farmer = models.ForeignKey(
        Farmer,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='allocations'
    )
    organic_farmer = models.ForeignKey(
        OrganicFarmer,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='allocations'
    )

    class Meta:
        db_table = 'allocation_recipients'
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(farmer__isnull=False, organic_farmer__isnull=True) |
                    Q(farmer__isnull=True, organic_farmer__isnull=False)
                ),
                name='allocation_recipient_has_exactly_one_owner',
            ),
        ]

    def __str__(self):
        return f"{self.registrant} <- allocation #{self.allocation_id}"

    @property
    def registrant(self):
        return self.farmer or self.organic_farmer

    @property
    def registrant_type(self):
        return 'FARMER' if self.farmer_id else 'ORGANIC_FARMER'
