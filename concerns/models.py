"""
Concern Models

Database schema for farmer support tickets and their message threads.
"""
from django.conf import settings
from django.db import models
from django.db.models import Q

from farmers.models import Farmer, OrganicFarmer


class Concern(models.Model):
    """
    A support ticket raised by exactly one farmer or organic farmer.
    """

    class Status(models.TextChoices):
        OPEN = 'OPEN', 'Open'
        IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
        RESOLVED = 'RESOLVED', 'Resolved'
        CLOSED = 'CLOSED', 'Closed'

    farmer = models.ForeignKey(
        Farmer,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='concerns'
    )
    organic_farmer = models.ForeignKey(
        OrganicFarmer,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='concerns'
    )

    title = models.CharField(max_length=200)
    description = models.TextField()
    image = models.TextField(blank=True, help_text="Optional inline data URL")

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN,
        db_index=True
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(
        auto_now=True,
        db_index=True,
        help_text="Bumped whenever a message is added"
    )

    class Meta:
        db_table = 'farmer_concerns'
        ordering = ['-updated_at']
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(farmer__isnull=False, organic_farmer__isnull=True) |
                    Q(farmer__isnull=True, organic_farmer__isnull=False)
                ),
                name='concern_has_exactly_one_owner',
            ),
        ]
        indexes = [
            models.Index(fields=['status', 'updated_at'], name='concern_status_updated_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def owner(self):
        return self.farmer or self.organic_farmer

    @property
    def owner_type(self):
        return 'farmer' if self.farmer_id else 'organic_farmer'


class ConcernMessage(models.Model):
    """One message in a concern thread."""

    class SenderType(models.TextChoices):
        ADMIN = 'ADMIN', 'Administrator'
        FARMER = 'FARMER', 'Farmer'
        ORGANIC_FARMER = 'ORGANIC_FARMER', 'Organic Farmer'

    concern = models.ForeignKey(Concern, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='concern_messages'
    )
    sender_type = models.CharField(max_length=20, choices=SenderType.choices, db_index=True)
    content = models.TextField()
    image = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'concern_messages'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.get_sender_type_display()} on #{self.concern_id}"
