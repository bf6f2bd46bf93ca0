from django.contrib.auth.models import AbstractUser
from django.db import models
import uuid


class User(AbstractUser):
    """
    Custom User model extending Django's AbstractUser.
    Every login to the registry is one of three roles: an administrator
    reviewing applicants, a regular farmer, or an organic farmer.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class UserRole(models.TextChoices):
        ADMIN = 'ADMIN', 'Administrator'
        FARMER = 'FARMER', 'Farmer'
        ORGANIC_FARMER = 'ORGANIC_FARMER', 'Organic Farmer'

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.FARMER,
        db_index=True,
        help_text="User's role in the registry"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        indexes = [
            models.Index(fields=['role', 'is_active'], name='users_role_active_idx'),
        ]

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def is_registry_admin(self):
        return self.role == self.UserRole.ADMIN

    @property
    def registrant(self):
        """The Farmer or OrganicFarmer record owned by this login, if any."""
        if self.role == self.UserRole.FARMER:
            return getattr(self, 'farmer_profile', None)
        if self.role == self.UserRole.ORGANIC_FARMER:
            return getattr(self, 'organic_farmer_profile', None)
        return None
