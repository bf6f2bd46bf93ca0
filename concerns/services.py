"""
Concern Service

Ownership rules and message threading for farmer concerns.
"""
import logging

from django.db.models import Count, Q
from django.utils import timezone

from .models import Concern, ConcernMessage

logger = logging.getLogger(__name__)


class ConcernService:
    """Service for reading and replying to concerns."""

    @staticmethod
    def owner_filter(user):
        """Queryset filter selecting the concerns raised by ``user``."""
        if user.role == 'FARMER':
            return Q(farmer__user=user)
        if user.role == 'ORGANIC_FARMER':
            return Q(organic_farmer__user=user)
        return Q(pk__in=[])

    @staticmethod
    def visible_concerns(user):
        """Admins see every concern; registrants only their own."""
        queryset = Concern.objects.select_related(
            'farmer', 'organic_farmer'
        ).annotate(message_count=Count('messages'))

        if user.is_registry_admin:
            return queryset
        return queryset.filter(ConcernService.owner_filter(user))

    @staticmethod
    def can_access(user, concern):
        if user.is_registry_admin:
            return True
        registrant = user.registrant
        if registrant is None:
            return False
        if user.role == 'FARMER':
            return concern.farmer_id == registrant.pk
        return concern.organic_farmer_id == registrant.pk

    @staticmethod
    def create_concern(user, title, description, image=''):
        registrant = user.registrant
        owner_field = 'farmer' if user.role == 'FARMER' else 'organic_farmer'
        concern = Concern.objects.create(
            title=title,
            description=description,
            image=image or '',
            **{owner_field: registrant}
        )
        logger.info(f"Concern #{concern.pk} opened by {user.username}")
        return concern

    @staticmethod
    def visible_messages(user, concern):
        """
        Thread as seen by ``user``.

        Registrants see what they sent plus every admin reply.
        """
        messages = concern.messages.select_related('sender')
        if user.is_registry_admin:
            return messages
        return messages.filter(Q(sender=user) | Q(sender_type=ConcernMessage.SenderType.ADMIN))

    @staticmethod
    def send_message(user, concern, content, image=None):
        message = ConcernMessage.objects.create(
            concern=concern,
            sender=user,
            sender_type=user.role,
            content=content,
            image=image or '',
        )

        # Keeps the most recently active concern at the top of listings
        Concern.objects.filter(pk=concern.pk).update(updated_at=timezone.now())

        logger.info(f"Message #{message.pk} added to concern #{concern.pk} by {user.username}")
        return message

    @staticmethod
    def update_status(concern, new_status, changed_by=None):
        if new_status not in Concern.Status.values:
            raise ValueError(f"Unknown concern status: {new_status}")

        old_status = concern.status
        concern.status = new_status
        concern.save(update_fields=['status', 'updated_at'])

        logger.info(
            f"Concern #{concern.pk} moved {old_status} -> {new_status}"
            f" by {getattr(changed_by, 'username', 'system')}"
        )
        return concern
