"""
Applicant Status Service

Moves a farmer or organic farmer between review statuses and tells them
about it. The steps run in order with no rollback between them:

1. save the new status (and the rejection reason, if any)
2. email the applicant, when an address is on file
3. SMS the applicant, when the contact number is a local 09 number

A failed notification leaves the saved status in place. There is no
idempotency key, so submitting the same change twice sends everything
twice.
"""

import logging

from farmers.models import ApplicantStatus
from farmers.services.notification_service import ApplicantNotificationService

logger = logging.getLogger(__name__)


class ApplicantStatusService:
    """
    Service for applicant status transitions.
    """

    @staticmethod
    def update_status(registrant, new_status, reason='', changed_by=None, notifier=None):
        """
        Apply a status change and send the notifications.

        Args:
            registrant: Farmer or OrganicFarmer
            new_status: one of ApplicantStatus
            reason: str, stored as the not-qualified reason ('' clears it)
            changed_by: User making the change (for the log line)
            notifier: ApplicantNotificationService override

        Returns:
            (registrant, notifications)
        """
        if new_status not in ApplicantStatus.values:
            raise ValueError(f"Unknown applicant status '{new_status}'")

        previous = registrant.status
        registrant.status = new_status
        registrant.not_qualified_reason = reason or ''
        registrant.save(update_fields=['status', 'not_qualified_reason', 'updated_at'])

        logger.info(
            f"{registrant.__class__.__name__} {registrant.pk} status {previous} -> {new_status}"
            f" by {changed_by.username if changed_by else 'system'}"
        )

        notifier = notifier or ApplicantNotificationService()
        notifications = notifier.send_status_update(registrant, reason=reason or '')

        failed = [n.channel for n in notifications if n.status == 'failed']
        if failed:
            logger.warning(
                f"Status for {registrant.__class__.__name__} {registrant.pk} saved but "
                f"{', '.join(failed)} notification failed"
            )

        return registrant, notifications
