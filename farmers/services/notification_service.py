"""
Applicant Notification Service

Tells an applicant about a status change via:
- Email (when the applicant gave an address)
- SMS through TextBee (when the contact number is a local 09 number)

Each channel gets one attempt. Failures are logged and recorded on the
ApplicantNotification row; they never reach the caller.
"""

from django.core.mail import send_mail
from django.conf import settings
from django.template.loader import render_to_string
from django.utils.html import strip_tags
import logging

from core.sms_service import TextBeeSMSService, is_valid_local_number
from farmers.models import ApplicantNotification, Farmer

logger = logging.getLogger(__name__)


EMAIL_SUBJECT = "Farmer Management System - Application Status"


class ApplicantNotificationService:
    """Service for sending application status notifications"""

    def __init__(self, sms_service=None):
        self.from_email = getattr(settings, 'DEFAULT_FROM_EMAIL', 'noreply@farmer-registry.local')
        self.site_url = getattr(settings, 'SITE_BASE_URL', '')
        self.sms_service = sms_service or TextBeeSMSService()

    def send_status_update(self, registrant, reason=''):
        """
        Notify the applicant of their current status.

        Returns the list of ApplicantNotification rows created (zero,
        one or two).
        """
        notifications = []
        status_label = registrant.get_status_display()

        email = registrant.email
        if email:
            notifications.append(self._create_and_send(
                registrant,
                channel='email',
                recipient=email,
                subject=EMAIL_SUBJECT,
                message=self.build_email_html(registrant.full_name, status_label, reason),
            ))
        else:
            logger.info(f"No email on file for {registrant.full_name}; skipping email")

        phone = (registrant.contact_number or '').strip()
        if is_valid_local_number(phone):
            notifications.append(self._create_and_send(
                registrant,
                channel='sms',
                recipient=phone,
                subject='',
                message=self.build_sms_message(registrant.full_name, status_label, reason),
            ))
        else:
            logger.info(f"Contact number '{phone}' is not a local mobile number; skipping SMS")

        return notifications

    def build_email_html(self, name, status_label, reason=''):
        return render_to_string('farmers/emails/status_update.html', {
            'name': name,
            'status': status_label,
            'reason': reason,
            'site_url': self.site_url,
        })

    @staticmethod
    def build_sms_message(name, status_label, reason=''):
        lines = [
            f"Hello {name},",
            "Thank you for applying to the Farmer Management System.",
            f"Your current application status is: {status_label}",
        ]
        if reason:
            lines.append(f"Reason: {reason}")
        lines += [
            "We will notify you of further updates.",
            "Best regards,",
            "Farmer Management Team",
        ]
        return '\n'.join(lines)

    def _create_and_send(self, registrant, channel, recipient, subject, message):
        """
        Internal method to create the log row and send through the channel.
        """
        owner = {'farmer': registrant} if isinstance(registrant, Farmer) else {'organic_farmer': registrant}
        notification = ApplicantNotification.objects.create(
            channel=channel,
            recipient=recipient,
            applicant_status=registrant.status,
            subject=subject,
            message=message,
            status='pending',
            **owner
        )

        try:
            if channel == 'email':
                self._send_email(notification)
            else:
                self._send_sms(notification)
        except Exception as e:
            logger.error(f"Failed to send {channel} notification to {recipient}: {str(e)}")
            notification.mark_as_failed(str(e))

        return notification

    def _send_email(self, notification):
        """Send email notification"""
        send_mail(
            subject=notification.subject,
            message=strip_tags(notification.message),
            from_email=self.from_email,
            recipient_list=[notification.recipient],
            html_message=notification.message,
            fail_silently=False,
        )
        notification.mark_as_sent()
        logger.info(f"Email sent to {notification.recipient}: {notification.subject}")

    def _send_sms(self, notification):
        """Send SMS notification through the gateway."""
        result = self.sms_service.send_sms(notification.recipient, notification.message)
        if result.get('success'):
            notification.mark_as_sent(result.get('message_id', ''))
        else:
            notification.mark_as_failed(result.get('error', 'Unknown error'))
