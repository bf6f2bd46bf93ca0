"""
TextBee SMS Service.
Sends SMS through an Android device registered with the TextBee gateway.

TextBee API Documentation:
https://textbee.dev/quickstart
"""
import re
import requests
import logging
from typing import Dict, Optional
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


# Local mobile numbers: 11 digits starting with 09 (e.g. 09171234567)
LOCAL_MOBILE_PATTERN = re.compile(r'^09\d{9}$')


def is_valid_local_number(phone_number: Optional[str]) -> bool:
    """Return True when the trimmed number is an 11-digit local mobile number."""
    if not phone_number:
        return False
    return bool(LOCAL_MOBILE_PATTERN.match(phone_number.strip()))


class TextBeeSMSService:
    """
    Service for sending SMS via the TextBee gateway.

    Every send is a single attempt. Callers receive a result dict and
    never an exception, so a gateway outage cannot break the request
    that triggered the message.
    """

    SEND_PATH = "/gateway/devices/{device_id}/send-sms"

    def __init__(self):
        """Initialize TextBee SMS service with credentials from settings."""
        self.api_key = getattr(settings, 'TEXTBEE_API_KEY', '')
        self.device_id = getattr(settings, 'TEXTBEE_DEVICE_ID', '')
        self.base_url = getattr(settings, 'TEXTBEE_BASE_URL', 'https://api.textbee.dev/api/v1').rstrip('/')
        self.timeout = getattr(settings, 'SMS_TIMEOUT_SECONDS', 10)
        self.enabled = getattr(settings, 'SMS_ENABLED', False)

        if self.enabled and (not self.api_key or not self.device_id):
            logger.warning("TextBee credentials not configured. SMS sending will be simulated.")

    @property
    def send_url(self) -> str:
        return self.base_url + self.SEND_PATH.format(device_id=self.device_id)

    def send_sms(self, phone_number: str, message: str) -> Dict:
        """
        Send SMS via the TextBee API.

        Args:
            phone_number: Recipient number in local format (09XXXXXXXXX)
            message: SMS message content

        Returns:
            dict: Response with success flag, message_id and error info
        """
        phone_number = phone_number.strip()

        # If SMS is disabled, simulate sending
        if not self.enabled or not self.api_key or not self.device_id:
            return self._simulate_sms(phone_number, message)

        payload = {
            'recipients': [phone_number],
            'message': message,
        }
        headers = {
            'Content-Type': 'application/json',
            'x-api-key': self.api_key,
        }

        try:
            response = requests.post(
                self.send_url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )

            if 200 <= response.status_code < 300:
                data = response.json() if response.content else {}
                body = data.get('data') or {}
                message_id = body.get('smsBatchId') or body.get('_id', '')

                logger.info(f"SMS sent successfully to {phone_number}. BatchId: {message_id}")

                return {
                    'success': True,
                    'message_id': message_id,
                    'phone_number': phone_number,
                    'timestamp': timezone.now().isoformat(),
                }

            error_message = response.text or 'Unknown error'
            logger.error(
                f"Failed to send SMS to {phone_number}. "
                f"Status: {response.status_code}, Error: {error_message}"
            )
            return {
                'success': False,
                'error': error_message,
                'status_code': response.status_code,
                'phone_number': phone_number,
                'timestamp': timezone.now().isoformat(),
            }

        except requests.exceptions.Timeout:
            logger.error(f"Timeout sending SMS to {phone_number}")
            return {
                'success': False,
                'error': 'Request timeout',
                'phone_number': phone_number,
                'timestamp': timezone.now().isoformat(),
            }

        except requests.exceptions.RequestException as e:
            logger.error(f"Network error sending SMS to {phone_number}: {str(e)}")
            return {
                'success': False,
                'error': f'Network error: {str(e)}',
                'phone_number': phone_number,
                'timestamp': timezone.now().isoformat(),
            }

        except ValueError as e:
            # Gateway answered 2xx with a body that is not JSON
            logger.error(f"Unreadable gateway response for {phone_number}: {str(e)}")
            return {
                'success': False,
                'error': f'Invalid gateway response: {str(e)}',
                'phone_number': phone_number,
                'timestamp': timezone.now().isoformat(),
            }

    def _simulate_sms(self, phone_number: str, message: str) -> Dict:
        """Simulate SMS sending for development/testing."""
        logger.info(
            f"\n{'='*60}\n"
            f"SIMULATED SMS\n"
            f"To: {phone_number}\n"
            f"Message: {message}\n"
            f"{'='*60}\n"
        )

        return {
            'success': True,
            'message_id': f'SIM-{timezone.now().timestamp():.0f}',
            'phone_number': phone_number,
            'timestamp': timezone.now().isoformat(),
            'simulated': True,
        }
