import requests
import logging
from typing import Dict, Any, Optional

from config import Settings
from core.callbacks.service.sinks import NotificationSink
from utilities.phone_utils import mask_phone

logger = logging.getLogger(__name__)


class SMSGatewayException(Exception):
    """Custom exception for SMS gateway errors"""
    pass


class SmsNotificationSink(NotificationSink):
    """Sends SMS through an HTTP SMS gateway using API key authentication"""

    def __init__(self, settings: Settings):
        self.api_url = settings.SMS_API_URL
        self.api_key = settings.SMS_API_KEY
        self.sender_id = settings.SMS_SENDER_ID
        self.timeout = settings.SMS_TIMEOUT

    def send_sms(self, phone: str, message: str) -> Optional[Dict[str, Any]]:
        """
        Send an SMS.

        Args:
            phone: Recipient phone number with country code (e.g., 254712345678)
            message: SMS content

        Returns:
            Dict with the provider message ID and status

        Raises:
            SMSGatewayException: the request failed or the provider answered with an error
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "to": phone,
            "message": message,
            "from": self.sender_id,
        }

        try:
            logger.info(f"[SMS_SEND] Sending SMS to {mask_phone(phone)}")
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"[SMS_SEND_FAILED] SMS request failed: {str(e)}")
            raise SMSGatewayException(f"SMS sending failed: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        return {
            "success": True,
            "msgid": data.get("msgid") or data.get("id"),
            "status": data.get("status"),
        }
