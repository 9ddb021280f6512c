"""
Downstream collaborators of the callback receiver.

The receiver only talks to these interfaces, so it can be exercised without a
database or an SMS provider. The logging implementations are the defaults.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from core.callbacks.model.paymentrecord import PaymentRecord
from utilities.phone_utils import mask_phone

logger = logging.getLogger(__name__)


class PaymentLedger(ABC):
    @abstractmethod
    def record(self, record: PaymentRecord) -> None:
        ...


class NotificationSink(ABC):
    @abstractmethod
    def send_sms(self, phone: str, message: str) -> Optional[Dict[str, Any]]:
        ...


class LoggingPaymentLedger(PaymentLedger):
    """Writes payment records to the log only. Nothing is persisted."""

    def record(self, record: PaymentRecord) -> None:
        logger.info(f"[LEDGER_RECORD] {json.dumps(record.model_dump(mode='json'), indent=2)}")


class LoggingNotificationSink(NotificationSink):
    def send_sms(self, phone: str, message: str) -> Optional[Dict[str, Any]]:
        logger.info(f"[SMS_SKIPPED] SMS gateway not configured, message for {mask_phone(phone)}: {message}")
