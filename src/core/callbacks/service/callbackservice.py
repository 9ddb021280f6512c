import json
import logging
from typing import Any, Tuple

from config import Settings
from core.callbacks.dto.request.callbackrequest import CallbackNotification
from core.callbacks.dto.response.callbackresponse import CallbackAcknowledgement
from core.callbacks.model.callbackstatus import CallbackStatus, classify_status
from core.callbacks.model.paymentrecord import PaymentRecord
from core.callbacks.service.sinks import NotificationSink, PaymentLedger
from utilities.phone_utils import mask_phone

logger = logging.getLogger(__name__)


class CallbackService:
    def __init__(self, settings: Settings, ledger: PaymentLedger, notifier: NotificationSink):
        self.settings = settings
        self.ledger = ledger
        self.notifier = notifier

    def handle_callback(self, payload: Any) -> Tuple[int, CallbackAcknowledgement]:
        """
        Acknowledge a PayHero status callback and process it on a best-effort basis.

        Only an empty payload is rejected. Every other payload gets HTTP 200, even
        when processing fails, so the gateway never retries the delivery.
        """
        if not isinstance(payload, dict) or not payload:
            logger.error("[CALLBACK_EMPTY] No callback data received")
            return 400, CallbackAcknowledgement(status="error", message="No data received")

        try:
            logger.info(f"[CALLBACK_RECEIVED] {json.dumps(payload, indent=2, default=str)}")

            notification = CallbackNotification.model_validate(payload)
            status = classify_status(notification.status)

            logger.info(
                f"[CALLBACK_DETAILS] reference={notification.payment_reference}, status={notification.status}, "
                f"amount={notification.amount}, phone={mask_phone(notification.phone_number)}, "
                f"receipt={notification.receipt_number}, customer={notification.customer_name}"
            )

            if status == CallbackStatus.SUCCESS:
                self._handle_successful_payment(notification)
            elif status == CallbackStatus.FAILED:
                self._handle_failed_payment(notification)
            elif status == CallbackStatus.PENDING:
                self._handle_pending_payment(notification)
            else:
                logger.warning(f"[CALLBACK_UNKNOWN_STATUS] Unrecognized payment status: {notification.status!r}")

            return 200, CallbackAcknowledgement(status="received", message="Callback processed successfully")

        except Exception as e:
            logger.error(f"[CALLBACK_ERROR] Callback processing failed: {str(e)}", exc_info=True)
            return 200, CallbackAcknowledgement(status="error", message="Callback received but processing failed")

    def _handle_successful_payment(self, notification: CallbackNotification) -> None:
        logger.info(f"[CALLBACK_SUCCESS] Payment completed for reference {notification.payment_reference}")
        self.ledger.record(PaymentRecord(
            reference=notification.payment_reference,
            amount=notification.amount,
            phone=notification.phone_number,
            receipt_number=notification.receipt_number,
            customer_name=notification.customer_name,
            status="completed",
            metadata=notification.metadata,
        ))
        if notification.phone_number:
            self.notifier.send_sms(
                notification.phone_number,
                f"Payment of {self.settings.CURRENCY} {notification.amount} received. "
                f"Receipt: {notification.receipt_number}. Thank you.",
            )

    def _handle_failed_payment(self, notification: CallbackNotification) -> None:
        reason = notification.failure_reason or "Unknown"
        logger.warning(f"[CALLBACK_FAILED] Payment failed or cancelled for reference {notification.payment_reference}: {reason}")
        self.ledger.record(PaymentRecord(
            reference=notification.payment_reference,
            amount=notification.amount,
            phone=notification.phone_number,
            customer_name=notification.customer_name,
            status="failed",
            reason=reason,
        ))
        if notification.phone_number:
            self.notifier.send_sms(
                notification.phone_number,
                f"Payment failed: {reason}. Please try again or contact support.",
            )

    def _handle_pending_payment(self, notification: CallbackNotification) -> None:
        logger.info(f"[CALLBACK_PENDING] Payment pending for reference {notification.payment_reference}")
        self.ledger.record(PaymentRecord(
            reference=notification.payment_reference,
            amount=notification.amount,
            phone=notification.phone_number,
            customer_name=notification.customer_name,
            status="pending",
        ))
