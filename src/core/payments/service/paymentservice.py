import logging
import math
from typing import Any, Callable, Optional, Tuple

from config import Settings
from core.exceptions.PaymentException import (
    PaymentConfigurationException,
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
)
from core.payments.dto.paymentdto import GatewayPaymentOrder
from core.payments.dto.request.paymentrequest import PaymentRequest
from core.payments.dto.response.paymentresultresponse import PaymentResultData, PaymentResultResponse
from utilities.paymentgatewayclient import PayHeroClient
from utilities.phone_utils import is_valid_phone, mask_phone
from utilities.uniqueidgenerator import UniqueIdGenerator

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Payment request sent successfully! Check your phone for the M-Pesa prompt."
TIMEOUT_MESSAGE = "Request timeout. The payment service took too long to respond, please try again."
NETWORK_ERROR_MESSAGE = "Unable to reach the payment service. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An error occurred while processing your payment. Please try again."
NOT_CONFIGURED_MESSAGE = "Payment service is not configured. Please try again later."


class PaymentService:
    def __init__(self, settings: Settings, client_factory: Callable[[Settings], PayHeroClient] = PayHeroClient):
        self.settings = settings
        self.client_factory = client_factory

    def validate(self, request: PaymentRequest) -> Optional[str]:
        """
        Validate a payment request. Returns the message of the first failing rule, None if valid.

        Rules are checked in order: name, phone, amount.
        """
        if not isinstance(request.name, str) or not request.name.strip():
            return "Please enter your name"

        if not is_valid_phone(request.phone, self.settings.PHONE_COUNTRY_CODE):
            return f"Please enter a valid phone number ({self.settings.PHONE_COUNTRY_CODE}XXXXXXXXX)"

        amount = self._parse_amount(request.amount)
        if amount is None or amount < 1:
            return f"Amount must be at least {self.settings.CURRENCY} 1"

        return None

    @staticmethod
    def _parse_amount(value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            amount = float(value)
        elif isinstance(value, str):
            try:
                amount = float(value.strip())
            except ValueError:
                return None
        else:
            return None
        return amount if math.isfinite(amount) else None

    def build_order(self, request: PaymentRequest, reference: str) -> GatewayPaymentOrder:
        return GatewayPaymentOrder(
            amount=self._parse_amount(request.amount),
            phone_number=request.phone,
            channel_id=self.settings.PAYHERO_ACCOUNT_ID,
            provider=self.settings.PAYHERO_PROVIDER,
            external_reference=reference,
            callback_url=self.settings.PAYHERO_CALLBACK_URL or None,
            metadata={
                "customer_name": request.name.strip(),
                "payment_reference": reference,
                "payment_type": self.settings.PAYMENT_TYPE,
            },
        )

    async def initiate_payment(self, request: PaymentRequest) -> Tuple[int, PaymentResultResponse]:
        """
        Validate the request, push it to PayHero and translate the outcome.

        Always returns (http_status, envelope). Gateway rejections, timeouts and
        network faults are reported with HTTP 200 and success=False so clients
        handle every failure the same way. Missing gateway credentials give 503,
        checked only after the request itself is valid.
        """
        error_message = self.validate(request)
        if error_message:
            logger.info(f"[PAYMENT_VALIDATION_FAILED] {error_message}")
            return 400, PaymentResultResponse(success=False, message=error_message)

        try:
            gateway_client = self.client_factory(self.settings)
        except PaymentConfigurationException as e:
            logger.error(f"[PAYMENT_CONFIG_ERROR] {e.detail}")
            return e.status_code, PaymentResultResponse(success=False, message=NOT_CONFIGURED_MESSAGE)

        try:
            reference = UniqueIdGenerator.generate_payment_reference(self.settings.REFERENCE_PREFIX)
            order = self.build_order(request, reference)

            logger.info(f"[PAYMENT_INIT] Initiating STK push: amount={order.amount}, phone={mask_phone(order.phone_number)}, reference={reference}")

            result = await gateway_client.send_payment(order)

            if result.success:
                logger.info(f"[PAYMENT_ACCEPTED] reference={reference}, gateway_status={result.status_code}")
                return 200, PaymentResultResponse(
                    success=True,
                    message=SUCCESS_MESSAGE,
                    data=PaymentResultData(
                        reference=result.reference or reference,
                        amount=request.amount,
                        phone=mask_phone(request.phone),
                        status="pending",
                    ),
                )

            message = PayHeroClient.extract_error_message(result)
            logger.error(f"[PAYMENT_REJECTED] reference={reference}, gateway_status={result.status_code}, message={message}")
            debug = {"status_code": result.status_code, "response": result.data} if self.settings.DEBUG else None
            return 200, PaymentResultResponse(success=False, message=message, debug=debug)

        except PaymentGatewayTimeoutException:
            return 200, PaymentResultResponse(success=False, message=TIMEOUT_MESSAGE)
        except PaymentGatewayException as e:
            return 200, PaymentResultResponse(success=False, message=NETWORK_ERROR_MESSAGE, error=e.detail)
        except Exception:
            logger.error("[PAYMENT_ERROR] Unexpected error processing payment", exc_info=True)
            return 500, PaymentResultResponse(success=False, message=UNEXPECTED_ERROR_MESSAGE)
