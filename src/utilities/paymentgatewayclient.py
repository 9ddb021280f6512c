import asyncio
import base64
import json
import logging
from typing import Any, Dict, Optional

import httpx

from config import Settings
from core.exceptions.PaymentException import (
    PaymentConfigurationException,
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
)
from core.payments.dto.paymentdto import GatewayPaymentOrder
from core.payments.dto.response.paymentresponse import GatewayPaymentResult

logger = logging.getLogger(__name__)

ERROR_MESSAGE_FIELDS = ("message", "error", "detail")


class PayHeroClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.username = settings.PAYHERO_USERNAME
        self.password = settings.PAYHERO_PASSWORD
        self.account_id = settings.PAYHERO_ACCOUNT_ID
        self.payments_url = settings.PAYHERO_PAYMENTS_URL
        self.timeout = settings.PAYMENT_TIMEOUT
        self.transport = transport

        # Validate required config
        self._validate_config(settings)

    def _validate_config(self, settings: Settings):
        """Refuse to run without credentials; there are no built-in fallbacks"""
        missing_vars = settings.missing_gateway_settings()

        if missing_vars:
            error_msg = f"Missing required environment variables: {', '.join(missing_vars)}"
            logger.error(error_msg)
            raise PaymentConfigurationException(error_msg)

    def basic_auth_header(self) -> str:
        credentials = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        return f"Basic {credentials}"

    async def send_payment(self, order: GatewayPaymentOrder) -> GatewayPaymentResult:
        """
        Send an STK push request to PayHero.

        The whole call is bounded by PAYMENT_TIMEOUT; when it expires the in-flight
        request is cancelled. Nothing is retried.

        Raises:
            PaymentGatewayTimeoutException: the gateway did not answer in time
            PaymentGatewayException: the gateway could not be reached
        """
        payload = order.to_payload()
        logger.debug(f"[PAYHERO_REQUEST] POST {self.payments_url} reference={order.external_reference}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await asyncio.wait_for(
                    client.post(
                        self.payments_url,
                        headers={
                            "Authorization": self.basic_auth_header(),
                            "Content-Type": "application/json",
                            "Accept": "application/json",
                        },
                        json=payload,
                    ),
                    timeout=self.timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error(f"[PAYHERO_TIMEOUT] No response within {self.timeout}s for reference={order.external_reference}")
            raise PaymentGatewayTimeoutException(f"Payment gateway did not respond within {self.timeout} seconds")
        except httpx.RequestError as e:
            logger.error(f"[PAYHERO_NETWORK_ERROR] {type(e).__name__}: {e}")
            raise PaymentGatewayException(f"Network error: {e}")

        result = self.parse_response(response)
        logger.info(f"[PAYHERO_RESPONSE] status={result.status_code} success={result.success} reference={order.external_reference}")
        return result

    @staticmethod
    def parse_response(response: httpx.Response) -> GatewayPaymentResult:
        """Read the body as text first, then try JSON; non-JSON bodies are kept as raw text."""
        raw_text = response.text
        try:
            parsed = json.loads(raw_text)
        except ValueError:
            logger.warning(f"[PAYHERO_NON_JSON_RESPONSE] status={response.status_code}")
            parsed = None

        data: Dict[str, Any] = parsed if isinstance(parsed, dict) else {"raw": raw_text}

        return GatewayPaymentResult(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            success=200 <= response.status_code <= 299,
            data=data,
            raw_text=raw_text,
        )

    @staticmethod
    def extract_error_message(result: GatewayPaymentResult) -> str:
        for field in ERROR_MESSAGE_FIELDS:
            value = result.data.get(field)
            if value:
                return value if isinstance(value, str) else json.dumps(value)
        return f"Payment gateway error (status {result.status_code})"
