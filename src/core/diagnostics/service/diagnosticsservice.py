import logging
import platform
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import httpx

from config import Settings
from core.payments.dto.paymentdto import GatewayPaymentOrder
from utilities.paymentgatewayclient import PayHeroClient
from utilities.uniqueidgenerator import UniqueIdGenerator

logger = logging.getLogger(__name__)

RESPONSE_PREVIEW_LENGTH = 200


def _mask_secret(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    if len(value) <= 4:
        return "*" * len(value)
    return value[:4] + "*" * (len(value) - 4)


def _elapsed_ms(started: float) -> str:
    return f"{int((time.perf_counter() - started) * 1000)}ms"


class DiagnosticsService:
    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[[Settings], PayHeroClient] = PayHeroClient,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.client_factory = client_factory
        self.transport = transport

    async def run(self) -> Dict[str, Any]:
        """Probe the PayHero API and general internet access, one after the other."""
        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": {
                "python_version": platform.python_version(),
                "platform": platform.platform(),
                "region": self.settings.DEPLOY_REGION,
            },
            "credentials": {
                "username": _mask_secret(self.settings.PAYHERO_USERNAME),
                "account_id": self.settings.PAYHERO_ACCOUNT_ID,
                "password_set": bool(self.settings.PAYHERO_PASSWORD),
            },
            "tests": [],
        }

        report["tests"].append(await self.check_gateway())
        report["tests"].append(await self.check_internet())
        return report

    async def check_gateway(self) -> Dict[str, Any]:
        name = "PayHero API Connectivity"
        logger.info("[DIAGNOSTICS] Testing PayHero API connectivity...")
        try:
            client = self.client_factory(self.settings)
            order = GatewayPaymentOrder(
                amount=1,
                phone_number=self.settings.PROBE_PHONE_NUMBER,
                channel_id=self.settings.PAYHERO_ACCOUNT_ID,
                provider=self.settings.PAYHERO_PROVIDER,
                external_reference=UniqueIdGenerator.generate_probe_reference(),
            )

            started = time.perf_counter()
            result = await client.send_payment(order)
            response_time = _elapsed_ms(started)

            preview = result.raw_text[:RESPONSE_PREVIEW_LENGTH]
            if len(result.raw_text) > RESPONSE_PREVIEW_LENGTH:
                preview += "..."

            return {
                "name": name,
                "status": result.status_code,
                "status_text": result.reason_phrase,
                "ok": result.success,
                "response_time": response_time,
                "response": preview,
                "passed": result.status_code < 500,
            }
        except Exception as e:
            logger.warning(f"[DIAGNOSTICS_GATEWAY_FAILED] {type(e).__name__}: {e}")
            return {
                "name": name,
                "passed": False,
                "error": str(getattr(e, "detail", e)),
                "error_type": type(e).__name__,
            }

    async def check_internet(self) -> Dict[str, Any]:
        name = "Internet Connectivity"
        try:
            started = time.perf_counter()
            async with httpx.AsyncClient(timeout=self.settings.PAYMENT_TIMEOUT, transport=self.transport) as client:
                response = await client.head(self.settings.PROBE_INTERNET_URL)
            return {
                "name": name,
                "passed": response.is_success,
                "status": response.status_code,
                "response_time": _elapsed_ms(started),
            }
        except Exception as e:
            logger.warning(f"[DIAGNOSTICS_INTERNET_FAILED] {type(e).__name__}: {e}")
            return {
                "name": name,
                "passed": False,
                "error": str(e),
            }
