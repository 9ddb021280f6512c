import asyncio
import json

import httpx
import pytest

from conftest import RecordingGateway, make_settings
from core.exceptions.PaymentException import (
    PaymentConfigurationException,
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
)
from core.payments.dto.paymentdto import GatewayPaymentOrder
from core.payments.dto.response.paymentresponse import GatewayPaymentResult
from utilities.paymentgatewayclient import PayHeroClient


def _order(**overrides):
    values = dict(
        amount=100.0,
        phone_number="254712345678",
        channel_id=1234,
        provider="m-pesa",
        external_reference="NYOTA17000000001230042",
    )
    values.update(overrides)
    return GatewayPaymentOrder(**values)


def test_missing_credentials_fail_closed():
    settings = make_settings(PAYHERO_USERNAME=None, PAYHERO_PASSWORD="", PAYHERO_ACCOUNT_ID=None)

    with pytest.raises(PaymentConfigurationException) as exc_info:
        PayHeroClient(settings)

    assert exc_info.value.status_code == 503
    assert "PAYHERO_USERNAME" in exc_info.value.detail
    assert "PAYHERO_PASSWORD" in exc_info.value.detail
    assert "PAYHERO_ACCOUNT_ID" in exc_info.value.detail


def test_basic_auth_header(settings):
    assert PayHeroClient(settings).basic_auth_header() == "Basic dXNlcjpwYXNz"


@pytest.mark.asyncio
async def test_send_payment_posts_order(settings, gateway):
    client = PayHeroClient(settings, transport=gateway.transport)

    result = await client.send_payment(_order(metadata={"customer_name": "Jane"}))

    assert result.success is True
    assert result.status_code == 201
    assert result.reference == "PH-REF-1"

    request = gateway.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://gateway.test/api/v2/payments"
    assert request.headers["Authorization"] == "Basic dXNlcjpwYXNz"
    assert request.headers["Content-Type"] == "application/json"
    body = json.loads(request.content)
    assert body == {
        "amount": 100.0,
        "phone_number": "254712345678",
        "channel_id": 1234,
        "provider": "m-pesa",
        "external_reference": "NYOTA17000000001230042",
        "metadata": {"customer_name": "Jane"},
    }


@pytest.mark.asyncio
async def test_non_json_body_degrades_to_raw_text(settings):
    gateway = RecordingGateway(status_code=502, text="<html>Bad Gateway</html>")
    client = PayHeroClient(settings, transport=gateway.transport)

    result = await client.send_payment(_order())

    assert result.success is False
    assert result.data == {"raw": "<html>Bad Gateway</html>"}
    assert result.raw_text == "<html>Bad Gateway</html>"


@pytest.mark.asyncio
async def test_read_timeout_raises_timeout_exception(settings):
    gateway = RecordingGateway(exc=httpx.ReadTimeout)
    client = PayHeroClient(settings, transport=gateway.transport)

    with pytest.raises(PaymentGatewayTimeoutException):
        await client.send_payment(_order())


@pytest.mark.asyncio
async def test_slow_gateway_is_cancelled_after_timeout():
    cancelled = []

    async def slow_handler(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return httpx.Response(201, json={})

    client = PayHeroClient(make_settings(PAYMENT_TIMEOUT=0.05), transport=httpx.MockTransport(slow_handler))

    with pytest.raises(PaymentGatewayTimeoutException):
        await client.send_payment(_order())
    assert cancelled == [True]


@pytest.mark.asyncio
async def test_connection_error_raises_gateway_exception(settings):
    gateway = RecordingGateway(exc=httpx.ConnectError)
    client = PayHeroClient(settings, transport=gateway.transport)

    with pytest.raises(PaymentGatewayException) as exc_info:
        await client.send_payment(_order())

    assert "ConnectError raised by test gateway" in exc_info.value.detail


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"message": "Insufficient balance", "error": "ignored"}, "Insufficient balance"),
        ({"message": "", "error": "Invalid channel"}, "Invalid channel"),
        ({"detail": "Unauthorized"}, "Unauthorized"),
        ({"raw": "oops"}, "Payment gateway error (status 400)"),
    ],
)
def test_extract_error_message(data, expected):
    result = GatewayPaymentResult(status_code=400, success=False, data=data)
    assert PayHeroClient.extract_error_message(result) == expected
