"""Pytest fixtures for the payment relay tests."""

import httpx
import pytest

from config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "PAYHERO_USERNAME": "user",
        "PAYHERO_PASSWORD": "pass",
        "PAYHERO_ACCOUNT_ID": 1234,
        "PAYHERO_CALLBACK_URL": "https://relay.example.com/api/v1/callback",
        "PAYHERO_BASE_URL": "https://gateway.test",
        "PAYMENT_TIMEOUT": 5,
        "SMS_API_URL": None,
        "SMS_API_KEY": None,
        "DEBUG": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class RecordingGateway:
    """httpx handler that records requests and replies with a canned response."""

    def __init__(self, status_code=201, json=None, text=None, exc=None):
        self.status_code = status_code
        self.json = json
        self.text = text
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"{self.exc.__name__} raised by test gateway", request=request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json if self.json is not None else {})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def gateway():
    return RecordingGateway(status_code=201, json={"success": True, "status": "QUEUED", "reference": "PH-REF-1"})
