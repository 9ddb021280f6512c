import pytest
import requests

from conftest import make_settings
from core.notification.service.sms_service import SMSGatewayException, SmsNotificationSink


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self.payload


class RecordingPost:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return self.response


@pytest.fixture
def sms_settings():
    return make_settings(SMS_API_URL="https://sms.test/send", SMS_API_KEY="secret", SMS_SENDER_ID="NYOTA")


def test_send_sms_posts_message(sms_settings, monkeypatch):
    post = RecordingPost(DummyResponse(200, {"id": "m-1", "status": "queued"}))
    monkeypatch.setattr(requests, "post", post)
    sink = SmsNotificationSink(sms_settings)

    result = sink.send_sms("254712345678", "hello")

    assert result == {"success": True, "msgid": "m-1", "status": "queued"}
    call = post.calls[0]
    assert call["url"] == "https://sms.test/send"
    assert call["json"] == {"to": "254712345678", "message": "hello", "from": "NYOTA"}
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["timeout"] == sms_settings.SMS_TIMEOUT


def test_send_sms_raises_on_provider_error(sms_settings, monkeypatch):
    monkeypatch.setattr(requests, "post", RecordingPost(DummyResponse(500)))
    sink = SmsNotificationSink(sms_settings)

    with pytest.raises(SMSGatewayException):
        sink.send_sms("254712345678", "hello")


def test_send_sms_raises_on_connection_error(sms_settings, monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "post", refuse)

    with pytest.raises(SMSGatewayException, match="connection refused"):
        SmsNotificationSink(sms_settings).send_sms("254712345678", "hello")


def test_sms_enabled_only_with_url_and_key(sms_settings):
    assert sms_settings.SMS_ENABLED is True
    assert make_settings(SMS_API_URL="https://sms.test/send").SMS_ENABLED is False
