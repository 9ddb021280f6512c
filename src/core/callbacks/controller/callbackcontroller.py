import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from config import Settings, get_settings
from core.callbacks.dto.response.callbackresponse import CallbackAcknowledgement
from core.callbacks.service.callbackservice import CallbackService
from core.callbacks.service.sinks import LoggingNotificationSink, LoggingPaymentLedger, NotificationSink
from core.notification.service.sms_service import SmsNotificationSink

logger = logging.getLogger(__name__)


def get_notification_sink(settings: Settings = Depends(get_settings)) -> NotificationSink:
    if settings.SMS_ENABLED:
        return SmsNotificationSink(settings)
    return LoggingNotificationSink()


def get_callback_service(
    settings: Settings = Depends(get_settings),
    notifier: NotificationSink = Depends(get_notification_sink)
) -> CallbackService:
    return CallbackService(settings, LoggingPaymentLedger(), notifier)


callback_routes = APIRouter()


@callback_routes.post("", response_model=CallbackAcknowledgement)
async def receive_callback(
    request: Request,
    callback_service: CallbackService = Depends(get_callback_service)
):
    """
    PayHero payment status webhook.

    Always answers 200 once data is present, so PayHero does not retry the delivery.
    """
    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        logger.error("[CALLBACK_INVALID_JSON] Callback body is not valid JSON")
        payload = None

    status_code, ack = await run_in_threadpool(callback_service.handle_callback, payload)
    return JSONResponse(status_code=status_code, content=ack.model_dump())
