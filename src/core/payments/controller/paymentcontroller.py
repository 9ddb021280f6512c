from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from core.payments.dto.request.paymentrequest import PaymentRequest
from core.payments.dto.response.paymentresultresponse import PaymentResultResponse
from core.payments.service.paymentservice import PaymentService


def get_payment_service(settings: Settings = Depends(get_settings)) -> PaymentService:
    return PaymentService(settings)


payment_routes = APIRouter()


@payment_routes.post("", response_model=PaymentResultResponse)
async def create_payment(
    payment: PaymentRequest,
    payment_service: PaymentService = Depends(get_payment_service)
):
    """
    Send an M-Pesa STK push to the payer's phone.

    Returns:
    - 200 success=true: prompt sent, awaiting the payer (status "pending")
    - 200 success=false: gateway rejected the request, timed out or was unreachable
    - 400: invalid name, phone or amount
    - 503: gateway credentials are not configured
    """
    status_code, result = await payment_service.initiate_payment(payment)
    return JSONResponse(status_code=status_code, content=result.model_dump(exclude_none=True))
