from typing import Any, Dict, Optional, Union
from pydantic import BaseModel


class PaymentResultData(BaseModel):
    reference: str
    amount: Union[int, float, str]
    phone: str
    status: str = "pending"


class PaymentResultResponse(BaseModel):
    success: bool
    message: str
    data: Optional[PaymentResultData] = None
    error: Optional[str] = None
    debug: Optional[Dict[str, Any]] = None
