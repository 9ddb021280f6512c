from typing import Any

from pydantic import BaseModel, ConfigDict


class PaymentRequest(BaseModel):
    """Payment request as sent by the client. Fields are loosely typed, PaymentService validates them in order."""
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    phone: Any = None
    amount: Any = None
