from pydantic import BaseModel
from typing import Optional, Dict, Any


class GatewayPaymentOrder(BaseModel):
    """Body of the STK push request sent to PayHero."""
    amount: float
    phone_number: str
    channel_id: int
    provider: str
    external_reference: str
    callback_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
