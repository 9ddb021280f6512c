from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class PaymentRecord(BaseModel):
    """Summary of one callback, handed to the ledger."""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reference: Optional[str] = None
    amount: Any = None
    phone: Optional[str] = None
    receipt_number: Optional[str] = None
    customer_name: Optional[str] = None
    status: str
    reason: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
