from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class GatewayPaymentResult(BaseModel):
    """Gateway reply. `data` is the parsed JSON object, or {"raw": text} when the body was not a JSON object."""
    status_code: int
    reason_phrase: Optional[str] = None
    success: bool
    data: Dict[str, Any] = Field(default_factory=dict)
    raw_text: str = ""

    @property
    def reference(self) -> Optional[str]:
        reference = self.data.get("reference")
        return str(reference) if reference else None
