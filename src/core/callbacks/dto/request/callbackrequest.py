import json
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


class CallbackNotification(BaseModel):
    """
    Status notification posted by PayHero.

    Treated as an opaque bag: any value is accepted for any field. Side fields are
    normalized to text and a non-object metadata becomes {}. Unknown keys are kept.
    """
    model_config = ConfigDict(extra="allow")

    reference: Optional[str] = None
    external_reference: Optional[str] = None
    status: Any = None
    amount: Any = None
    phone_number: Optional[str] = None
    receipt_number: Optional[str] = None
    failure_reason: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("reference", "external_reference", "phone_number", "receipt_number", "failure_reason", mode="before")
    @classmethod
    def normalize_text(cls, value):
        return _as_text(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, value):
        return value if isinstance(value, dict) else {}

    @property
    def payment_reference(self) -> Optional[str]:
        return self.reference or self.external_reference

    @property
    def customer_name(self) -> Optional[str]:
        return _as_text(self.metadata.get("customer_name"))
