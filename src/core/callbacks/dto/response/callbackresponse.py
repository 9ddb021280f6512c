from pydantic import BaseModel


class CallbackAcknowledgement(BaseModel):
    status: str
    message: str
