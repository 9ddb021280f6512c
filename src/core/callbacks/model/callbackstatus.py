from enum import Enum
from typing import Any


class CallbackStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"


_STATUS_ALIASES = {
    "success": CallbackStatus.SUCCESS,
    "completed": CallbackStatus.SUCCESS,
    "failed": CallbackStatus.FAILED,
    "cancelled": CallbackStatus.FAILED,
    "pending": CallbackStatus.PENDING,
}


def classify_status(raw_status: Any) -> CallbackStatus:
    """Map a gateway status string to a CallbackStatus, case-insensitively."""
    if not isinstance(raw_status, str):
        return CallbackStatus.UNKNOWN
    return _STATUS_ALIASES.get(raw_status.strip().lower(), CallbackStatus.UNKNOWN)
