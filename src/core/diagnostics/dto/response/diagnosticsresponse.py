from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class DiagnosticsReport(BaseModel):
    timestamp: str
    environment: Dict[str, Any]
    credentials: Dict[str, Any]
    tests: List[Dict[str, Any]]


class DiagnosticsResponse(BaseModel):
    success: bool
    message: str
    results: Optional[DiagnosticsReport] = None
