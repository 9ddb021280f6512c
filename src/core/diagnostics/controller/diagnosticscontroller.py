import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from core.diagnostics.dto.response.diagnosticsresponse import DiagnosticsResponse
from core.diagnostics.service.diagnosticsservice import DiagnosticsService

logger = logging.getLogger(__name__)


def get_diagnostics_service(settings: Settings = Depends(get_settings)) -> DiagnosticsService:
    return DiagnosticsService(settings)


diagnostics_routes = APIRouter()


@diagnostics_routes.get("", response_model=DiagnosticsResponse)
async def run_diagnostics(
    diagnostics_service: DiagnosticsService = Depends(get_diagnostics_service)
):
    """
    Check that the PayHero API and the internet are reachable from this deployment.
    Note: the gateway check sends a real KES 1 STK push to PROBE_PHONE_NUMBER.
    """
    try:
        report = await diagnostics_service.run()
        return DiagnosticsResponse(success=True, message="Test completed", results=report)
    except Exception as e:
        logger.error(f"[DIAGNOSTICS_ERROR] {str(e)}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
