"""POST /send-airtime - public airtime claim endpoint"""

import time
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from airtime_gateway.api.v1.schemas import ApiResponse, ClaimRequest
from airtime_gateway.api.dependencies import get_orchestrator, get_request_id, get_settings
from airtime_gateway.config import Settings
from airtime_gateway.domain.claims import ClaimOrchestrator
from airtime_gateway.infrastructure.observability.logging import log_claim

router = APIRouter()


@router.post("/send-airtime", response_model=ApiResponse)
async def send_airtime(
    request_body: ClaimRequest,
    request: Request,
    orchestrator: ClaimOrchestrator = Depends(get_orchestrator),
    app_settings: Settings = Depends(get_settings),
):
    """
    Process a fixed-amount airtime claim.

    Returns:
        200 on success, 400 invalid input, 429 quota reached, 503 site offline
        or provider unreachable, 500 server misconfiguration, or the
        provider's own status when it rejects the top-up
    """
    start_time = time.time()

    result = await orchestrator.handle_claim(
        network=request_body.network,
        phone_number=request_body.mobile_number,
        admin_phone=app_settings.admin_phone,
        api_key=app_settings.api_key,
    )

    duration_ms = (time.time() - start_time) * 1000
    log_claim(
        get_request_id(request),
        request_body.network or "",
        request_body.mobile_number or "",
        "success" if result.success else "failed",
        result.status_code,
        duration_ms,
    )

    return JSONResponse(status_code=result.status_code, content=result.to_body())
