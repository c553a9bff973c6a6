"""PIN-gated admin endpoints over the claim ledger"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from airtime_gateway.api.v1.schemas import (
    AdminRequest,
    AdminSendRequest,
    ApiResponse,
    HistoryResponse,
    SetLimitRequest,
    StateResponse,
)
from airtime_gateway.api.dependencies import get_admin_control, get_settings
from airtime_gateway.config import Settings
from airtime_gateway.domain.admin import AdminControl
from airtime_gateway.domain.models import ClaimResult

router = APIRouter()


def _respond(result: ClaimResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_body())


@router.post("/login", response_model=ApiResponse)
def login(body: AdminRequest, admin: AdminControl = Depends(get_admin_control)):
    return _respond(admin.login(body.pin))


@router.post("/state", response_model=StateResponse)
def get_state(body: AdminRequest, admin: AdminControl = Depends(get_admin_control)):
    """Current site policy plus today's successful top-up total"""
    state = admin.get_state(body.pin)
    return _respond(ClaimResult(status_code=200, success=True, message="OK", data=state))


@router.post("/history", response_model=HistoryResponse)
def get_history(body: AdminRequest, admin: AdminControl = Depends(get_admin_control)):
    """Transaction log, newest first"""
    history = admin.get_history(body.pin)
    return _respond(ClaimResult(status_code=200, success=True, message="OK", data=history))


@router.post("/toggle-site", response_model=ApiResponse)
def toggle_site(body: AdminRequest, admin: AdminControl = Depends(get_admin_control)):
    return _respond(admin.toggle_site(body.pin))


@router.post("/set-limit", response_model=ApiResponse)
def set_limit(body: SetLimitRequest, admin: AdminControl = Depends(get_admin_control)):
    return _respond(admin.set_limit(body.pin, body.limit))


@router.post("/reset-count", response_model=ApiResponse)
def reset_count(body: AdminRequest, admin: AdminControl = Depends(get_admin_control)):
    return _respond(admin.reset_count(body.pin))


@router.post("/send-airtime", response_model=ApiResponse)
async def admin_send(
    body: AdminSendRequest,
    admin: AdminControl = Depends(get_admin_control),
    app_settings: Settings = Depends(get_settings),
):
    """Send airtime without the online or quota checks; not counted toward quota"""
    result = await admin.admin_send(body.pin, body.network, body.mobile_number, app_settings.api_key)
    return _respond(result)
