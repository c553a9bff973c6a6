"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request

from airtime_gateway.config import Settings
from airtime_gateway.domain.admin import AdminControl
from airtime_gateway.domain.claims import ClaimOrchestrator
from airtime_gateway.domain.ledger import ClaimLedger
from airtime_gateway.infrastructure.clients.provider import ProviderClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings(request: Request) -> Settings:
    """Settings the app was created with"""
    return request.app.state.settings


def get_ledger(request: Request) -> ClaimLedger:
    """Process-lifetime ledger created by the app factory"""
    return request.app.state.ledger


def get_provider_client(app_settings: Settings = Depends(get_settings)) -> ProviderClient:
    """Provide airtime provider client instance"""
    return ProviderClient(
        base_url=app_settings.provider_url,
        timeout=app_settings.http_timeout_seconds,
    )


def get_orchestrator(
    ledger: ClaimLedger = Depends(get_ledger),
    provider_client: ProviderClient = Depends(get_provider_client),
) -> ClaimOrchestrator:
    return ClaimOrchestrator(ledger, provider_client)


def get_admin_control(
    ledger: ClaimLedger = Depends(get_ledger),
    orchestrator: ClaimOrchestrator = Depends(get_orchestrator),
    app_settings: Settings = Depends(get_settings),
) -> AdminControl:
    return AdminControl(ledger, orchestrator, admin_pin=app_settings.admin_pin)
