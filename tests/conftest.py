"""Pytest fixtures for testing"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from airtime_gateway.api.main import create_app
from airtime_gateway.config import Settings
from airtime_gateway.domain.admin import AdminControl
from airtime_gateway.domain.claims import ClaimOrchestrator
from airtime_gateway.domain.ledger import ClaimLedger
from airtime_gateway.domain.models import Succeeded
from airtime_gateway.infrastructure.clients.provider import ProviderClient

ADMIN_PIN = "4321"
ADMIN_PHONE = "08099990000"
API_KEY = "test-token"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the host environment and .env file"""
    return Settings(
        _env_file=None,
        api_key=API_KEY,
        provider_url="http://provider.test/api/topup/",
        admin_phone=ADMIN_PHONE,
        admin_pin=ADMIN_PIN,
        default_claim_limit=3,
        site_online=True,
    )


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create FastAPI test client with a fresh ledger"""
    return TestClient(create_app(test_settings))


@pytest.fixture
def ledger() -> ClaimLedger:
    return ClaimLedger(is_online=True, claim_limit=3)


@pytest.fixture
def provider_client() -> AsyncMock:
    """Provider client whose submit() succeeds unless a test says otherwise"""
    provider = AsyncMock(spec=ProviderClient)
    provider.submit.return_value = Succeeded(
        provider_message="Airtime sent",
        provider_payload={"message": "Airtime sent", "status": "successful"},
    )
    return provider


@pytest.fixture
def orchestrator(ledger: ClaimLedger, provider_client: AsyncMock) -> ClaimOrchestrator:
    return ClaimOrchestrator(ledger, provider_client)


@pytest.fixture
def admin(ledger: ClaimLedger, orchestrator: ClaimOrchestrator) -> AdminControl:
    return AdminControl(ledger, orchestrator, admin_pin=ADMIN_PIN)
