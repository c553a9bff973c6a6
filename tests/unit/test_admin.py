"""Unit tests for the PIN-gated admin control surface"""

import pytest
from unittest.mock import AsyncMock

from airtime_gateway.domain.admin import AdminControl
from airtime_gateway.domain.claims import ClaimOrchestrator
from airtime_gateway.domain.exceptions import ForbiddenError, ValidationError
from airtime_gateway.domain.ledger import ClaimLedger

PIN = "4321"


def test_login(admin: AdminControl):
    assert admin.login(PIN).status_code == 200
    result = admin.login("0000")
    assert result.status_code == 401
    assert result.success is False


def test_unset_pin_forbids_everything(ledger: ClaimLedger, orchestrator: ClaimOrchestrator):
    admin = AdminControl(ledger, orchestrator, admin_pin=None)
    assert admin.login("").status_code == 401
    with pytest.raises(ForbiddenError):
        admin.get_state(None)


@pytest.mark.parametrize("pin", [None, "", "0000", "43210"])
def test_wrong_pin_leaves_state_unchanged(admin: AdminControl, ledger: ClaimLedger, pin):
    before = ledger.snapshot()

    with pytest.raises(ForbiddenError):
        admin.toggle_site(pin)
    with pytest.raises(ForbiddenError):
        admin.set_limit(pin, 99)
    with pytest.raises(ForbiddenError):
        admin.reset_count(pin)
    with pytest.raises(ForbiddenError):
        admin.get_history(pin)

    assert ledger.snapshot() == before


async def test_wrong_pin_blocks_admin_send(admin: AdminControl, provider_client: AsyncMock):
    with pytest.raises(ForbiddenError):
        await admin.admin_send("bad", "MTN", "08012345678", "key")
    provider_client.submit.assert_not_called()


async def test_state_reports_policy_and_todays_total(admin: AdminControl, orchestrator: ClaimOrchestrator):
    await orchestrator.handle_claim("MTN", "08012345678", None, "key")
    await admin.admin_send(PIN, "Glo", "08112345678", "key")

    assert admin.get_state(PIN) == {
        "isOnline": True,
        "claimLimit": 3,
        "claimsToday": 1,
        "totalAmountToday": 200,
    }


async def test_history_lists_records_newest_first(admin: AdminControl, orchestrator: ClaimOrchestrator):
    await orchestrator.handle_claim("MTN", "08012345678", None, "key")
    await admin.admin_send(PIN, "Glo", "08112345678", "key")

    history = admin.get_history(PIN)

    assert [h["status"] for h in history] == ["SuccessAdmin", "Success"]
    assert history[0]["network"] == "Glo"
    assert history[0]["phoneNumber"] == "08112345678"
    assert history[0]["amount"] == 100


def test_toggle_site_flips_flag(admin: AdminControl, ledger: ClaimLedger):
    result = admin.toggle_site(PIN)
    assert result.data == {"isOnline": False}
    assert ledger.snapshot().is_online is False
    admin.toggle_site(PIN)
    assert ledger.snapshot().is_online is True


def test_set_limit(admin: AdminControl, ledger: ClaimLedger):
    admin.set_limit(PIN, 10)
    assert ledger.snapshot().claim_limit == 10

    with pytest.raises(ValidationError):
        admin.set_limit(PIN, -5)
    with pytest.raises(ValidationError):
        admin.set_limit(PIN, None)
    assert ledger.snapshot().claim_limit == 10


async def test_reset_count(admin: AdminControl, ledger: ClaimLedger, orchestrator: ClaimOrchestrator):
    await orchestrator.handle_claim("MTN", "08012345678", None, "key")
    admin.reset_count(PIN)
    assert ledger.snapshot().claims_today == 0
