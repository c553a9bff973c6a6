"""PIN-gated admin operations over the claim ledger"""

import logging
import secrets
from typing import Any, Dict, List, Optional

from airtime_gateway.domain.claims import ClaimOrchestrator
from airtime_gateway.domain.exceptions import ForbiddenError, ValidationError
from airtime_gateway.domain.ledger import ClaimLedger
from airtime_gateway.domain.models import ClaimResult, TransactionRecord
from airtime_gateway.infrastructure.observability.metrics import record_site_state

logger = logging.getLogger(__name__)


def serialize_record(record: TransactionRecord) -> Dict[str, Any]:
    return {
        "timestamp": record.timestamp.isoformat(),
        "network": record.network.value,
        "phoneNumber": record.phone_number,
        "amount": record.amount,
        "status": record.status.value,
    }


class AdminControl:
    """
    Admin control surface.

    The PIN is re-checked on every call (no sessions). A wrong or missing PIN
    raises ForbiddenError before any state is read or changed.
    """

    def __init__(self, ledger: ClaimLedger, orchestrator: ClaimOrchestrator, admin_pin: Optional[str]):
        self.ledger = ledger
        self.orchestrator = orchestrator
        self.admin_pin = admin_pin

    def _pin_matches(self, pin: Optional[str]) -> bool:
        if not self.admin_pin or not pin:
            return False
        return secrets.compare_digest(pin.encode("utf-8"), self.admin_pin.encode("utf-8"))

    def _require_pin(self, pin: Optional[str]) -> None:
        if not self._pin_matches(pin):
            logger.warning("Rejected admin request with invalid PIN")
            raise ForbiddenError("Invalid admin PIN.")

    def login(self, pin: Optional[str]) -> ClaimResult:
        if not self._pin_matches(pin):
            logger.warning("Failed admin login attempt")
            return ClaimResult(status_code=401, success=False, message="Invalid PIN.")
        return ClaimResult(status_code=200, success=True, message="Login successful.")

    def get_state(self, pin: Optional[str]) -> Dict[str, Any]:
        self._require_pin(pin)
        state, total_today = self.ledger.state_with_total()
        return {
            "isOnline": state.is_online,
            "claimLimit": state.claim_limit,
            "claimsToday": state.claims_today,
            "totalAmountToday": total_today,
        }

    def get_history(self, pin: Optional[str]) -> List[Dict[str, Any]]:
        self._require_pin(pin)
        return [serialize_record(r) for r in self.ledger.history()]

    def toggle_site(self, pin: Optional[str]) -> ClaimResult:
        self._require_pin(pin)
        is_online = self.ledger.toggle_online()
        record_site_state(self.ledger.snapshot())
        logger.info(f"Site switched {'online' if is_online else 'offline'} by admin")
        return ClaimResult(
            status_code=200,
            success=True,
            message=f"Site is now {'online' if is_online else 'offline'}.",
            data={"isOnline": is_online},
        )

    def set_limit(self, pin: Optional[str], limit: Optional[int]) -> ClaimResult:
        self._require_pin(pin)
        if limit is None:
            raise ValidationError("Missing required field: limit.")
        self.ledger.set_limit(limit)
        logger.info(f"Daily claim limit set to {limit} by admin")
        return ClaimResult(
            status_code=200,
            success=True,
            message=f"Daily claim limit set to {limit}.",
            data={"claimLimit": limit},
        )

    def reset_count(self, pin: Optional[str]) -> ClaimResult:
        self._require_pin(pin)
        self.ledger.reset_count()
        record_site_state(self.ledger.snapshot())
        logger.info("Daily claim count reset by admin")
        return ClaimResult(
            status_code=200,
            success=True,
            message="Daily claim count has been reset.",
            data={"claimsToday": 0},
        )

    async def admin_send(
        self,
        pin: Optional[str],
        network: Optional[str],
        phone_number: Optional[str],
        api_key: Optional[str],
    ) -> ClaimResult:
        self._require_pin(pin)
        return await self.orchestrator.admin_send(network, phone_number, api_key)
