"""Claim orchestration - validate, admit, call the provider, record"""

import logging
from typing import Optional

from airtime_gateway.domain.exceptions import ConfigurationError, ValidationError
from airtime_gateway.domain.ledger import ClaimLedger
from airtime_gateway.domain.models import (
    AdmissionReason,
    ClaimOutcome,
    ClaimResult,
    ClaimStatus,
    ProviderRejected,
    RequestSetupFailed,
    Succeeded,
    TransactionRecord,
    Unreachable,
    ValidatedRequest,
)
from airtime_gateway.domain.validation import validate
from airtime_gateway.infrastructure.clients.provider import ProviderClient
from airtime_gateway.infrastructure.observability.metrics import record_claim, record_site_state
from airtime_gateway.utils.date_utils import utc_now

logger = logging.getLogger(__name__)

SITE_OFFLINE_MESSAGE = "Airtime claims are currently closed. Please check back later."
QUOTA_EXCEEDED_MESSAGE = "Today's airtime claim limit has been reached. Please try again tomorrow."
CONFIGURATION_ERROR_MESSAGE = "Server configuration error. Unable to process request."
UNREACHABLE_MESSAGE = "Airtime provider is unreachable. Please try again later."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


class ClaimOrchestrator:
    """End-to-end claim flow over a shared ledger and provider client"""

    def __init__(self, ledger: ClaimLedger, provider_client: ProviderClient):
        self.ledger = ledger
        self.provider_client = provider_client

    async def handle_claim(
        self,
        network: Optional[str],
        phone_number: Optional[str],
        admin_phone: Optional[str],
        api_key: Optional[str],
    ) -> ClaimResult:
        """
        Public claim flow.

        Flow:
        1. Validate input (no ledger access on failure)
        2. Require a configured API key
        3. Admit and reserve a quota slot atomically
        4. Submit to the provider
        5. Record success, or release the slot and map the failure
        """
        try:
            request = validate(network, phone_number)
        except ValidationError as e:
            record_claim("invalid")
            return ClaimResult(status_code=400, success=False, message=str(e))

        if not api_key:
            return self._configuration_error()

        decision = self.ledger.admit(request.phone_number, admin_phone)
        if decision.reason is AdmissionReason.SITE_OFFLINE:
            record_claim("site_offline")
            logger.info(f"Claim for {request.phone_number} denied: site offline")
            return ClaimResult(status_code=503, success=False, message=SITE_OFFLINE_MESSAGE)
        if decision.reason is AdmissionReason.QUOTA_EXCEEDED:
            record_claim("quota_exceeded")
            logger.info(f"Claim for {request.phone_number} denied: daily quota reached")
            return ClaimResult(status_code=429, success=False, message=QUOTA_EXCEEDED_MESSAGE)

        counts_toward_quota = decision.reason is not AdmissionReason.ADMIN_BYPASS
        recorded = False
        try:
            outcome = await self._submit(request, api_key)
            if isinstance(outcome, Succeeded):
                self._record(request, ClaimStatus.SUCCESS, counts_toward_quota)
                recorded = True
        except ConfigurationError:
            return self._configuration_error()
        finally:
            if counts_toward_quota and not recorded:
                self.ledger.release()

        outcome_label = "success" if counts_toward_quota else "success_bypass"
        return self._to_result(outcome, outcome_label)

    async def admin_send(
        self,
        network: Optional[str],
        phone_number: Optional[str],
        api_key: Optional[str],
    ) -> ClaimResult:
        """Send airtime bypassing the admission policy; never counts toward quota"""
        try:
            request = validate(network, phone_number)
        except ValidationError as e:
            return ClaimResult(status_code=400, success=False, message=str(e))

        try:
            outcome = await self._submit(request, api_key)
        except ConfigurationError:
            return self._configuration_error()

        if isinstance(outcome, Succeeded):
            self._record(request, ClaimStatus.SUCCESS_ADMIN, counts_toward_quota=False)
        return self._to_result(outcome, "success_admin")

    async def _submit(self, request: ValidatedRequest, api_key: Optional[str]) -> ClaimOutcome:
        logger.info(f"Attempting to send N100 airtime to {request.phone_number} on {request.network.value}")
        return await self.provider_client.submit(request, api_key)

    def _record(self, request: ValidatedRequest, status: ClaimStatus, counts_toward_quota: bool) -> None:
        record = TransactionRecord(
            timestamp=utc_now(),
            network=request.network,
            phone_number=request.phone_number,
            status=status,
        )
        self.ledger.record_success(record, counts_toward_quota=counts_toward_quota)
        record_site_state(self.ledger.snapshot())

    def _configuration_error(self) -> ClaimResult:
        logger.error("FATAL: API_KEY is not configured on the server.")
        record_claim("configuration_error")
        return ClaimResult(status_code=500, success=False, message=CONFIGURATION_ERROR_MESSAGE)

    @staticmethod
    def _to_result(outcome: ClaimOutcome, success_label: str) -> ClaimResult:
        """Map a provider outcome onto the response contract"""
        if isinstance(outcome, Succeeded):
            record_claim(success_label)
            logger.info(f"Airtime sent. Provider response: {outcome.provider_payload}")
            return ClaimResult(
                status_code=200,
                success=True,
                message=outcome.provider_message,
                data=outcome.provider_payload,
            )
        if isinstance(outcome, ProviderRejected):
            record_claim("provider_rejected")
            return ClaimResult(status_code=outcome.status_code, success=False, message=outcome.message)
        if isinstance(outcome, Unreachable):
            record_claim("unreachable")
            return ClaimResult(status_code=503, success=False, message=UNREACHABLE_MESSAGE)
        if isinstance(outcome, RequestSetupFailed):
            record_claim("setup_failed")
            return ClaimResult(status_code=500, success=False, message=INTERNAL_ERROR_MESSAGE)
        raise TypeError(f"Unknown claim outcome: {outcome!r}")
