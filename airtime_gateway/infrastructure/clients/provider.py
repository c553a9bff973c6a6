"""Airtime provider HTTP client for submitting top-ups"""

import logging
from typing import Any, Dict, Optional

import httpx

from airtime_gateway.config import settings
from airtime_gateway.domain.exceptions import ConfigurationError
from airtime_gateway.domain.models import (
    AIRTIME_AMOUNT,
    ClaimOutcome,
    ProviderRejected,
    RequestSetupFailed,
    Succeeded,
    Unreachable,
    ValidatedRequest,
)
from airtime_gateway.infrastructure.observability.metrics import (
    provider_failures_counter,
    provider_latency_histogram,
)

logger = logging.getLogger(__name__)

# Fixed payload policy, not caller-supplied
AIRTIME_TYPE = "VTU"
PORTED_NUMBER = True

DEFAULT_SUCCESS_MESSAGE = "Airtime request processed successfully!"
DEFAULT_REJECTION_MESSAGE = "An error occurred with the airtime provider."

# Gateway statuses that, with no usable body, mean the provider never answered
GATEWAY_FAILURE_STATUSES = {502, 503, 504}


def build_payload(request: ValidatedRequest) -> Dict[str, Any]:
    return {
        "network": request.network.provider_id,
        "mobile_number": request.phone_number,
        "amount": AIRTIME_AMOUNT,
        "airtime_type": AIRTIME_TYPE,
        "Ported_number": PORTED_NUMBER,
    }


def _json_body(response: httpx.Response) -> Optional[Any]:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def classify_response(response: httpx.Response) -> ClaimOutcome:
    """Map a received provider response onto a claim outcome"""
    body = _json_body(response)

    if response.is_success:
        payload = body if body is not None else (response.text or None)
        message = body.get("message") if isinstance(body, dict) else None
        return Succeeded(
            provider_message=str(message) if message else DEFAULT_SUCCESS_MESSAGE,
            provider_payload=payload,
        )

    if body is None and response.status_code in GATEWAY_FAILURE_STATUSES:
        return Unreachable()

    message = None
    if isinstance(body, dict):
        message = body.get("detail") or body.get("message")
    return ProviderRejected(
        status_code=response.status_code,
        message=str(message) if message else DEFAULT_REJECTION_MESSAGE,
    )


class ProviderClient:
    """Client for the external airtime top-up API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.provider_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def submit(self, request: ValidatedRequest, api_key: Optional[str]) -> ClaimOutcome:
        """
        Send a fixed-amount top-up to the provider and classify the result.

        Raises:
            ConfigurationError: No API key configured; nothing is sent
        """
        if not api_key:
            raise ConfigurationError("API_KEY is not configured on the server.")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Token {api_key}",
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with provider_latency_histogram.time():
                    response = await client.post(self.base_url, json=build_payload(request), headers=headers)

            except (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError) as e:
                provider_failures_counter.labels(kind="setup_failed").inc()
                logger.error(f"Error setting up the provider request: {e}")
                return RequestSetupFailed(message=str(e))

            except httpx.RequestError as e:
                provider_failures_counter.labels(kind="unreachable").inc()
                logger.error(
                    f"No response received from airtime provider for request to {request.phone_number}: {e!r}"
                )
                return Unreachable()

        outcome = classify_response(response)
        if isinstance(outcome, Unreachable):
            provider_failures_counter.labels(kind="unreachable").inc()
            logger.error(
                f"Provider gateway returned {response.status_code} with no body for {request.phone_number}"
            )
        elif isinstance(outcome, ProviderRejected):
            provider_failures_counter.labels(kind="rejected").inc()
            logger.warning(
                f"Provider error: status {outcome.status_code} for {request.phone_number}. "
                f"Message: {outcome.message}"
            )
        return outcome
