"""Unit tests for provider call and outcome classification"""

import json

import httpx
import pytest

from airtime_gateway.domain.exceptions import ConfigurationError
from airtime_gateway.domain.models import (
    Network,
    ProviderRejected,
    RequestSetupFailed,
    Succeeded,
    Unreachable,
    ValidatedRequest,
)
from airtime_gateway.infrastructure.clients.provider import ProviderClient

PROVIDER_URL = "http://provider.test/api/topup/"
REQUEST = ValidatedRequest(network=Network.GLO, phone_number="08112345678")


def make_client(handler) -> ProviderClient:
    return ProviderClient(base_url=PROVIDER_URL, timeout=2.0, transport=httpx.MockTransport(handler))


async def test_submit_sends_fixed_payload_and_token():
    """Payload policy constants and auth header are not caller-supplied"""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": "Done"})

    await make_client(handler).submit(REQUEST, "secret")

    assert seen["auth"] == "Token secret"
    assert seen["body"] == {
        "network": 2,
        "mobile_number": "08112345678",
        "amount": 100,
        "airtime_type": "VTU",
        "Ported_number": True,
    }


async def test_submit_success_carries_message_and_payload():
    payload = {"message": "Airtime sent", "id": "tx_1"}
    outcome = await make_client(lambda r: httpx.Response(201, json=payload)).submit(REQUEST, "key")

    assert outcome == Succeeded(provider_message="Airtime sent", provider_payload=payload)


async def test_submit_success_without_message_uses_default():
    outcome = await make_client(lambda r: httpx.Response(200, json={"id": "tx_1"})).submit(REQUEST, "key")

    assert isinstance(outcome, Succeeded)
    assert outcome.provider_message == "Airtime request processed successfully!"


async def test_rejection_uses_detail_field():
    outcome = await make_client(
        lambda r: httpx.Response(422, json={"detail": "Insufficient wallet balance"})
    ).submit(REQUEST, "key")

    assert outcome == ProviderRejected(status_code=422, message="Insufficient wallet balance")


async def test_rejection_falls_back_to_message_field():
    outcome = await make_client(
        lambda r: httpx.Response(400, json={"message": "Invalid network id"})
    ).submit(REQUEST, "key")

    assert outcome == ProviderRejected(status_code=400, message="Invalid network id")


async def test_rejection_without_usable_body_uses_generic_message():
    outcome = await make_client(lambda r: httpx.Response(500, text="<html>oops</html>")).submit(REQUEST, "key")

    assert outcome == ProviderRejected(status_code=500, message="An error occurred with the airtime provider.")


async def test_503_with_no_body_is_unreachable():
    outcome = await make_client(lambda r: httpx.Response(503)).submit(REQUEST, "key")
    assert isinstance(outcome, Unreachable)


async def test_503_with_detail_is_a_rejection():
    outcome = await make_client(
        lambda r: httpx.Response(503, json={"detail": "Maintenance window"})
    ).submit(REQUEST, "key")

    assert outcome == ProviderRejected(status_code=503, message="Maintenance window")


@pytest.mark.parametrize(
    "error",
    [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError],
)
async def test_transport_failures_are_unreachable(error):
    def handler(request: httpx.Request) -> httpx.Response:
        raise error("boom", request=request)

    outcome = await make_client(handler).submit(REQUEST, "key")
    assert isinstance(outcome, Unreachable)


async def test_request_that_cannot_be_sent_is_setup_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.UnsupportedProtocol("Request URL has an unsupported protocol", request=request)

    outcome = await make_client(handler).submit(REQUEST, "key")
    assert isinstance(outcome, RequestSetupFailed)


async def test_missing_api_key_fails_before_any_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(ConfigurationError):
        await make_client(handler).submit(REQUEST, None)
    assert calls == []


async def test_success_with_list_body_keeps_raw_payload():
    outcome = await make_client(lambda r: httpx.Response(200, json=[{"ref": "tx_9"}])).submit(REQUEST, "key")

    assert outcome == Succeeded(
        provider_message="Airtime request processed successfully!",
        provider_payload=[{"ref": "tx_9"}],
    )


async def test_success_with_text_body_keeps_raw_text():
    outcome = await make_client(lambda r: httpx.Response(200, text="QUEUED ref=tx_9")).submit(REQUEST, "key")

    assert outcome == Succeeded(
        provider_message="Airtime request processed successfully!",
        provider_payload="QUEUED ref=tx_9",
    )


async def test_success_with_empty_body_has_no_payload():
    outcome = await make_client(lambda r: httpx.Response(204)).submit(REQUEST, "key")

    assert outcome == Succeeded(provider_message="Airtime request processed successfully!", provider_payload=None)
