import os

import httpx
import pytest
from provider_verifier.exceptions import TransportError, VerificationFailure
from provider_verifier.matching import HeaderMismatch, StatusMismatch
from provider_verifier.targets import HttpTarget


def test_defaults_to_localhost():
    target = HttpTarget(port=8080)

    assert target.endpoint.base_url == "http://localhost:8080"
    assert repr(target) == "<HttpTarget(http://localhost:8080)>"


def test_from_settings(monkeypatch):
    monkeypatch.setenv("PROVIDER_PORT", "5000")
    monkeypatch.setenv("PROVIDER_REQUEST_TIMEOUT", "4")

    target = HttpTarget.from_settings()

    assert target.endpoint.base_url == "http://localhost:5000"
    assert target.client.timeout == 4.0


@pytest.mark.asyncio
async def test_matching_response_passes(mock_provider, make_interaction):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": 42}, headers={"Cache-Control": "no-cache"})

    target = HttpTarget(port=8080, http_client=mock_provider(handler))
    interaction = make_interaction(body={"id": 42}, headers={"Cache-Control": "no-cache"})

    await target.test_interaction(interaction)


@pytest.mark.asyncio
async def test_every_mismatch_is_reported(mock_provider, make_interaction):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    target = HttpTarget(port=8080, http_client=mock_provider(handler))
    interaction = make_interaction(status=200, headers={"X-Version": "2"})

    with pytest.raises(VerificationFailure) as exc_info:
        await target.test_interaction(interaction)

    failure = exc_info.value
    assert failure.interaction is interaction
    assert [type(m) for m in failure.mismatches] == [StatusMismatch, HeaderMismatch]
    assert str(failure).split(os.linesep)[1:] == [
        "StatusMismatch - Expected status 200 but was 500",
        "HeaderMismatch - Expected a header 'X-Version' but was missing",
    ]


@pytest.mark.asyncio
async def test_unreachable_provider_raises_transport_error(mock_provider, make_interaction):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    target = HttpTarget(port=8080, http_client=mock_provider(handler))

    with pytest.raises(TransportError):
        await target.test_interaction(make_interaction())
