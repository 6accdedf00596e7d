import json

import httpx
import pytest
from provider_verifier.exceptions import TransportError
from provider_verifier.model import ExpectedRequest
from provider_verifier.provider_client import ProviderClient, ProviderEndpoint
from provider_verifier.settings import Settings


@pytest.fixture
def endpoint() -> ProviderEndpoint:
    return ProviderEndpoint(host="localhost", port=8080)


def test_endpoint_urls():
    endpoint = ProviderEndpoint(host="api.internal", port=443, scheme="https", base_path="/v1/")

    assert endpoint.base_url == "https://api.internal:443/v1"
    assert endpoint.url_for("/users/42") == "https://api.internal:443/v1/users/42"
    assert endpoint.url_for("users") == "https://api.internal:443/v1/users"


def test_endpoint_from_settings(monkeypatch):
    monkeypatch.setenv("PROVIDER_HOST", "provider.internal")
    monkeypatch.setenv("PROVIDER_PORT", "9000")
    monkeypatch.setenv("PROVIDER_SCHEME", "https")

    endpoint = ProviderEndpoint.from_settings(Settings())

    assert endpoint.base_url == "https://provider.internal:9000"


def test_endpoint_from_settings_requires_port():
    with pytest.raises(ValueError, match="PROVIDER_PORT"):
        ProviderEndpoint.from_settings()


def test_timeout_defaults_to_settings(monkeypatch):
    monkeypatch.setenv("PROVIDER_REQUEST_TIMEOUT", "3")

    assert ProviderClient().timeout == 3.0
    assert ProviderClient(timeout=0.5).timeout == 0.5


@pytest.mark.asyncio
async def test_send_replays_request(mock_provider, endpoint):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["content_type"] = request.headers.get("content-type")
        captured["accept"] = request.headers.get("accept")
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": 7}, headers={"X-Request-Id": "abc"})

    request = ExpectedRequest(
        method="POST",
        path="/users",
        query={"notify": ["email", "sms"]},
        headers={"Accept": "application/json"},
        body={"name": "Ada"},
    )
    client = ProviderClient(http_client=mock_provider(handler))

    actual = await client.send(request, endpoint)

    assert captured == {
        "method": "POST",
        "url": "http://localhost:8080/users?notify=email&notify=sms",
        "content_type": "application/json",
        "accept": "application/json",
        "body": {"name": "Ada"},
    }
    assert actual.status == 201
    assert json.loads(actual.body) == {"id": 7}
    assert actual.headers["x-request-id"] == "abc"


@pytest.mark.asyncio
async def test_declared_content_type_is_sent(mock_provider, endpoint):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["content_type"] = request.headers.get("content-type")
        captured["body"] = request.content
        return httpx.Response(204)

    request = ExpectedRequest(method="PUT", path="/notes/1", body="hello", content_type="text/plain")
    client = ProviderClient(http_client=mock_provider(handler))

    actual = await client.send(request, endpoint)

    assert captured == {"content_type": "text/plain", "body": b"hello"}
    assert actual.status == 204
    assert actual.body is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 404, 500, 503])
async def test_error_statuses_are_results(mock_provider, endpoint, status):
    client = ProviderClient(http_client=mock_provider(lambda request: httpx.Response(status, text="nope")))

    actual = await client.send(ExpectedRequest(path="/users/42"), endpoint)

    assert actual.status == status
    assert actual.body == "nope"


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error(mock_provider, endpoint):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ProviderClient(http_client=mock_provider(handler))

    with pytest.raises(TransportError) as exc_info:
        await client.send(ExpectedRequest(path="/users/42"), endpoint)

    assert "ConnectError" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_raises_transport_error(mock_provider, endpoint):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = ProviderClient(http_client=mock_provider(handler), timeout=1.5)

    with pytest.raises(TransportError, match="Timed out after 1.5s"):
        await client.send(ExpectedRequest(path="/users/42"), endpoint)


@pytest.mark.asyncio
async def test_unsendable_path_raises_transport_error(mock_provider, endpoint):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("request should never reach the provider")

    client = ProviderClient(http_client=mock_provider(handler))

    with pytest.raises(TransportError, match="Cannot send request") as exc_info:
        await client.send(ExpectedRequest(path="/a b\x00"), endpoint)

    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
