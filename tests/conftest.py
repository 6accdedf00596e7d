from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from provider_verifier.description import InteractionId
from provider_verifier.model import Contract, ExpectedRequest, ExpectedResponse, Interaction, Pacticipant

# --- Environment Isolation ---

VERIFIER_ENV_VARS = [
    "PROVIDER_HOST",
    "PROVIDER_PORT",
    "PROVIDER_SCHEME",
    "PROVIDER_REQUEST_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def isolate_verifier_environment(monkeypatch):
    """AUTOUSE: Removes verifier settings a developer's .env may have loaded, so tests see defaults."""
    for name in VERIFIER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


# --- Contract Builders ---


def build_interaction(
    description: str = "a request for user 42",
    provider_state: Optional[str] = None,
    status: int = 200,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    path: str = "/users/42",
    **response_kwargs: Any,
) -> Interaction:
    """Create an interaction with sensible defaults."""
    return Interaction(
        description=description,
        provider_state=provider_state,
        request=ExpectedRequest(method="GET", path=path),
        response=ExpectedResponse(status=status, headers=headers or {}, body=body, **response_kwargs),
    )


@pytest.fixture
def make_interaction() -> Callable[..., Interaction]:
    return build_interaction


@pytest.fixture
def make_contract() -> Callable[..., Contract]:
    def _make(*interactions: Interaction, consumer: str = "web-app", provider: str = "user-service") -> Contract:
        return Contract(
            consumer=Pacticipant(name=consumer),
            provider=Pacticipant(name=provider),
            interactions=interactions,
        )

    return _make


# --- Reporting ---


class RecordingReporter:
    """Records every reporter callback as (event, display name, cause) tuples."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Optional[BaseException]]] = []

    def test_started(self, test_id: InteractionId) -> None:
        self.events.append(("started", test_id.display_name, None))

    def test_failure(self, test_id: InteractionId, cause: BaseException) -> None:
        self.events.append(("failure", test_id.display_name, cause))

    def test_finished(self, test_id: InteractionId) -> None:
        self.events.append(("finished", test_id.display_name, None))

    def names(self) -> List[Tuple[str, str]]:
        return [(event, name) for event, name, _ in self.events]


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()


# --- Fake Provider ---


@pytest.fixture
def mock_provider() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Builds an httpx.AsyncClient whose requests are answered by `handler` instead of the network."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
