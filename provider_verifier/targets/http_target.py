import logging
from typing import Optional

import httpx

from provider_verifier.matching.classifier import MismatchClassifier
from provider_verifier.model.contract import Interaction
from provider_verifier.provider_client import ProviderClient, ProviderEndpoint
from provider_verifier.settings import DEFAULT_PROVIDER_HOST, Settings
from provider_verifier.targets.target import Target

logger = logging.getLogger(__name__)


class HttpTarget(Target):
    """
    Runs interactions against an HTTP provider and verifies its responses.

    Attributes:
        endpoint (ProviderEndpoint): Where the provider under test is listening.
        client (ProviderClient): Sends the recorded requests.
        classifier (MismatchClassifier): Compares the responses.
    """

    def __init__(
        self,
        port: int,
        host: str = DEFAULT_PROVIDER_HOST,
        scheme: str = "http",
        base_path: str = "",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.endpoint = ProviderEndpoint(host=host, port=port, scheme=scheme, base_path=base_path)
        self.client = ProviderClient(http_client=http_client, timeout=timeout)
        self.classifier = MismatchClassifier()
        self.logger = logger

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "HttpTarget":
        """Builds a target for the provider configured through PROVIDER_* environment variables."""
        settings = settings or Settings()
        endpoint = ProviderEndpoint.from_settings(settings)
        return cls(
            port=endpoint.port,
            host=endpoint.host,
            scheme=endpoint.scheme,
            timeout=settings.get_request_timeout(),
            **kwargs,
        )

    async def test_interaction(self, interaction: Interaction) -> None:
        actual = await self.client.send(interaction.request, self.endpoint)
        mismatches = self.classifier.compare(interaction.response, actual)
        self.assert_no_mismatches(interaction, mismatches)

    def __repr__(self) -> str:
        return f"<HttpTarget({self.endpoint.base_url})>"
