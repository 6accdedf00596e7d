import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from provider_verifier.exceptions import ProviderMethodNotFoundError
from provider_verifier.matching.classifier import MismatchClassifier
from provider_verifier.model.contract import Interaction
from provider_verifier.targets.target import Target
from provider_verifier.utils import call_maybe_async, callable_name

logger = logging.getLogger(__name__)

ProviderMethod = Callable[[], Any]


class MessageTarget(Target):
    """
    Verifies message interactions by invoking provider methods instead of sending HTTP requests.

    Each provider method is registered under the description of the interaction it
    produces a message for. The message it returns is compared against the
    interaction's expected body; status and headers are not checked.
    """

    def __init__(self, providers: Optional[Mapping[str, ProviderMethod]] = None):
        self.providers: Dict[str, ProviderMethod] = dict(providers or {})
        self.classifier = MismatchClassifier()
        self.logger = logger

    def provides(self, description: str) -> Callable[[ProviderMethod], ProviderMethod]:
        """Decorator registering a provider method for the interaction with `description`."""

        def register(fn: ProviderMethod) -> ProviderMethod:
            self.providers[description] = fn
            return fn

        return register

    @staticmethod
    def _as_text(message: Any) -> Optional[str]:
        if message is None:
            return None
        if isinstance(message, (bytes, bytearray)):
            return message.decode("utf-8")
        if isinstance(message, str):
            return message
        return json.dumps(message)

    async def test_interaction(self, interaction: Interaction) -> None:
        provider_method = self.providers.get(interaction.description)
        if provider_method is None:
            raise ProviderMethodNotFoundError(
                f"No provider method registered for message interaction '{interaction.description}'. "
                f"Registered: {list(self.providers.keys())}",
                interaction=interaction,
            )

        self.logger.info(f"Invoking provider method {callable_name(provider_method)} for '{interaction.description}'")
        message = await call_maybe_async(provider_method)
        content_type = interaction.response.content_type
        headers = {"Content-Type": content_type} if content_type else {}
        mismatches = self.classifier.body_mismatches(interaction.response, self._as_text(message), headers)
        self.assert_no_mismatches(interaction, mismatches)

    def __repr__(self) -> str:
        return f"<MessageTarget(providers={list(self.providers.keys())})>"
