import abc
import logging
from typing import Sequence

from provider_verifier.exceptions import VerificationFailure
from provider_verifier.matching.mismatch import Mismatch
from provider_verifier.model.contract import Interaction


class Target(abc.ABC):
    """The collaborator that actually verifies one interaction against the provider."""

    logger: logging.Logger = logging.getLogger(__name__)

    @abc.abstractmethod
    async def test_interaction(self, interaction: Interaction) -> None:
        """
        Verify a single interaction.

        Args:
            interaction: The interaction to verify.

        Raises:
            VerificationFailure: If the provider's behavior does not match the interaction.
            Exception: Targets may raise other errors (e.g. TransportError) to fail the interaction.
        """
        raise NotImplementedError

    def assert_no_mismatches(self, interaction: Interaction, mismatches: Sequence[Mismatch]) -> None:
        if mismatches:
            failure = VerificationFailure(mismatches, interaction=interaction)
            self.logger.info(f"Interaction '{interaction.description}' failed verification:{failure.report}")
            raise failure

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
