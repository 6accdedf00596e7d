# Provider Verification Exceptions

from typing import TYPE_CHECKING, Optional, Sequence

from provider_verifier.matching.mismatch import Mismatch
from provider_verifier.matching.report import render_report

if TYPE_CHECKING:
    from provider_verifier.model.contract import Interaction


class ProviderVerificationError(Exception):
    """Base exception for all provider verification errors.

    Attributes:
        interaction (Optional[Interaction]): The interaction being verified when the
            error occurred, if known.
        detail (Optional[str]): A detailed error message. If not provided directly
            during initialization but other arguments are, the first positional
            argument is used as the detail.
    """

    def __init__(self, *args, interaction: Optional["Interaction"] = None, detail: str | None = None):
        super().__init__(*args)
        self.interaction = interaction
        self.detail = detail or (args[0] if args else None)


class ValidationError(ProviderVerificationError):
    """Raised before any interaction runs when the verification suite is misconfigured.

    All problems found are collected in `errors`, so a single failed run reports
    every configuration mistake at once.
    """

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        message = "Verification suite is misconfigured:" + "".join(f"\n  - {e}" for e in self.errors)
        super().__init__(message)


class TransportError(ProviderVerificationError):
    """The provider could not be reached, timed out, or returned a malformed response."""

    pass


class StateSetupError(ProviderVerificationError):
    """A provider state handler raised while setting up an interaction."""

    def __init__(self, state: str, cause: BaseException, interaction: Optional["Interaction"] = None):
        self.state = state
        self.cause = cause
        super().__init__(
            f"Failed to set up provider state '{state}': {cause.__class__.__name__}: {cause}",
            interaction=interaction,
        )
        self.__cause__ = cause


class VerificationFailure(AssertionError, ProviderVerificationError):
    """The actual response did not satisfy the interaction's expected response.

    `str(error)` is the rendered report: one line per mismatch, each preceded by a
    line separator.
    """

    def __init__(self, mismatches: Sequence[Mismatch], interaction: Optional["Interaction"] = None):
        self.mismatches = list(mismatches)
        self.report = render_report(self.mismatches)
        ProviderVerificationError.__init__(self, self.report, interaction=interaction)


class UnexpectedFault(ProviderVerificationError):
    """Wraps any other error raised by hooks, rules or test construction."""

    def __init__(self, cause: BaseException, stage: str, interaction: Optional["Interaction"] = None):
        self.cause = cause
        self.stage = stage
        super().__init__(
            f"Unexpected error during {stage}: {cause.__class__.__name__}: {cause}",
            interaction=interaction,
        )
        self.__cause__ = cause


class MultipleFailuresError(ProviderVerificationError):
    """More than one failure occurred while running a single interaction."""

    def __init__(self, errors: Sequence[BaseException], interaction: Optional["Interaction"] = None):
        self.errors = list(errors)
        message = f"There were {len(self.errors)} errors:" + "".join(
            f"\n  {e.__class__.__name__}({e})" for e in self.errors
        )
        super().__init__(message, interaction=interaction)


class ProviderMethodNotFoundError(ProviderVerificationError):
    """No provider method is registered for a message interaction."""

    pass
