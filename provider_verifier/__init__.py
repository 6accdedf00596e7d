"""
Provider contract verification: replays a consumer's recorded interactions against a
running provider and reports every way its responses diverge from the contract.
"""

from .chain import ExecutionChainBuilder, LifecycleHooks, scoped_rule
from .description import InteractionId, SuiteDescription
from .exceptions import (
    MultipleFailuresError,
    ProviderMethodNotFoundError,
    ProviderVerificationError,
    StateSetupError,
    TransportError,
    UnexpectedFault,
    ValidationError,
    VerificationFailure,
)
from .matching import MismatchClassifier, classify, render_report
from .model import ActualResponse, Contract, ExpectedRequest, ExpectedResponse, Interaction, MatchingRule, Pacticipant
from .notifier import LoggingReporter, Reporter, RunNotifier
from .provider_client import ProviderClient, ProviderEndpoint
from .runner import InteractionOutcome, InteractionRunner, InteractionStatus
from .state import StateDispatcher
from .suite import VerificationSuite
from .targets import HttpTarget, MessageTarget, Target

__all__ = [
    "ActualResponse",
    "Contract",
    "ExecutionChainBuilder",
    "ExpectedRequest",
    "ExpectedResponse",
    "HttpTarget",
    "Interaction",
    "InteractionId",
    "InteractionOutcome",
    "InteractionRunner",
    "InteractionStatus",
    "LifecycleHooks",
    "LoggingReporter",
    "MatchingRule",
    "MessageTarget",
    "MismatchClassifier",
    "MultipleFailuresError",
    "Pacticipant",
    "ProviderClient",
    "ProviderEndpoint",
    "ProviderMethodNotFoundError",
    "ProviderVerificationError",
    "Reporter",
    "RunNotifier",
    "StateDispatcher",
    "StateSetupError",
    "SuiteDescription",
    "Target",
    "TransportError",
    "UnexpectedFault",
    "ValidationError",
    "VerificationFailure",
    "VerificationSuite",
    "classify",
    "render_report",
    "scoped_rule",
]
