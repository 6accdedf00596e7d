"""Contract data model: contracts, interactions, and expected/actual HTTP messages."""

from .contract import Contract, Interaction, Pacticipant
from .http import ActualResponse, ExpectedRequest, ExpectedResponse, MatchingRule, get_header

__all__ = [
    "ActualResponse",
    "Contract",
    "ExpectedRequest",
    "ExpectedResponse",
    "Interaction",
    "MatchingRule",
    "Pacticipant",
    "get_header",
]
