"""Verification targets: what actually checks an interaction against the provider."""

from .http_target import HttpTarget
from .message_target import MessageTarget
from .target import Target

__all__ = ["HttpTarget", "MessageTarget", "Target"]
