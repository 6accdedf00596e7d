from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from provider_verifier.model.http import ExpectedRequest, ExpectedResponse


class Pacticipant(BaseModel):
    """A named party to a contract, either the consumer or the provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field()


class Interaction(BaseModel):
    """One expected request/response exchange, optionally gated by a provider state."""

    model_config = ConfigDict(frozen=True)

    description: str = Field()
    provider_state: Optional[str] = Field(default=None)
    request: ExpectedRequest = Field(default_factory=ExpectedRequest)
    response: ExpectedResponse = Field(default_factory=ExpectedResponse)

    @field_validator("provider_state", mode="before")
    @classmethod
    def blank_state_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def key(self) -> Tuple[str, Optional[str]]:
        """Structural identity of the interaction, usable as a mapping key."""
        return (self.description, self.provider_state)


class Contract(BaseModel):
    """A consumer's recorded expectations of a provider, as an ordered set of interactions."""

    model_config = ConfigDict(frozen=True)

    consumer: Pacticipant = Field()
    provider: Pacticipant = Field()
    interactions: Tuple[Interaction, ...] = Field(default_factory=tuple)
