from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from provider_verifier.model.contract import Contract, Interaction


class InteractionId(BaseModel):
    """Identifies one interaction of one consumer in reports."""

    model_config = ConfigDict(frozen=True)

    consumer: str = Field()
    description: str = Field()

    @property
    def display_name(self) -> str:
        return f"{self.description}({self.consumer})"

    def __str__(self) -> str:
        return self.display_name


class SuiteDescription(BaseModel):
    """Describes a whole verification run: the consumer and its interactions, in contract order."""

    model_config = ConfigDict(frozen=True)

    name: str = Field()
    children: Tuple[InteractionId, ...] = Field(default_factory=tuple)


def describe_interaction(consumer_name: str, interaction: Interaction) -> InteractionId:
    return InteractionId(consumer=consumer_name, description=interaction.description)


def describe_contract(contract: Contract) -> SuiteDescription:
    consumer_name = contract.consumer.name
    return SuiteDescription(
        name=consumer_name,
        children=tuple(describe_interaction(consumer_name, i) for i in contract.interactions),
    )
