# Runs every interaction of a contract against the provider and reports the outcomes.

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from provider_verifier.chain import ExecutionChainBuilder, Step, as_failure
from provider_verifier.description import InteractionId, SuiteDescription, describe_contract, describe_interaction
from provider_verifier.exceptions import UnexpectedFault, ValidationError
from provider_verifier.model.contract import Contract, Interaction
from provider_verifier.notifier import LoggingReporter, RunNotifier
from provider_verifier.suite import VerificationSuite

logger = logging.getLogger(__name__)


class InteractionStatus(str, Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    PASSED = "passed"
    FAILED = "failed"
    FINISHED = "finished"


@dataclass
class InteractionOutcome:
    """What happened to one interaction.

    Attributes:
        test_id: The id the interaction was reported under.
        interaction: The interaction itself.
        result: PASSED or FAILED.
        error: The failure cause when the interaction failed.
        transitions: Every state the interaction went through, in order.
    """

    test_id: InteractionId
    interaction: Interaction
    result: InteractionStatus
    error: Optional[Exception] = None
    transitions: List[InteractionStatus] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.result == InteractionStatus.PASSED


class InteractionRunner:
    """
    Verifies a contract's interactions one at a time, in contract order.

    The suite is validated when the runner is constructed; a misconfigured suite
    raises ValidationError listing every problem before any interaction runs. After
    that, a failing interaction is reported and the run moves on to the next one.
    """

    def __init__(
        self,
        contract: Contract,
        suite: VerificationSuite,
        chain_builder: Optional[ExecutionChainBuilder] = None,
    ):
        self.contract = contract
        self.suite = suite
        self.chain_builder = chain_builder or ExecutionChainBuilder()
        self._cancelled = False
        self.validate()

    # --- Validation ---
    def validate(self) -> None:
        errors = self.suite.validate()
        if errors:
            logger.error(
                f"Verification of {self.contract.consumer.name} -> {self.contract.provider.name} "
                f"aborted: {len(errors)} configuration error(s)"
            )
            raise ValidationError(errors)

    # --- Description ---
    def describe(self) -> SuiteDescription:
        return describe_contract(self.contract)

    def describe_child(self, interaction: Interaction) -> InteractionId:
        return describe_interaction(self.contract.consumer.name, interaction)

    # --- Cancellation ---
    def cancel(self) -> None:
        """Stops scheduling further interactions. An interaction already running is not interrupted."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    # --- Running ---
    async def run(self, notifier: Optional[RunNotifier] = None) -> List[InteractionOutcome]:
        notifier = notifier or RunNotifier([LoggingReporter()])
        interactions = self.contract.interactions
        logger.info(
            f"Verifying {len(interactions)} interactions of {self.contract.consumer.name} "
            f"against {self.contract.provider.name}"
        )
        outcomes: List[InteractionOutcome] = []
        for i, interaction in enumerate(interactions):
            if self._cancelled:
                logger.info(f"Run cancelled; skipping {len(interactions) - i} remaining interactions")
                break
            outcomes.append(await self.run_interaction(interaction, notifier))

        failed = sum(1 for o in outcomes if not o.passed)
        logger.info(f"Verified {len(outcomes)} interactions: {len(outcomes) - failed} passed, {failed} failed")
        return outcomes

    async def run_interaction(self, interaction: Interaction, notifier: RunNotifier) -> InteractionOutcome:
        test_id = self.describe_child(interaction)
        transitions = [InteractionStatus.NOT_STARTED, InteractionStatus.STARTED]
        notifier.fire_test_started(test_id)
        error: Optional[Exception] = None
        try:
            step = self.interaction_block(interaction)
            await step()
            transitions.append(InteractionStatus.PASSED)
        except Exception as e:
            error = as_failure(e, "interaction", interaction)
            transitions.append(InteractionStatus.FAILED)
            notifier.fire_test_failure(test_id, error)
        finally:
            transitions.append(InteractionStatus.FINISHED)
            notifier.fire_test_finished(test_id)
        return InteractionOutcome(
            test_id=test_id,
            interaction=interaction,
            result=transitions[-2],
            error=error,
            transitions=transitions,
        )

    def interaction_block(self, interaction: Interaction) -> Step:
        """Creates a fresh test instance, binds the suite's hooks to it and builds the interaction's chain."""
        try:
            test = self.suite.create_test()
        except Exception as e:
            logger.error(f"Could not create test instance for '{interaction.description}': {e}")
            fault = UnexpectedFault(e, "test construction", interaction=interaction)

            async def fail() -> None:
                raise fault

            return fail

        hooks = self.suite.bind(test)
        return self.chain_builder.build(interaction, hooks, self.suite.verification_target)
