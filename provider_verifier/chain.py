# Builds the ordered, per-interaction execution procedure.

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from provider_verifier.exceptions import MultipleFailuresError, ProviderVerificationError, UnexpectedFault
from provider_verifier.model.contract import Interaction
from provider_verifier.state import Procedure, StateDispatcher
from provider_verifier.targets.target import Target
from provider_verifier.utils import call_maybe_async, callable_name

logger = logging.getLogger(__name__)

# One stage of an interaction's execution; awaiting it runs everything it wraps
Step = Callable[[], Awaitable[None]]

# Wraps the rest of the chain, e.g. to acquire a resource around it
Rule = Callable[[Step, Interaction], Step]


@dataclass
class LifecycleHooks:
    """The hooks applied around one interaction, already bound to that interaction's test instance."""

    rules: List[Rule] = field(default_factory=list)
    befores: List[Procedure] = field(default_factory=list)
    afters: List[Procedure] = field(default_factory=list)
    state_handlers: Dict[str, List[Procedure]] = field(default_factory=dict)


def as_failure(error: Exception, stage: str, interaction: Interaction) -> Exception:
    """Returns `error` if it already belongs to the failure taxonomy, else wraps it in UnexpectedFault."""
    if isinstance(error, (ProviderVerificationError, AssertionError)):
        if isinstance(error, ProviderVerificationError) and error.interaction is None:
            error.interaction = interaction
        return error
    return UnexpectedFault(error, stage, interaction=interaction)


def scoped_rule(factory: Callable[[Interaction], Any]) -> Rule:
    """
    Builds a rule from a context manager factory.

    The factory is called with the interaction and must return a sync or async
    context manager. The rest of the chain runs inside it, so the resource is
    released even when an inner step fails.
    """

    def rule(step: Step, interaction: Interaction) -> Step:
        async def scoped() -> None:
            resource = factory(interaction)
            if hasattr(resource, "__aenter__"):
                async with resource:
                    await step()
            else:
                with resource:
                    await step()

        return scoped

    rule.__qualname__ = f"scoped_rule({callable_name(factory)})"
    return rule


class ExecutionChainBuilder:
    """
    Composes everything that has to happen for one interaction into a single step.

    Awaiting the built step runs, in this fixed order: rules (outermost first),
    before-hooks, provider state setup, the target's verification, and finally the
    after-hooks. A failure skips the remaining before/state/verify stages, but the
    after-hooks always run.
    """

    def __init__(self, dispatcher: Optional[StateDispatcher] = None):
        self.dispatcher = dispatcher or StateDispatcher()

    def build(self, interaction: Interaction, hooks: LifecycleHooks, target: Target) -> Step:
        step = self.verification(interaction, target)
        step = self.with_state_changes(interaction, hooks, step)
        step = self.with_befores(interaction, hooks, step)
        step = self.with_rules(interaction, hooks, step)
        step = self.with_afters(interaction, hooks, step)
        return step

    def verification(self, interaction: Interaction, target: Target) -> Step:
        async def verify() -> None:
            logger.debug(f"Verifying '{interaction.description}' with {target!r}")
            try:
                await target.test_interaction(interaction)
            except Exception as e:
                raise as_failure(e, "verification", interaction)

        return verify

    def with_state_changes(self, interaction: Interaction, hooks: LifecycleHooks, step: Step) -> Step:
        if not interaction.provider_state:
            return step

        async def run_state_changes() -> None:
            try:
                await self.dispatcher.activate(interaction.provider_state, hooks.state_handlers)
            except ProviderVerificationError as e:
                if e.interaction is None:
                    e.interaction = interaction
                raise
            await step()

        return run_state_changes

    def with_befores(self, interaction: Interaction, hooks: LifecycleHooks, step: Step) -> Step:
        befores = list(hooks.befores)
        if not befores:
            return step

        async def run_befores() -> None:
            for before in befores:
                try:
                    await call_maybe_async(before)
                except Exception as e:
                    logger.error(f"Before hook {callable_name(before)} failed for '{interaction.description}': {e}")
                    raise as_failure(e, f"before hook {callable_name(before)}", interaction)
            await step()

        return run_befores

    def with_rules(self, interaction: Interaction, hooks: LifecycleHooks, step: Step) -> Step:
        rules = list(hooks.rules)
        if not rules:
            return step

        wrapped = step
        # The first rule ends up outermost
        for rule in reversed(rules):
            wrapped = rule(wrapped, interaction)

        async def run_rules() -> None:
            try:
                await wrapped()
            except Exception as e:
                raise as_failure(e, "rule", interaction)

        return run_rules

    def with_afters(self, interaction: Interaction, hooks: LifecycleHooks, step: Step) -> Step:
        afters = list(hooks.afters)
        if not afters:
            return step

        async def run_afters() -> None:
            errors: List[Exception] = []
            try:
                await step()
            except Exception as e:
                errors.append(e)
            for after in afters:
                try:
                    await call_maybe_async(after)
                except Exception as e:
                    logger.error(f"After hook {callable_name(after)} failed for '{interaction.description}': {e}")
                    errors.append(as_failure(e, f"after hook {callable_name(after)}", interaction))
            if len(errors) == 1:
                raise errors[0]
            if errors:
                raise MultipleFailuresError(errors, interaction=interaction)

        return run_afters
