# Explicit registration of everything a verification run needs.

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from provider_verifier.chain import LifecycleHooks, Rule
from provider_verifier.targets.target import Target
from provider_verifier.utils import callable_name

logger = logging.getLogger(__name__)

# A lifecycle hook or state handler; it is called with the interaction's test instance
Hook = Callable[[Any], Any]


class InteractionContext:
    """Default test unit: a fresh, empty object per interaction that hooks can share state through."""

    pass


@dataclass(frozen=True)
class StateHandler:
    """A state handler and the provider state names it sets up."""

    states: Tuple[str, ...]
    handler: Hook


def _accepts_positional(fn: Any, count: int) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); assume it is compatible
        return True
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


class VerificationSuite:
    """
    The configuration of a provider verification: test unit, hooks, state handlers,
    rules and the verification target.

    Hooks and state handlers are plain functions taking the test instance. A fresh
    instance of `test_class` is created for every interaction and the hooks are bound
    to it, so state never leaks from one interaction into the next.

    Typical usage:
        suite = VerificationSuite()
        suite.target(HttpTarget(port=8080))

        @suite.before
        def reset_database(test):
            ...

        @suite.state("user 42 exists")
        def create_user(test):
            ...
    """

    def __init__(self, test_class: Any = InteractionContext, name: Optional[str] = None):
        self.test_class = test_class
        self.name = name or callable_name(test_class)
        self.befores: List[Hook] = []
        self.afters: List[Hook] = []
        self.state_handlers: List[StateHandler] = []
        self.rules: List[Rule] = []
        self.targets: List[Target] = []

    # --- Registration ---
    def before(self, fn: Hook) -> Hook:
        """Registers a hook that runs before every interaction. Usable as a decorator."""
        self.befores.append(fn)
        return fn

    def after(self, fn: Hook) -> Hook:
        """Registers a hook that runs after every interaction, even a failed one. Usable as a decorator."""
        self.afters.append(fn)
        return fn

    def state(self, *states: str) -> Callable[[Hook], Hook]:
        """Decorator registering a handler for one or more provider states."""

        def register(fn: Hook) -> Hook:
            self.add_state_handler(states, fn)
            return fn

        return register

    def add_state_handler(self, states: Tuple[str, ...] | List[str] | str, fn: Hook) -> None:
        if isinstance(states, str):
            states = (states,)
        self.state_handlers.append(StateHandler(states=tuple(states), handler=fn))

    def rule(self, rule: Rule) -> Rule:
        """Registers a rule. Rules registered first wrap outermost."""
        self.rules.append(rule)
        return rule

    def target(self, target: Target) -> Target:
        """Sets the verification target. Exactly one target must be registered."""
        self.targets.append(target)
        return target

    # --- Validation ---
    def validate(self) -> List[str]:
        """Checks the configuration and returns every problem found, or an empty list."""
        errors: List[str] = []
        self._validate_test_class(errors)
        self._validate_hooks("before", self.befores, errors)
        self._validate_hooks("after", self.afters, errors)
        self._validate_state_handlers(errors)
        self._validate_rules(errors)
        self._validate_target(errors)
        return errors

    def _validate_test_class(self, errors: List[str]) -> None:
        if not inspect.isclass(self.test_class):
            errors.append(f"Test class should be a class, got {self.test_class!r}")
        elif not _accepts_positional(self.test_class, 0):
            errors.append("Test class should have exactly one public zero-argument constructor")

    def _validate_hooks(self, kind: str, hooks: List[Hook], errors: List[str]) -> None:
        for hook in hooks:
            if not callable(hook):
                errors.append(f"{kind.capitalize()} hook {hook!r} is not callable")
            elif not _accepts_positional(hook, 1):
                errors.append(
                    f"{kind.capitalize()} hook {callable_name(hook)} should accept exactly one argument "
                    "(the test instance)"
                )

    def _validate_state_handlers(self, errors: List[str]) -> None:
        for registration in self.state_handlers:
            handler_name = callable_name(registration.handler)
            if not registration.states:
                errors.append(f"State handler {handler_name} should declare at least one provider state")
            for state in registration.states:
                if not isinstance(state, str) or not state.strip():
                    errors.append(f"State handler {handler_name} declares an invalid provider state {state!r}")
        self._validate_hooks("state", [r.handler for r in self.state_handlers], errors)

    def _validate_rules(self, errors: List[str]) -> None:
        for rule in self.rules:
            if not callable(rule) or not _accepts_positional(rule, 2):
                errors.append(f"Rule {callable_name(rule)} should accept the wrapped step and the interaction")

    def _validate_target(self, errors: List[str]) -> None:
        if len(self.targets) != 1:
            errors.append(f"Verification suite should have exactly one verification target, found {len(self.targets)}")
        elif not isinstance(self.targets[0], Target):
            errors.append(f"Verification target {self.targets[0]!r} should implement {Target.__name__}")

    # --- Per-interaction binding ---
    @property
    def verification_target(self) -> Target:
        return self.targets[0]

    def create_test(self) -> Any:
        return self.test_class()

    def handlers_by_state(self) -> Dict[str, List[Hook]]:
        """State name to its handlers in registration order; a handler appears once per state."""
        mapping: Dict[str, List[Hook]] = {}
        for registration in self.state_handlers:
            for state in registration.states:
                handlers = mapping.setdefault(state, [])
                if registration.handler not in handlers:
                    handlers.append(registration.handler)
        return mapping

    def bind(self, test: Any) -> LifecycleHooks:
        """Binds the registered hooks to one test instance."""
        return LifecycleHooks(
            rules=list(self.rules),
            befores=[functools.partial(fn, test) for fn in self.befores],
            afters=[functools.partial(fn, test) for fn in self.afters],
            state_handlers={
                state: [functools.partial(fn, test) for fn in handlers]
                for state, handlers in self.handlers_by_state().items()
            },
        )

    def __repr__(self) -> str:
        return (
            f"<VerificationSuite({self.name}, befores={len(self.befores)}, afters={len(self.afters)}, "
            f"state_handlers={len(self.state_handlers)}, rules={len(self.rules)}, targets={self.targets})>"
        )
