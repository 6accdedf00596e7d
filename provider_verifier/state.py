import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from provider_verifier.exceptions import StateSetupError
from provider_verifier.utils import call_maybe_async, callable_name

logger = logging.getLogger(__name__)

# A zero-argument state handler, already bound to the current test instance
Procedure = Callable[[], Union[Any, Awaitable[Any]]]


class StateDispatcher:
    """Puts the provider into an interaction's declared state before it is verified."""

    async def activate(self, state_name: Optional[str], handlers: Mapping[str, Sequence[Procedure]]) -> None:
        """
        Invokes every handler registered for `state_name`, in registration order.

        A missing state is a no-op, and so is a state nobody registered a handler for.

        Args:
            state_name: The provider state declared by the interaction, if any.
            handlers: State name to the handlers registered for it.

        Raises:
            StateSetupError: If a handler raises. Remaining handlers are not invoked.
        """
        if not state_name:
            return

        state_handlers = handlers.get(state_name) or ()
        if not state_handlers:
            logger.warning(f"No state handler registered for provider state '{state_name}'; continuing without setup")
            return

        for i, handler in enumerate(state_handlers):
            logger.info(
                f"Activating provider state '{state_name}' with handler {i + 1}/{len(state_handlers)}: "
                f"{callable_name(handler)}"
            )
            try:
                await call_maybe_async(handler)
            except Exception as e:
                logger.error(f"State handler {callable_name(handler)} failed for state '{state_name}': {e}")
                raise StateSetupError(state_name, e) from e
