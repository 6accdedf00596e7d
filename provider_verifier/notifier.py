"""Reporting of interaction start, failure and finish events."""

import logging
from typing import Callable, Iterable, List, Protocol

from psygnal import Signal

from provider_verifier.description import InteractionId
from provider_verifier.utils import callable_name

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Receives the outcome of each interaction of a run."""

    def test_started(self, test_id: InteractionId) -> None: ...

    def test_failure(self, test_id: InteractionId, cause: BaseException) -> None: ...

    def test_finished(self, test_id: InteractionId) -> None: ...


class RunNotifier:
    """
    Fans interaction events out to the connected reporters.

    Events are psygnal signals, so any callable can also be connected directly,
    e.g. `notifier.test_failure.connect(callback)`. An error raised by a reporter
    is logged and does not affect the run.
    """

    test_started = Signal(object)
    test_failure = Signal(object, object)
    test_finished = Signal(object)

    def __init__(self, reporters: Iterable[Reporter] = ()):
        self.reporters: List[Reporter] = []
        # Connected wrappers, kept alive for as long as the notifier
        self._callbacks: List[Callable[..., None]] = []
        for reporter in reporters:
            self.add_reporter(reporter)

    def add_reporter(self, reporter: Reporter) -> None:
        self.reporters.append(reporter)
        for event in ("test_started", "test_failure", "test_finished"):
            callback = self._guarded(event, getattr(reporter, event))
            self._callbacks.append(callback)
            getattr(self, event).connect(callback)

    @staticmethod
    def _guarded(event: str, callback: Callable[..., None]) -> Callable[..., None]:
        """Wraps a reporter callback so its errors never keep the event from later reporters."""

        def guarded(*args) -> None:
            try:
                callback(*args)
            except Exception as e:
                logger.exception(f"Reporter {callable_name(callback)} failed on {event} for {args[0]}: {e}")

        return guarded

    def fire_test_started(self, test_id: InteractionId) -> None:
        self._emit("test_started", test_id)

    def fire_test_failure(self, test_id: InteractionId, cause: BaseException) -> None:
        self._emit("test_failure", test_id, cause)

    def fire_test_finished(self, test_id: InteractionId) -> None:
        self._emit("test_finished", test_id)

    def _emit(self, event: str, *args) -> None:
        try:
            getattr(self, event).emit(*args)
        except Exception as e:
            logger.exception(f"Error dispatching {event} event for {args[0]}: {e}")


class LoggingReporter:
    """Reports interaction outcomes to the log."""

    def __init__(self, logger: logging.Logger = logger):
        self.logger = logger
        self.failed: List[InteractionId] = []

    def test_started(self, test_id: InteractionId) -> None:
        self.logger.info(f"Verifying interaction {test_id}")

    def test_failure(self, test_id: InteractionId, cause: BaseException) -> None:
        self.failed.append(test_id)
        self.logger.error(f"Interaction {test_id} failed: {cause.__class__.__name__}: {cause}")

    def test_finished(self, test_id: InteractionId) -> None:
        self.logger.info(f"Finished interaction {test_id}")
