"""Turn controller: the asynchronous boundary between the host and the brain."""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Set

from ..models.result import TurnResult, describe_result
from .brain import Brain
from .presentation import (
    LISTENING_HINT,
    THINKING_HINT,
    PresentationHint,
    result_to_presentation_hint,
)

logger = logging.getLogger(__name__)


class TurnEventKind(str, Enum):
    SUBMITTED = "submitted"
    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TurnEvent:
    """Lifecycle notification for observers such as the visual state sink."""

    kind: TurnEventKind
    text: str
    result: Optional[TurnResult] = None
    error: Optional[BaseException] = None


def event_to_presentation_hint(event: TurnEvent) -> PresentationHint:
    """Map a lifecycle event to the hint the visual layer should show."""
    if event.kind is TurnEventKind.SUBMITTED:
        return LISTENING_HINT
    if event.kind is TurnEventKind.STARTED:
        return THINKING_HINT
    if event.kind is TurnEventKind.FAILED and event.error is not None:
        return result_to_presentation_hint(event.error)
    return result_to_presentation_hint(event.result)


ResultCallback = Callable[[TurnResult], None]
ErrorCallback = Callable[[Exception], None]
TurnListener = Callable[[TurnEvent], None]


class TurnController:
    """Submits utterances to the brain one turn at a time.

    Turns are serialised with a lock so every turn starts from the context the
    previous one committed. A cancelled turn commits nothing and fires no callback.
    """

    def __init__(self, brain: Brain):
        self.brain = brain
        self._lock = asyncio.Lock()
        self._listeners: List[TurnListener] = []
        self._pending: Set["asyncio.Task[None]"] = set()

    def add_listener(self, listener: TurnListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TurnListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def submit(
        self,
        text: str,
        on_result: ResultCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Optional["asyncio.Task[None]"]:
        """Schedule a turn on the running event loop.

        Blank text is ignored: nothing is scheduled and no callback fires.

        Returns:
            The scheduled task, or None when the text was ignored.
        """
        if not text or not text.strip():
            logger.debug("Ignoring blank submission")
            return None

        self._emit(TurnEvent(TurnEventKind.SUBMITTED, text))
        task = asyncio.get_running_loop().create_task(
            self._run_turn(text, on_result, on_error)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def submit_and_wait(self, text: str) -> Optional[TurnResult]:
        """Run a turn and return its result, raising the turn's failure if any."""
        loop = asyncio.get_running_loop()
        outcome: "asyncio.Future[Optional[TurnResult]]" = loop.create_future()

        def on_result(result: TurnResult) -> None:
            outcome.set_result(result)

        def on_error(error: Exception) -> None:
            outcome.set_exception(error)

        task = self.submit(text, on_result, on_error)
        if task is None:
            return None
        await task
        return await outcome

    def cancel_pending(self) -> int:
        """Abandon every turn still in flight; returns how many were cancelled."""
        cancelled = 0
        for task in list(self._pending):
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.info(f"Cancelled {cancelled} pending turn(s)")
        return cancelled

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._pending if not task.done())

    async def _run_turn(
        self,
        text: str,
        on_result: ResultCallback,
        on_error: Optional[ErrorCallback],
    ) -> None:
        async with self._lock:
            self._emit(TurnEvent(TurnEventKind.STARTED, text))
            try:
                result = await self.brain.handle_turn(text)
            except Exception as e:
                logger.error(f"Error while handling message: {e}", exc_info=True)
                self._emit(TurnEvent(TurnEventKind.FAILED, text, error=e))
                if on_error is not None:
                    on_error(e)
                return

        logger.info(describe_result(result))
        self._emit(TurnEvent(TurnEventKind.SUCCEEDED, text, result=result))
        on_result(result)

    def _emit(self, event: TurnEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Turn listener failed on {event.kind.value}: {e}", exc_info=True)
