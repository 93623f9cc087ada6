"""Host-side assistant session wiring the controller to the sinks."""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from .core.controller import TurnController, TurnEvent, event_to_presentation_hint
from .core.presentation import IDLE_HINT
from .models.result import ActionRequired, DirectReply, TurnResult
from .sinks import ActionSink, ReplySink, StateSink, TranscriptSource, dispatch_result

logger = logging.getLogger(__name__)

GREETING = "Hi, I'm Astra. Ask me anything!"


@dataclass(frozen=True)
class TranscriptMessage:
    """A line of the visible conversation transcript."""

    from_user: bool
    text: str


class AssistantSession:
    """Keeps the visible transcript and forwards turn outcomes to the sinks."""

    def __init__(
        self,
        controller: TurnController,
        reply_sink: ReplySink,
        action_sink: ActionSink,
        state_sink: Optional[StateSink] = None,
        greeting: Optional[str] = GREETING,
    ):
        self.controller = controller
        self.reply_sink = reply_sink
        self.action_sink = action_sink
        self.state_sink = state_sink
        self.messages: List[TranscriptMessage] = []
        self.is_thinking = False
        self.last_error: Optional[Exception] = None
        if greeting:
            self.messages.append(TranscriptMessage(from_user=False, text=greeting))

        if state_sink is not None:
            state_sink.apply(IDLE_HINT)
            controller.add_listener(self._on_turn_event)

    def send_user_message(self, text: str) -> Optional["asyncio.Task[None]"]:
        """Add the utterance to the transcript and submit it for a turn."""
        if not text or not text.strip():
            return None
        self.messages.append(TranscriptMessage(from_user=True, text=text))
        self.is_thinking = True
        task = self.controller.submit(text, self._on_result, self._on_error)
        if task is not None:
            task.add_done_callback(self._on_task_done)
        return task

    async def run(self, source: TranscriptSource) -> int:
        """Process utterances from ``source`` one after another.

        Returns:
            The number of turns that were submitted.
        """
        submitted = 0
        async for text in source.utterances():
            task = self.send_user_message(text)
            if task is None:
                continue
            submitted += 1
            await task
        return submitted

    def _on_result(self, result: TurnResult) -> None:
        self.is_thinking = False
        self.last_error = None
        if isinstance(result, DirectReply):
            self.messages.append(TranscriptMessage(from_user=False, text=result.text))
        elif isinstance(result, ActionRequired):
            plan = result.plan
            step_count = len(plan.steps)
            summary = plan.summary or f"Executing {step_count} step(s)"
            self.messages.append(
                TranscriptMessage(from_user=False, text=f"Plan: {summary} ({step_count} step(s))")
            )
        dispatch_result(result, self.reply_sink, self.action_sink)

    def _on_error(self, error: Exception) -> None:
        self.is_thinking = False
        self.last_error = error
        logger.warning(f"Turn failed: {error}")

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        if task.cancelled():
            self.is_thinking = self.controller.pending_count > 0
            logger.info("Turn cancelled")

    def _on_turn_event(self, event: TurnEvent) -> None:
        self.state_sink.apply(event_to_presentation_hint(event))
