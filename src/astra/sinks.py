"""Boundary interfaces towards speech, device actions and the visual layer."""

import asyncio
import logging
import sys
from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional, Sequence, TextIO

from .core.presentation import PresentationHint
from .models.plan import (
    DeviceActionStep,
    NavigateToSettingsStep,
    OpenAppStep,
    SendMessageStep,
    ShowTextStep,
    SystemControlStep,
)
from .models.result import ActionRequired, DirectReply, TurnResult

logger = logging.getLogger(__name__)


class ReplySink(ABC):
    """Receives the final text of a direct reply, e.g. a text-to-speech engine."""

    @abstractmethod
    def deliver_reply(self, text: str) -> None: ...


class ActionSink(ABC):
    """Receives the ordered device steps of a plan; executing them is its job."""

    @abstractmethod
    def execute(self, steps: Sequence[DeviceActionStep]) -> None: ...


class StateSink(ABC):
    """Receives presentation hints to drive the assistant's visuals."""

    @abstractmethod
    def apply(self, hint: PresentationHint) -> None: ...


class TranscriptSource(ABC):
    """Supplies recognised utterances from any speech-to-text backend."""

    @abstractmethod
    def utterances(self) -> AsyncIterator[str]: ...


def dispatch_result(
    result: TurnResult, reply_sink: ReplySink, action_sink: ActionSink
) -> None:
    """Send a result to the sink responsible for it; ignored turns go nowhere."""
    if isinstance(result, DirectReply):
        reply_sink.deliver_reply(result.text)
    elif isinstance(result, ActionRequired):
        action_sink.execute(result.plan.steps)


def describe_step(step: DeviceActionStep) -> str:
    """Human-readable description of a device step."""
    if isinstance(step, OpenAppStep):
        target = step.package_name if step.package_name is not None else step.app_name_hint
        return f"open app {target}"
    if isinstance(step, SendMessageStep):
        return f"send {step.message!r} to {step.recipient_hint}"
    if isinstance(step, ShowTextStep):
        return f"show text {step.text!r}"
    if isinstance(step, NavigateToSettingsStep):
        return f"open settings section {step.section_hint}"
    if isinstance(step, SystemControlStep):
        value = f" = {step.value}" if step.value is not None else ""
        return f"system control {step.control_type.value}{value}"
    raise TypeError(f"Unknown device step: {step!r}")


class ConsoleReplySink(ReplySink):
    """Prints replies instead of speaking them."""

    def __init__(self, stream: Optional[TextIO] = None, speaker: str = "Astra"):
        self.stream = stream or sys.stdout
        self.speaker = speaker

    def deliver_reply(self, text: str) -> None:
        print(f"{self.speaker}: {text}", file=self.stream, flush=True)


class LoggingActionSink(ActionSink):
    """Logs planned device steps without executing them."""

    def execute(self, steps: Sequence[DeviceActionStep]) -> None:
        for index, step in enumerate(steps, 1):
            logger.info(f"Device step {index}/{len(steps)}: {describe_step(step)}")


class LoggingStateSink(StateSink):
    """Logs presentation hints and remembers the latest one."""

    def __init__(self):
        self.current: Optional[PresentationHint] = None

    def apply(self, hint: PresentationHint) -> None:
        self.current = hint
        reason = f" ({hint.reason})" if hint.reason else ""
        logger.debug(f"Presentation: {hint.phase.value}/{hint.emotion.value}{reason}")


class StdinTranscriptSource(TranscriptSource):
    """Reads one utterance per line, stopping at EOF or an exit word."""

    EXIT_WORDS = ("exit", "quit")

    def __init__(self, stream: Optional[TextIO] = None, prompt: str = "> "):
        self.stream = stream or sys.stdin
        self.prompt = prompt

    async def utterances(self) -> AsyncIterator[str]:
        while True:
            if self.prompt and self.stream is sys.stdin:
                print(self.prompt, end="", flush=True)
            line = await asyncio.to_thread(self.stream.readline)
            if not line:
                return
            text = line.strip()
            if text.lower() in self.EXIT_WORDS:
                return
            yield text
