"""Pure mapping from turn outcomes to presentation hints for the visual layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..models.result import ActionRequired, DirectReply, TurnResult


class AssistantPhase(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    THINKING = "thinking"
    SPEAKING = "speaking"
    ERROR = "error"


class Emotion(str, Enum):
    NEUTRAL = "neutral"
    CURIOUS = "curious"
    HAPPY = "happy"
    CONCERNED = "concerned"
    FOCUSED = "focused"
    EXCITED = "excited"


@dataclass(frozen=True)
class PresentationHint:
    """What the assistant should look like; rendering is up to the state sink."""

    phase: AssistantPhase
    emotion: Emotion
    reason: Optional[str] = None


IDLE_HINT = PresentationHint(AssistantPhase.IDLE, Emotion.NEUTRAL)
LISTENING_HINT = PresentationHint(AssistantPhase.LISTENING, Emotion.FOCUSED)
THINKING_HINT = PresentationHint(AssistantPhase.THINKING, Emotion.FOCUSED)


def result_to_presentation_hint(outcome: Union[TurnResult, BaseException]) -> PresentationHint:
    """Choose the hint for a finished turn or a failure."""
    if isinstance(outcome, BaseException):
        return PresentationHint(AssistantPhase.ERROR, Emotion.CONCERNED, reason=str(outcome))
    if isinstance(outcome, DirectReply):
        return PresentationHint(AssistantPhase.SPEAKING, Emotion.HAPPY)
    if isinstance(outcome, ActionRequired):
        return PresentationHint(AssistantPhase.IDLE, Emotion.CURIOUS)
    return IDLE_HINT
