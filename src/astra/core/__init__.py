"""Core pipeline of the Astra brain."""

from .brain import Brain
from .controller import TurnController, TurnEvent, TurnEventKind, event_to_presentation_hint
from .planner import CONFIDENCE_GATE, REQUIRED_ARGUMENTS, ActionPlanner, missing_arguments
from .presentation import AssistantPhase, Emotion, PresentationHint, result_to_presentation_hint
from .router import SkillRouter

__all__ = [
    "Brain",
    "TurnController",
    "TurnEvent",
    "TurnEventKind",
    "event_to_presentation_hint",
    "ActionPlanner",
    "CONFIDENCE_GATE",
    "REQUIRED_ARGUMENTS",
    "missing_arguments",
    "SkillRouter",
    "AssistantPhase",
    "Emotion",
    "PresentationHint",
    "result_to_presentation_hint",
]
