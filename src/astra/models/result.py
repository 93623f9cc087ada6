"""Per-turn results emitted by the brain."""

from dataclasses import dataclass
from typing import Optional, Union

from .intent import ClassifiedIntent
from .plan import ActionPlan, AnswerDirectly, ExecuteDeviceActions


@dataclass(frozen=True)
class DirectReply:
    """The assistant answers with text that should be spoken back."""

    text: str
    intent: Optional[ClassifiedIntent] = None
    plan: Optional[AnswerDirectly] = None


@dataclass(frozen=True)
class ActionRequired:
    """Device steps must be carried out by the host."""

    intent: ClassifiedIntent
    plan: ExecuteDeviceActions


@dataclass(frozen=True)
class Ignored:
    """The turn produced nothing actionable."""

    intent: Optional[ClassifiedIntent] = None
    plan: Optional[ActionPlan] = None


TurnResult = Union[DirectReply, ActionRequired, Ignored]


def describe_result(result: TurnResult) -> str:
    """Return a one-line description of a result for logs."""
    if isinstance(result, DirectReply):
        intent_type = result.intent.type.value if result.intent else None
        return f"Result=DirectReply intent={intent_type} text={result.text}"
    if isinstance(result, ActionRequired):
        summary = result.plan.summary or ""
        return (
            f"Result=ActionRequired intent={result.intent.type.value} "
            f"steps={len(result.plan.steps)} summary={summary}"
        )
    intent_type = result.intent.type.value if result.intent else None
    return f"Result=Ignored intent={intent_type}"
