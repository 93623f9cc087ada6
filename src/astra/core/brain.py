"""Turn orchestration: classify, plan, reply and update the dialogue context."""

import logging
from dataclasses import replace
from typing import Optional

from ..classifiers.base import IntentClassifier
from ..classifiers.rule_based import RuleBasedClassifier
from ..models.intent import ClassifiedIntent
from ..models.plan import AnswerDirectly, ExecuteDeviceActions
from ..models.result import ActionRequired, DirectReply, Ignored, TurnResult
from ..services.context import DialogueContext
from ..services.memory import DEFAULT_MAX_TURNS
from .router import SkillRouter

logger = logging.getLogger(__name__)


class Brain:
    """Runs one conversational turn end to end.

    The brain is the only owner of the session's :class:`DialogueContext`. A turn
    works on its own copy and the retained context is swapped in only once the
    turn has fully succeeded, so a failing classifier leaves it untouched.
    """

    def __init__(
        self,
        classifier: Optional[IntentClassifier] = None,
        router: Optional[SkillRouter] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
    ):
        self.classifier = classifier or RuleBasedClassifier()
        self.router = router or SkillRouter()
        self.max_turns = max_turns
        self._context = DialogueContext.empty(max_turns)

    @property
    def context(self) -> DialogueContext:
        """The context committed by the last successful turn."""
        return self._context

    def reset(self) -> None:
        """Forget the conversation and start a fresh session."""
        self._context = DialogueContext.empty(self.max_turns)
        logger.info("Dialogue context reset")

    async def handle_turn(
        self, text: str, context: Optional[DialogueContext] = None
    ) -> TurnResult:
        """Process a user utterance and return the turn's result.

        Args:
            text: The user's utterance.
            context: Context to start from; defaults to the retained one.
        """
        logger.debug(f"Handling user utterance: {text}")
        base_context = context if context is not None else self._context
        updated_context = base_context.with_user_message(text)

        intent = await self.classifier.classify(text, updated_context)
        plan = self.router.route(intent)

        if isinstance(plan, AnswerDirectly):
            reply_text = plan.response_text
            if not reply_text.strip():
                reply_text = await self.classifier.generate_reply(text, updated_context)
            next_context = updated_context.with_assistant_reply(reply_text)
            result: TurnResult = DirectReply(
                text=reply_text,
                intent=intent,
                plan=replace(plan, response_text=reply_text),
            )
        elif isinstance(plan, ExecuteDeviceActions):
            next_context = updated_context.with_assistant_reply(plan.summary or "")
            result = ActionRequired(intent=intent, plan=plan)
        else:
            next_context = updated_context
            result = Ignored(intent=intent, plan=plan)

        self._context = next_context
        self._log_outcome(intent, result)
        return result

    def _log_outcome(self, intent: ClassifiedIntent, result: TurnResult) -> None:
        if isinstance(result, DirectReply):
            logger.info(
                f"Direct reply intent={intent.type.value} "
                f"confidence={intent.confidence} text={result.text}"
            )
        elif isinstance(result, ActionRequired):
            logger.info(
                f"Action required intent={intent.type.value} "
                f"steps={len(result.plan.steps)} summary={result.plan.summary}"
            )
        else:
            logger.info(f"Ignored intent={intent.type.value} confidence={intent.confidence}")
