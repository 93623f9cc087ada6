"""Keyword rule classifier used offline and in tests."""

import logging
from typing import Dict, Tuple

from ..models.intent import ClassifiedIntent, IntentCategory
from ..services.context import DialogueContext
from .base import IntentClassifier

logger = logging.getLogger(__name__)

RULE_HIT_CONFIDENCE = 0.75
FALLBACK_CONFIDENCE = 0.4
ASSISTANT_NAME = "Astra"

# Checked in order; the first matching rule wins.
KEYWORD_RULES: Tuple[Tuple[IntentCategory, Tuple[str, ...]], ...] = (
    (IntentCategory.OPEN_APP, ("open", "launch")),
    (IntentCategory.TRANSLATE_TEXT, ("translate",)),
    (IntentCategory.SEND_MESSAGE, ("message", "text")),
)

# Argument key populated for each category the rules can produce.
ARGUMENT_KEYS: Dict[IntentCategory, str] = {
    IntentCategory.OPEN_APP: "target",
    IntentCategory.TRANSLATE_TEXT: "text",
    IntentCategory.SEND_MESSAGE: "text",
    IntentCategory.ASK_QUESTION: "question",
    IntentCategory.SMALL_TALK: "text",
}


class RuleBasedClassifier(IntentClassifier):
    """Deterministic classifier based on keyword rules.

    The input considered is the lower-cased concatenation of the context's last
    user utterance and the new text. It only ever fills the ``target``, ``text``
    and ``question`` argument keys.
    """

    @property
    def name(self) -> str:
        return "rule"

    async def classify(self, text: str, context: DialogueContext) -> ClassifiedIntent:
        last = context.last_user_utterance or ""
        combined = f"{last}\n{text}".lower()
        intent = self._classify_from_rules(combined, text)
        logger.debug(
            f"Rule classifier: type={intent.type.value} confidence={intent.confidence}"
        )
        return intent

    def _classify_from_rules(self, normalized_input: str, raw_text: str) -> ClassifiedIntent:
        category = None
        for candidate, keywords in KEYWORD_RULES:
            if any(keyword in normalized_input for keyword in keywords):
                category = candidate
                break

        if category is None and normalized_input.strip().endswith("?"):
            category = IntentCategory.ASK_QUESTION

        if category is None:
            category = IntentCategory.SMALL_TALK
            confidence = FALLBACK_CONFIDENCE
        else:
            confidence = RULE_HIT_CONFIDENCE

        key = ARGUMENT_KEYS.get(category)
        arguments = {key: raw_text} if key else {}

        return ClassifiedIntent(
            type=category, arguments=arguments, confidence=confidence, raw_text=raw_text
        )

    async def generate_reply(self, text: str, context: DialogueContext) -> str:
        last_three = "\n".join(
            f"User: {turn.user}\n{ASSISTANT_NAME}: {turn.assistant or ''}"
            for turn in context.memory.recent(3)
        )
        return f"Based on convo:\n{last_three}\n\nReplying to: {text}"
