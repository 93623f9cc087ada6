"""Test fixtures for the Astra brain tests."""

import asyncio
from typing import List, Optional
from unittest.mock import Mock

from astra.classifiers.base import ClassifierError, IntentClassifier
from astra.models.intent import ClassifiedIntent, IntentCategory
from astra.providers.base import LLMResponse
from astra.services.context import DialogueContext


def make_intent(
    category: IntentCategory,
    arguments: Optional[dict] = None,
    confidence: float = 0.75,
    raw_text: str = "",
) -> ClassifiedIntent:
    """Create a classified intent with sensible defaults."""
    return ClassifiedIntent(
        type=category, arguments=arguments or {}, confidence=confidence, raw_text=raw_text
    )


def create_mock_provider(content: str = "Test response", name: str = "mock"):
    """Create a mock LLM provider returning ``content``."""
    provider = Mock()
    provider.name = name
    provider.generate = Mock(return_value=LLMResponse(content=content, model="test-model"))
    provider.is_available = Mock(return_value=True)
    return provider


class ScriptedClassifier(IntentClassifier):
    """Classifier returning a fixed intent and reply, recording what it saw."""

    def __init__(
        self,
        intent: ClassifiedIntent,
        reply: str = "Generated reply",
        fail_on_classify: bool = False,
        fail_on_reply: bool = False,
    ):
        self.intent = intent
        self.reply = reply
        self.fail_on_classify = fail_on_classify
        self.fail_on_reply = fail_on_reply
        self.seen_contexts: List[DialogueContext] = []
        self.reply_calls = 0

    @property
    def name(self) -> str:
        return "scripted"

    async def classify(self, text: str, context: DialogueContext) -> ClassifiedIntent:
        self.seen_contexts.append(context)
        if self.fail_on_classify:
            raise ClassifierError("backend unavailable", backend=self.name)
        return self.intent

    async def generate_reply(self, text: str, context: DialogueContext) -> str:
        self.reply_calls += 1
        if self.fail_on_reply:
            raise ClassifierError("reply generation timed out", backend=self.name)
        return self.reply


class GatedClassifier(IntentClassifier):
    """Classifier that blocks inside ``classify`` until released."""

    def __init__(self, intent: ClassifiedIntent):
        self.intent = intent
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.seen_last_utterances: List[Optional[str]] = []

    @property
    def name(self) -> str:
        return "gated"

    async def classify(self, text: str, context: DialogueContext) -> ClassifiedIntent:
        self.seen_last_utterances.append(context.last_user_utterance)
        self.started.set()
        await self.release.wait()
        return ClassifiedIntent(
            type=self.intent.type,
            arguments=dict(self.intent.arguments),
            confidence=self.intent.confidence,
            raw_text=text,
        )

    async def generate_reply(self, text: str, context: DialogueContext) -> str:
        return f"reply to {text}"
