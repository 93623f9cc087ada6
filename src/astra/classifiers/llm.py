"""Model-backed classifier that asks an LLM provider for structured intents."""

import asyncio
import json
import logging
import math
import re
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..models.intent import ClassifiedIntent, IntentCategory
from ..providers.base import LLMProvider, LLMProviderError
from ..services.cache import ResponseCache
from ..services.context import DialogueContext
from .base import ClassifierError, IntentClassifier

logger = logging.getLogger(__name__)

HISTORY_TURNS = 6

CLASSIFY_INSTRUCTIONS = """You are the intent classifier of a phone voice assistant.
Classify the user's latest utterance into exactly one category:
{categories}

Extract arguments using only these keys when they apply:
- OpenApp: "appName" or "package"
- SendMessage: "recipient" and "message"
- TranslateText: "text" and "targetLang" (ISO 639-1 code)
- ControlDevice: "control" (wifi, bluetooth, do not disturb, brightness or volume) and optional "value"
- SearchWeb: "query"
- GetWeather: "location"

Answer with a single JSON object and nothing else:
{{"type": "<category>", "arguments": {{"<key>": "<value>"}}, "confidence": <0.0-1.0>}}"""

REPLY_INSTRUCTIONS = (
    "You are Astra, a friendly voice assistant. Answer the user's latest message "
    "in one or two short spoken sentences."
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)


class LLMClassifier(IntentClassifier):
    """Intent classifier backed by any :class:`LLMProvider`."""

    def __init__(
        self,
        provider: LLMProvider,
        cache: Optional[ResponseCache] = None,
        temperature: float = 0.2,
        model: Optional[str] = None,
    ):
        self.provider = provider
        self.cache = cache if cache is not None else ResponseCache()
        self.temperature = temperature
        self.model = model

    @property
    def name(self) -> str:
        return f"llm:{self.provider.name}"

    async def classify(self, text: str, context: DialogueContext) -> ClassifiedIntent:
        cache_key = self.cache.create_key(
            "classify",
            {
                "text": text,
                "last_user": context.last_user_utterance,
                "last_reply": context.last_assistant_reply,
            },
        )
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Classification cache hit")
            return replace(cached, arguments=dict(cached.arguments))

        prompt = self._build_classify_prompt(text, context)
        content = await self._generate(prompt)
        intent = self._parse_intent(content, text)
        self.cache.set(cache_key, replace(intent, arguments=dict(intent.arguments)))
        logger.info(
            f"{self.name} classified intent={intent.type.value} confidence={intent.confidence}"
        )
        return intent

    async def generate_reply(self, text: str, context: DialogueContext) -> str:
        prompt = "\n\n".join(
            [f"System: {REPLY_INSTRUCTIONS}", self._format_history(context), "Assistant:"]
        )
        reply = (await self._generate(prompt)).strip()
        if not reply:
            raise ClassifierError("Model returned an empty reply", backend=self.name)
        return reply

    def get_stats(self) -> Dict[str, Any]:
        """Get cache and provider statistics."""
        return {
            "backend": self.name,
            "cache": self.cache.get_stats(),
            "provider": self.provider.get_stats(),
        }

    async def _generate(self, prompt: str) -> str:
        try:
            response = await asyncio.to_thread(
                self.provider.generate,
                prompt,
                model=self.model,
                temperature=self.temperature,
            )
        except LLMProviderError as e:
            raise ClassifierError(
                f"{self.provider.name} failed: {e}",
                backend=self.name,
                is_retryable=e.is_retryable,
            ) from e
        return response.content

    def _build_classify_prompt(self, text: str, context: DialogueContext) -> str:
        categories = "\n".join(f"- {category.value}" for category in IntentCategory)
        parts = [
            f"System: {CLASSIFY_INSTRUCTIONS.format(categories=categories)}",
            self._format_history(context),
            f"Latest utterance: {text}",
        ]
        return "\n\n".join(part for part in parts if part)

    def _format_history(self, context: DialogueContext) -> str:
        """Format recent memory turns into a prompt transcript."""
        lines: List[str] = []
        for turn in context.memory.recent(HISTORY_TURNS):
            if turn.user:
                lines.append(f"User: {turn.user}")
            if turn.assistant:
                lines.append(f"Assistant: {turn.assistant}")
        return "\n".join(lines)

    def _parse_intent(self, content: str, raw_text: str) -> ClassifiedIntent:
        """Turn the model's JSON answer into a :class:`ClassifiedIntent`."""
        cleaned = _FENCE_RE.sub("", content.strip())
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ClassifierError(
                f"Malformed classifier response: {content[:200]!r}", backend=self.name
            ) from e
        if not isinstance(data, dict):
            raise ClassifierError(
                f"Expected a JSON object, got {type(data).__name__}", backend=self.name
            )

        category = IntentCategory.parse(str(data.get("type", "")))
        arguments = self._coerce_arguments(data.get("arguments"))
        try:
            confidence = float(data.get("confidence", 0.0))
        except (TypeError, ValueError) as e:
            raise ClassifierError(
                f"Invalid confidence value: {data.get('confidence')!r}", backend=self.name
            ) from e
        if not math.isfinite(confidence):
            raise ClassifierError(
                f"Invalid confidence value: {data.get('confidence')!r}", backend=self.name
            )
        confidence = min(max(confidence, 0.0), 1.0)

        return ClassifiedIntent(
            type=category, arguments=arguments, confidence=confidence, raw_text=raw_text
        )

    @staticmethod
    def _coerce_arguments(raw: Any) -> Dict[str, str]:
        if not isinstance(raw, dict):
            return {}
        return {str(key): str(value) for key, value in raw.items() if value is not None}
