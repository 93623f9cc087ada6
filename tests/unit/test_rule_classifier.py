"""Unit tests for the keyword rule classifier."""

import pytest

from astra.classifiers.rule_based import (
    FALLBACK_CONFIDENCE,
    RULE_HIT_CONFIDENCE,
    RuleBasedClassifier,
)
from astra.models.intent import IntentCategory
from astra.services.context import DialogueContext


@pytest.fixture
def classifier():
    return RuleBasedClassifier()


async def classify(classifier, text, context=None):
    """Classify the way the brain does: after folding the text into context."""
    context = (context or DialogueContext()).with_user_message(text)
    return await classifier.classify(text, context)


class TestRuleBasedClassify:
    """Tests for RuleBasedClassifier.classify()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text,expected,key",
        [
            ("open spotify", IntentCategory.OPEN_APP, "target"),
            ("Launch the camera", IntentCategory.OPEN_APP, "target"),
            ("translate good morning", IntentCategory.TRANSLATE_TEXT, "text"),
            ("message mom", IntentCategory.SEND_MESSAGE, "text"),
            ("text dad I am late", IntentCategory.SEND_MESSAGE, "text"),
            ("what time is it?", IntentCategory.ASK_QUESTION, "question"),
        ],
    )
    async def test_rule_hits(self, classifier, text, expected, key):
        """Test that keyword rules map to their category with rule confidence."""
        intent = await classify(classifier, text)

        assert intent.type == expected
        assert intent.confidence == RULE_HIT_CONFIDENCE
        assert intent.arguments == {key: text}
        assert intent.raw_text == text

    @pytest.mark.asyncio
    async def test_fallback_small_talk(self, classifier):
        """Test the SmallTalk fallback with low confidence."""
        intent = await classify(classifier, "hello")

        assert intent.type == IntentCategory.SMALL_TALK
        assert intent.confidence == FALLBACK_CONFIDENCE == 0.4
        assert intent.arguments == {"text": "hello"}

    @pytest.mark.asyncio
    async def test_rule_order(self, classifier):
        """Test that OpenApp wins over translate when both keywords appear."""
        intent = await classify(classifier, "open the app and translate this")
        assert intent.type == IntentCategory.OPEN_APP

    @pytest.mark.asyncio
    async def test_never_emits_control_device(self, classifier):
        """Test that device control phrases fall back to SmallTalk."""
        intent = await classify(classifier, "turn on wifi")

        assert intent.type == IntentCategory.SMALL_TALK
        assert "control" not in intent.arguments

    @pytest.mark.asyncio
    async def test_uses_last_user_utterance(self, classifier):
        """Test that keywords in the context's last utterance count too."""
        context = DialogueContext(last_user_utterance="please open")
        intent = await classifier.classify("spotify", context)

        assert intent.type == IntentCategory.OPEN_APP
        assert intent.arguments == {"target": "spotify"}

    @pytest.mark.asyncio
    async def test_deterministic(self, classifier):
        """Test that the same text and context give identical intents."""
        context = DialogueContext().with_user_message("hi").with_assistant_reply("hello")
        context = context.with_user_message("message bob")

        first = await classifier.classify("message bob", context)
        second = await classifier.classify("message bob", context)

        assert first == second

    @pytest.mark.asyncio
    async def test_does_not_mutate_context(self, classifier):
        """Test that classification leaves the context as it was."""
        context = DialogueContext().with_user_message("open maps")
        before = (context.memory.snapshot(), context.last_user_utterance)

        await classifier.classify("open maps", context)
        await classifier.generate_reply("open maps", context)

        assert (context.memory.snapshot(), context.last_user_utterance) == before


class TestRuleBasedGenerateReply:
    """Tests for RuleBasedClassifier.generate_reply()."""

    @pytest.mark.asyncio
    async def test_reply_quotes_last_three_turns(self, classifier):
        """Test that the reply references the last three turns and the input."""
        context = DialogueContext()
        for i in range(4):
            context = context.with_user_message(f"q{i}").with_assistant_reply(f"a{i}")
        context = context.with_user_message("latest")

        reply = await classifier.generate_reply("latest", context)

        assert reply == (
            "Based on convo:\n"
            "User: q2\nAstra: a2\n"
            "User: q3\nAstra: a3\n"
            "User: latest\nAstra: \n\n"
            "Replying to: latest"
        )

    @pytest.mark.asyncio
    async def test_reply_is_deterministic(self, classifier):
        """Test that replies only depend on text and context."""
        context = DialogueContext().with_user_message("hello")
        assert await classifier.generate_reply("hello", context) == (
            await classifier.generate_reply("hello", context)
        )


class TestRuleBasedStats:
    """Tests for the statistics reported by the rule classifier."""

    def test_stats_name_backend(self, classifier):
        assert classifier.get_stats() == {"backend": "rule"}
