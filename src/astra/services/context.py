"""Dialogue context threaded through the brain from turn to turn."""

from dataclasses import dataclass, field, replace
from typing import Optional

from .memory import ConversationMemory


@dataclass(frozen=True)
class DialogueContext:
    """Conversation memory plus the last utterance and reply.

    Contexts are values: folding a message in returns a new context and leaves
    the original untouched, so a failed turn cannot leak into the next one.
    """

    memory: ConversationMemory = field(default_factory=ConversationMemory)
    last_user_utterance: Optional[str] = None
    last_assistant_reply: Optional[str] = None

    @classmethod
    def empty(cls, max_turns: int) -> "DialogueContext":
        return cls(memory=ConversationMemory(max_turns=max_turns))

    def with_user_message(self, text: str) -> "DialogueContext":
        """Fold a user utterance into memory."""
        return replace(
            self, memory=self.memory.add_user_message(text), last_user_utterance=text
        )

    def with_assistant_reply(self, text: str) -> "DialogueContext":
        """Fold the assistant's reply into memory."""
        return replace(
            self, memory=self.memory.add_assistant_reply(text), last_assistant_reply=text
        )
