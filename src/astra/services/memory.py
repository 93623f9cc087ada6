"""Bounded conversation memory for short-term dialog context."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from ..models.memory import MemoryTurn

DEFAULT_MAX_TURNS = 20


@dataclass(frozen=True)
class ConversationMemory:
    """Immutable rolling log of dialog turns.

    Every mutation returns a new memory that keeps at most ``max_turns`` turns,
    dropping the oldest ones first.
    """

    max_turns: int = DEFAULT_MAX_TURNS
    turns: Tuple[MemoryTurn, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be at least 1, got {self.max_turns}")
        object.__setattr__(self, "turns", self._trim(tuple(self.turns)))

    def _trim(self, turns: Tuple[MemoryTurn, ...]) -> Tuple[MemoryTurn, ...]:
        if len(turns) > self.max_turns:
            return turns[len(turns) - self.max_turns :]
        return turns

    def add_user_message(self, text: str) -> "ConversationMemory":
        """Append a turn holding only the user's utterance."""
        return replace(self, turns=self.turns + (MemoryTurn(user=text),))

    def add_assistant_reply(self, text: str) -> "ConversationMemory":
        """Attach a reply to the most recent turn, or start a reply-only turn."""
        if not self.turns:
            return replace(self, turns=(MemoryTurn(user="", assistant=text),))
        last = replace(self.turns[-1], assistant=text)
        return replace(self, turns=self.turns[:-1] + (last,))

    def snapshot(self) -> Tuple[MemoryTurn, ...]:
        """Return all stored turns, oldest first."""
        return self.turns

    def recent(self, limit: Optional[int] = None) -> Tuple[MemoryTurn, ...]:
        """Return the most recent ``limit`` turns."""
        if limit is None:
            return self.turns
        if limit <= 0:
            return ()
        return self.turns[-limit:]

    def __len__(self) -> int:
        return len(self.turns)

    def get_stats(self) -> Dict[str, Any]:
        """Get memory usage statistics."""
        answered = sum(1 for turn in self.turns if turn.assistant is not None)
        return {
            "turns_count": len(self.turns),
            "answered_count": answered,
            "max_turns": self.max_turns,
            "oldest": self.turns[0].timestamp.isoformat() if self.turns else None,
        }
