"""Memory-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MemoryTurn:
    """A user utterance and, once produced, the assistant's reply."""

    user: str
    assistant: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
