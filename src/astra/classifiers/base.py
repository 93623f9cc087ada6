"""Contract shared by every intent classifier backend."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..models.intent import ClassifiedIntent
from ..services.context import DialogueContext


class IntentClassifier(ABC):
    """Maps an utterance in context to an intent and can compose free-form replies.

    Both operations may suspend on network or model latency. Neither may mutate
    the context it is given.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend name."""
        ...

    @abstractmethod
    async def classify(self, text: str, context: DialogueContext) -> ClassifiedIntent:
        """Classify ``text`` given the conversation so far.

        Raises:
            ClassifierError: If the backend is unavailable or answers nonsense.
        """
        ...

    @abstractmethod
    async def generate_reply(self, text: str, context: DialogueContext) -> str:
        """Compose a reply to ``text``.

        Raises:
            ClassifierError: If the backend is unavailable or answers nonsense.
        """
        ...

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about this backend."""
        return {"backend": self.name}


class ClassifierError(Exception):
    """Raised when a classifier backend fails to produce a usable answer."""

    def __init__(self, message: str, backend: str = "", is_retryable: bool = False):
        super().__init__(message)
        self.backend = backend
        self.is_retryable = is_retryable
