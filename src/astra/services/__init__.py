"""Service components for the Astra brain."""

from .cache import ResponseCache
from .context import DialogueContext
from .memory import ConversationMemory

__all__ = ["ResponseCache", "ConversationMemory", "DialogueContext"]
