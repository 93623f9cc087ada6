"""Intent-related data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class IntentCategory(str, Enum):
    """High-level intent categories a classifier can predict."""

    OPEN_APP = "OpenApp"
    SEND_MESSAGE = "SendMessage"
    ASK_QUESTION = "AskQuestion"
    TRANSLATE_TEXT = "TranslateText"
    CONTROL_DEVICE = "ControlDevice"
    SEARCH_WEB = "SearchWeb"
    GET_WEATHER = "GetWeather"
    SMALL_TALK = "SmallTalk"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> "IntentCategory":
        """Resolve a category from its value or member name, defaulting to UNKNOWN."""
        normalized = (value or "").strip().lower()
        for category in cls:
            if normalized in (category.value.lower(), category.name.lower()):
                return category
        return cls.UNKNOWN


@dataclass(frozen=True)
class ClassifiedIntent:
    """Result of intent classification for a single utterance."""

    type: IntentCategory
    arguments: Dict[str, str] = field(default_factory=dict)
    confidence: float = 0.0
    raw_text: str = ""

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within [0, 1], got {self.confidence}")
