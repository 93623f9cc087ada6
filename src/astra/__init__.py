"""Astra brain - conversational routing pipeline for a voice assistant."""

__version__ = "0.1.0"

from .core.brain import Brain
from .core.controller import TurnController

__all__ = ["Brain", "TurnController", "__version__"]
