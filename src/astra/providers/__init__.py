"""LLM providers for model-backed intent classification."""

from .base import (
    AuthenticationError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    ModelNotFoundError,
    RateLimitError,
)

__all__ = [
    "LLMProvider",
    "LLMProviderError",
    "LLMResponse",
    "AuthenticationError",
    "RateLimitError",
    "ModelNotFoundError",
]
