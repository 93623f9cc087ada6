"""Pluggable intent classifier backends."""

import logging

from ..config import AstraConfig
from ..services.cache import ResponseCache
from .base import ClassifierError, IntentClassifier
from .llm import LLMClassifier
from .rule_based import RuleBasedClassifier

logger = logging.getLogger(__name__)

BACKENDS = ("rule", "openrouter", "gemini")


def create_classifier(config: AstraConfig) -> IntentClassifier:
    """Build the classifier backend named by ``config.classifier``."""
    backend = config.classifier
    logger.info(f"Creating classifier backend: {backend}")

    if backend == "rule":
        return RuleBasedClassifier()

    cache = ResponseCache(
        max_size=config.classifier_cache_size, ttl_seconds=config.classifier_cache_ttl
    )
    if backend == "openrouter":
        from ..providers.openrouter import OpenRouterProvider

        provider = OpenRouterProvider(
            api_key=config.openrouter_api_key,
            default_model=config.openrouter_model,
            timeout=config.request_timeout,
        )
        return LLMClassifier(provider, cache=cache, temperature=config.temperature)

    if backend == "gemini":
        from ..providers.gemini import GeminiProvider

        provider = GeminiProvider(api_key=config.gemini_api_key)
        return LLMClassifier(provider, cache=cache, temperature=config.temperature)

    raise ValueError(f"Unknown classifier backend {backend!r}; expected one of {BACKENDS}")


__all__ = [
    "BACKENDS",
    "ClassifierError",
    "IntentClassifier",
    "LLMClassifier",
    "RuleBasedClassifier",
    "create_classifier",
]
