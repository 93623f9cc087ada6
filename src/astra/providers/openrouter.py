"""OpenRouter LLM provider implementation."""

import logging
import os
from typing import Any, Optional

import httpx
from openai import OpenAI

from ..config import DEFAULT_OPENROUTER_MODEL
from .base import (
    AuthenticationError,
    LLMProvider,
    LLMProviderError,
    LLMResponse,
    ModelNotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_KEY_URL = "https://openrouter.ai/api/v1/key"


class OpenRouterProvider(LLMProvider):
    """LLM provider using the OpenRouter chat completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = DEFAULT_OPENROUTER_MODEL,
        timeout: float = 30.0,
        app_name: str = "astra-brain",
    ):
        """Initialize the OpenRouter provider.

        Args:
            api_key: OpenRouter API key. If None, reads from OPENROUTER_API_KEY env var.
            default_model: Default model to use for generation.
            timeout: Request timeout in seconds.
            app_name: Application name sent in the OpenRouter headers.
        """
        self.api_key = api_key or os.getenv("OPENROUTER_API_KEY")
        self.default_model = default_model
        self.timeout = timeout
        self.app_name = app_name
        self._client: Optional[OpenAI] = None

    @property
    def name(self) -> str:
        return "openrouter"

    @property
    def client(self) -> OpenAI:
        """Get or create the OpenAI client configured for OpenRouter."""
        if self._client is None:
            if not self.api_key:
                raise AuthenticationError(
                    "OpenRouter API key not configured. "
                    "Set OPENROUTER_API_KEY environment variable.",
                    provider=self.name,
                )
            self._client = OpenAI(
                base_url=OPENROUTER_BASE_URL,
                api_key=self.api_key,
                timeout=self.timeout,
                default_headers={"X-Title": self.app_name},
            )
        return self._client

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a response using OpenRouter.

        Raises:
            LLMProviderError: If the generation fails.
        """
        model_id = model or self.default_model
        logger.info(f"Generating with OpenRouter model: {model_id}")

        try:
            response = self.client.chat.completions.create(
                model=model_id,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except LLMProviderError:
            raise
        except Exception as e:
            error_msg = str(e)
            logger.error(f"OpenRouter error: {error_msg}")

            if "rate" in error_msg.lower() or "429" in error_msg:
                raise RateLimitError(error_msg, provider=self.name, model=model_id) from e
            elif "auth" in error_msg.lower() or "401" in error_msg or "403" in error_msg:
                raise AuthenticationError(error_msg, provider=self.name, model=model_id) from e
            elif "not found" in error_msg.lower() or "404" in error_msg:
                raise ModelNotFoundError(error_msg, provider=self.name, model=model_id) from e
            raise LLMProviderError(
                error_msg,
                provider=self.name,
                model=model_id,
                is_retryable="timeout" in error_msg.lower(),
            ) from e

        content = response.choices[0].message.content or ""
        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        logger.debug(f"OpenRouter response received from {model_id}")
        return LLMResponse(
            content=content,
            model=model_id,
            usage=usage,
            metadata={"id": response.id, "created": response.created},
        )

    def is_available(self) -> bool:
        return bool(self.api_key)

    def check_key(self) -> dict[str, Any]:
        """Query OpenRouter for the limits attached to the configured key.

        Returns:
            The ``data`` object of the key endpoint, or an empty dict on failure.
        """
        if not self.api_key:
            return {}
        try:
            response = httpx.get(
                OPENROUTER_KEY_URL,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=10.0,
            )
            response.raise_for_status()
            return response.json().get("data", {})
        except Exception as e:
            logger.error(f"Failed to check OpenRouter key: {e}")
            return {}
