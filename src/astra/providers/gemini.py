"""Gemini provider with a primary model and an automatic fallback model."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig, RequestOptions

from .base import AuthenticationError, LLMProvider, LLMProviderError, LLMResponse

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Manages primary and fallback Gemini models with automatic failover."""

    def __init__(self, api_key: Optional[str] = None):
        """Initialize the provider with API key and model configuration."""
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "Gemini API key not configured. Set GEMINI_API_KEY environment variable.",
                provider="gemini",
            )
        genai.configure(api_key=self.api_key)

        self.primary_model_name = os.getenv("GEMINI_MODEL_PRIMARY", "gemini-2.5-flash")
        self.fallback_model_name = os.getenv("GEMINI_MODEL_FALLBACK", "gemini-2.0-flash")

        # Milliseconds in the environment, seconds internally
        self.timeout = float(os.getenv("GEMINI_MODEL_TIMEOUT", "10000")) / 1000

        self._primary_model = self._initialize_model(self.primary_model_name, "Primary")
        self._fallback_model = self._initialize_model(self.fallback_model_name, "Fallback")

        self.primary_calls = 0
        self.fallback_calls = 0
        self.primary_failures = 0

    @property
    def name(self) -> str:
        return "gemini"

    def _initialize_model(self, model_name: str, model_type: str):
        """Initialize a single model with error handling."""
        try:
            model = genai.GenerativeModel(model_name)
            logger.info(f"{model_type} model initialized: {model_name}")
            return model
        except Exception as e:
            logger.error(f"Failed to initialize {model_type} model {model_name}: {e}")
            return None

    def _generate_with_timeout(
        self, model, model_name: str, prompt: str, timeout: float, config: GenerationConfig
    ) -> str:
        """Execute model generation with timeout using ThreadPoolExecutor."""
        request_options = RequestOptions(timeout=timeout)

        # Not a context manager: its exit would wait for a hung call to finish.
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(
            model.generate_content,
            prompt,
            generation_config=config,
            request_options=request_options,
        )
        try:
            response = future.result(timeout=timeout)
            return response.text
        except FutureTimeoutError:
            logger.warning(f"{model_name} timed out after {timeout}s")
            future.cancel()
            raise TimeoutError(f"{model_name} generation timed out")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate content using the primary model, falling back on failure.

        The ``model`` argument is ignored; the pair of configured models is used.
        """
        config = GenerationConfig(temperature=temperature, max_output_tokens=max_tokens)

        if self._primary_model:
            try:
                self.primary_calls += 1
                text = self._generate_with_timeout(
                    self._primary_model, self.primary_model_name, prompt, self.timeout, config
                )
                logger.debug("Primary model responded successfully")
                return LLMResponse(content=text, model=self.primary_model_name)
            except Exception as e:
                self.primary_failures += 1
                logger.warning(
                    f"Primary model failed (attempt {self.primary_failures}): "
                    f"{type(e).__name__}: {e}"
                )

        if self._fallback_model:
            try:
                self.fallback_calls += 1
                text = self._generate_with_timeout(
                    self._fallback_model,
                    self.fallback_model_name,
                    prompt,
                    self.timeout * 1.5,  # Give fallback more time
                    config,
                )
                logger.info("Fallback model responded successfully")
                return LLMResponse(content=text, model=self.fallback_model_name)
            except Exception as e:
                error_type = type(e).__name__
                logger.error(f"Fallback model also failed: {error_type}: {e}")
                raise LLMProviderError(
                    f"Both models failed. Last error: {error_type}: {e}",
                    provider=self.name,
                    model=self.fallback_model_name,
                    is_retryable=isinstance(e, TimeoutError),
                ) from e

        raise LLMProviderError("No models available for content generation", provider=self.name)

    def is_available(self) -> bool:
        return self._primary_model is not None or self._fallback_model is not None

    def get_stats(self) -> dict:
        """Get usage statistics for the provider."""
        total_calls = self.primary_calls + self.fallback_calls
        primary_success_rate = (
            (self.primary_calls - self.primary_failures) / self.primary_calls
            if self.primary_calls > 0
            else 0
        )

        return {
            "primary_model": self.primary_model_name,
            "fallback_model": self.fallback_model_name,
            "total_calls": total_calls,
            "primary_calls": self.primary_calls,
            "fallback_calls": self.fallback_calls,
            "primary_failures": self.primary_failures,
            "primary_success_rate": primary_success_rate,
            "timeout_seconds": self.timeout,
        }
