"""Configuration loaded from the environment and optional ``.env`` files."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .services.memory import DEFAULT_MAX_TURNS

logger = logging.getLogger(__name__)

DEFAULT_CLASSIFIER = "rule"
DEFAULT_OPENROUTER_MODEL = "google/gemini-2.5-flash"


@dataclass(frozen=True)
class AstraConfig:
    """Runtime settings for the assistant brain.

    Gemini model names and timeout are read by the Gemini provider itself from
    ``GEMINI_MODEL_PRIMARY``, ``GEMINI_MODEL_FALLBACK`` and ``GEMINI_MODEL_TIMEOUT``.
    """

    classifier: str = DEFAULT_CLASSIFIER
    memory_max_turns: int = DEFAULT_MAX_TURNS
    log_level: str = "INFO"
    classifier_cache_size: int = 100
    classifier_cache_ttl: float = 300.0
    temperature: float = 0.2
    request_timeout: float = 30.0
    openrouter_api_key: Optional[str] = None
    openrouter_model: str = DEFAULT_OPENROUTER_MODEL
    gemini_api_key: Optional[str] = None


def _parse_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid integer setting {value!r}, using {default}")
        return default


def _parse_float(value: Optional[str], default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid number setting {value!r}, using {default}")
        return default


def load_env_file() -> Optional[str]:
    """Load the first ``.env`` file found near the entry point or working directory.

    Returns:
        The path that was loaded, or None when no file was found.
    """
    main_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
    env_locations = [
        os.path.join(main_dir, ".env"),
        os.path.join(os.path.dirname(main_dir), ".env"),
        os.path.join(os.getcwd(), ".env"),
    ]

    for env_path in env_locations:
        if os.path.exists(env_path):
            logger.info(f"Loading .env from {env_path}")
            load_dotenv(env_path)
            return env_path

    logger.debug("No .env file found in expected locations")
    return None


def load_config(env: Optional[Mapping[str, str]] = None) -> AstraConfig:
    """Build an :class:`AstraConfig` from environment variables.

    Args:
        env: Optional mapping used instead of ``os.environ``, mainly for tests.
    """
    environment = env if env is not None else os.environ

    classifier = environment.get("ASTRA_CLASSIFIER", DEFAULT_CLASSIFIER).strip().lower()
    memory_max_turns = _parse_int(environment.get("ASTRA_MEMORY_MAX_TURNS"), DEFAULT_MAX_TURNS)
    if memory_max_turns < 1:
        logger.warning(f"ASTRA_MEMORY_MAX_TURNS must be positive, using {DEFAULT_MAX_TURNS}")
        memory_max_turns = DEFAULT_MAX_TURNS

    return AstraConfig(
        classifier=classifier or DEFAULT_CLASSIFIER,
        memory_max_turns=memory_max_turns,
        log_level=environment.get("ASTRA_LOG_LEVEL", "INFO").upper(),
        classifier_cache_size=_parse_int(environment.get("ASTRA_CLASSIFIER_CACHE_SIZE"), 100),
        classifier_cache_ttl=_parse_float(environment.get("ASTRA_CLASSIFIER_CACHE_TTL"), 300.0),
        temperature=_parse_float(environment.get("ASTRA_LLM_TEMPERATURE"), 0.2),
        request_timeout=_parse_float(environment.get("ASTRA_REQUEST_TIMEOUT"), 30.0),
        openrouter_api_key=environment.get("OPENROUTER_API_KEY") or None,
        openrouter_model=environment.get("ASTRA_OPENROUTER_MODEL", DEFAULT_OPENROUTER_MODEL),
        gemini_api_key=environment.get("GEMINI_API_KEY") or None,
    )
