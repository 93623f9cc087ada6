"""
Command-line host that runs the assistant brain over typed utterances.
"""

import asyncio
import logging
import sys

from . import __version__
from .classifiers import create_classifier
from .config import AstraConfig, load_config, load_env_file
from .core.brain import Brain
from .core.controller import TurnController
from .core.planner import ActionPlanner
from .core.router import SkillRouter
from .session import AssistantSession
from .sinks import ConsoleReplySink, LoggingActionSink, LoggingStateSink, StdinTranscriptSource

logger = logging.getLogger(__name__)


def check_openrouter_key(provider) -> None:
    """Log the limits of the configured OpenRouter key, or warn when it cannot be read."""
    key_info = provider.check_key()
    if not key_info:
        logger.warning("Could not verify the OpenRouter API key")
        return
    logger.info(
        f"OpenRouter key {key_info.get('label', 'unnamed')}: "
        f"usage={key_info.get('usage')} limit={key_info.get('limit')}"
    )


def log_session_stats(session: AssistantSession) -> None:
    """Log memory and classifier statistics at the end of a session."""
    brain = session.controller.brain
    logger.info(f"Memory stats: {brain.context.memory.get_stats()}")
    logger.info(f"Classifier stats: {brain.classifier.get_stats()}")


def build_session(config: AstraConfig) -> AssistantSession:
    """Assemble brain, controller and sinks from configuration."""
    classifier = create_classifier(config)
    brain = Brain(
        classifier=classifier,
        router=SkillRouter(ActionPlanner()),
        max_turns=config.memory_max_turns,
    )
    if config.classifier == "openrouter":
        check_openrouter_key(classifier.provider)
    controller = TurnController(brain)
    session = AssistantSession(
        controller,
        reply_sink=ConsoleReplySink(),
        action_sink=LoggingActionSink(),
        state_sink=LoggingStateSink(),
    )
    logger.info(
        f"Session ready with classifier={classifier.name} "
        f"memory_max_turns={config.memory_max_turns}"
    )
    return session


async def run(config: AstraConfig) -> int:
    session = build_session(config)
    for message in session.messages:
        print(f"Astra: {message.text}", flush=True)
    try:
        return await session.run(StdinTranscriptSource())
    finally:
        log_session_stats(session)


def main():
    """Main entry point."""
    load_env_file()
    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.info(f"Starting Astra brain v{__version__}")

    try:
        turns = asyncio.run(run(config))
        logger.info(f"Session ended after {turns} turn(s)")
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
