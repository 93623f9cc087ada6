"""Action planner: turns classified intents into structured action plans."""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..models.intent import ClassifiedIntent, IntentCategory
from ..models.plan import (
    NO_OP,
    ActionPlan,
    AnswerDirectly,
    ExecuteDeviceActions,
    OpenAppStep,
    SendMessageStep,
    ShowTextStep,
    SystemControlStep,
    SystemControlType,
)

logger = logging.getLogger(__name__)

CONFIDENCE_GATE = 0.30
DEFAULT_TARGET_LANGUAGE = "en"
DEFAULT_WEATHER_LOCATION = "current location"

# Argument keys a classifier must populate for each category to be actionable.
# Each inner tuple is a group of alternatives; every group needs one present key.
REQUIRED_ARGUMENTS: Dict[IntentCategory, Tuple[Tuple[str, ...], ...]] = {
    IntentCategory.OPEN_APP: (("appName", "target", "package"),),
    IntentCategory.SEND_MESSAGE: (("recipient", "target"), ("text", "message")),
    IntentCategory.CONTROL_DEVICE: (("control",),),
}

# Substring keywords for ``control`` arguments, first match wins.
CONTROL_KEYWORDS: Tuple[Tuple[Tuple[str, ...], SystemControlType], ...] = (
    (("wifi",), SystemControlType.TOGGLE_WIFI),
    (("bluetooth",), SystemControlType.TOGGLE_BLUETOOTH),
    (("dnd", "do not disturb"), SystemControlType.TOGGLE_DND),
    (("brightness",), SystemControlType.ADJUST_BRIGHTNESS),
    (("volume",), SystemControlType.ADJUST_VOLUME),
)


def missing_arguments(intent: ClassifiedIntent) -> List[Tuple[str, ...]]:
    """Return the required argument groups ``intent`` does not satisfy."""
    groups = REQUIRED_ARGUMENTS.get(intent.type, ())
    return [group for group in groups if not any(key in intent.arguments for key in group)]


def _first_present(arguments: Dict[str, str], *keys: str) -> Optional[str]:
    for key in keys:
        if key in arguments:
            return arguments[key]
    return None


class ActionPlanner:
    """Maps a :class:`ClassifiedIntent` to an :class:`ActionPlan`.

    Planning is pure: no I/O, no exceptions for missing arguments. Anything that
    cannot be acted on becomes ``NoOp``.
    """

    def __init__(self, confidence_gate: float = CONFIDENCE_GATE):
        self.confidence_gate = confidence_gate
        self._builders: Dict[IntentCategory, Callable[[ClassifiedIntent], ActionPlan]] = {
            IntentCategory.ASK_QUESTION: self._answer_directly,
            IntentCategory.SMALL_TALK: self._answer_directly,
            IntentCategory.OPEN_APP: self._build_open_app_plan,
            IntentCategory.SEND_MESSAGE: self._build_send_message_plan,
            IntentCategory.TRANSLATE_TEXT: self._build_translate_plan,
            IntentCategory.CONTROL_DEVICE: self._build_control_plan,
            IntentCategory.SEARCH_WEB: self._build_search_plan,
            IntentCategory.GET_WEATHER: self._build_weather_plan,
        }

    def plan(self, intent: ClassifiedIntent) -> ActionPlan:
        if intent.confidence < self.confidence_gate:
            logger.debug(
                f"Intent {intent.type.value} below confidence gate "
                f"({intent.confidence} < {self.confidence_gate})"
            )
            return NO_OP

        builder = self._builders.get(intent.type)
        if builder is None:
            return NO_OP
        return builder(intent)

    def _answer_directly(self, intent: ClassifiedIntent) -> ActionPlan:
        return AnswerDirectly(response_text=intent.raw_text)

    def _build_open_app_plan(self, intent: ClassifiedIntent) -> ActionPlan:
        app_name_hint = _first_present(intent.arguments, "appName", "target")
        package_name = intent.arguments.get("package")

        if app_name_hint is None and package_name is None:
            return NO_OP

        step = OpenAppStep(app_name_hint=app_name_hint, package_name=package_name)
        target = package_name if package_name is not None else app_name_hint
        return ExecuteDeviceActions(steps=(step,), summary=f"Open app {target}")

    def _build_send_message_plan(self, intent: ClassifiedIntent) -> ActionPlan:
        recipient = _first_present(intent.arguments, "recipient", "target")
        message = _first_present(intent.arguments, "text", "message")

        if not recipient or not recipient.strip() or not message or not message.strip():
            return NO_OP

        step = SendMessageStep(recipient_hint=recipient, message=message)
        return ExecuteDeviceActions(steps=(step,), summary=f"Send message to {recipient}")

    def _build_translate_plan(self, intent: ClassifiedIntent) -> ActionPlan:
        text = intent.arguments.get("text", intent.raw_text)
        target_lang = intent.arguments.get("targetLang", DEFAULT_TARGET_LANGUAGE)

        step = ShowTextStep(text=f"Translate to {target_lang}:\n{text}")
        return ExecuteDeviceActions(steps=(step,), summary="Show translation request")

    def _build_control_plan(self, intent: ClassifiedIntent) -> ActionPlan:
        control = intent.arguments.get("control")
        if control is None:
            return NO_OP

        control_key = control.lower()
        control_type = None
        for keywords, candidate in CONTROL_KEYWORDS:
            if any(keyword in control_key for keyword in keywords):
                control_type = candidate
                break
        if control_type is None:
            return NO_OP

        step = SystemControlStep(control_type=control_type, value=intent.arguments.get("value"))
        return ExecuteDeviceActions(
            steps=(step,), summary=f"Control system: {control_type.value}"
        )

    def _build_search_plan(self, intent: ClassifiedIntent) -> ActionPlan:
        query = intent.arguments.get("query", intent.raw_text)
        return ExecuteDeviceActions(
            steps=(ShowTextStep(text=f"Search for: {query}"),), summary="Search the web"
        )

    def _build_weather_plan(self, intent: ClassifiedIntent) -> ActionPlan:
        location = intent.arguments.get("location", DEFAULT_WEATHER_LOCATION)
        return ExecuteDeviceActions(
            steps=(ShowTextStep(text=f"Get weather for {location}"),), summary="Get weather"
        )
