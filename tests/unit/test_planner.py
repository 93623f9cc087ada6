"""Unit tests for the action planner and skill router."""

import pytest

from astra.core.planner import (
    CONFIDENCE_GATE,
    REQUIRED_ARGUMENTS,
    ActionPlanner,
    missing_arguments,
)
from astra.core.router import SkillRouter
from astra.models.intent import IntentCategory
from astra.models.plan import (
    NO_OP,
    AnswerDirectly,
    ExecuteDeviceActions,
    NoOp,
    OpenAppStep,
    SendMessageStep,
    ShowTextStep,
    SystemControlStep,
    SystemControlType,
)
from tests.fixtures import make_intent


@pytest.fixture
def planner():
    return ActionPlanner()


class TestConfidenceGate:
    """The low-confidence gate applies before any category dispatch."""

    @pytest.mark.parametrize("category", list(IntentCategory))
    @pytest.mark.parametrize("confidence", [0.0, 0.1, 0.29, 0.2999])
    def test_below_gate_is_noop(self, planner, category, confidence):
        """Test that every category is a no-op below the gate, whatever its arguments."""
        intent = make_intent(
            category,
            arguments={
                "appName": "maps",
                "recipient": "bob",
                "text": "hi",
                "control": "wifi",
                "query": "news",
            },
            confidence=confidence,
            raw_text="anything",
        )
        assert planner.plan(intent) == NO_OP

    def test_gate_value(self, planner):
        """Test the default gate and that the boundary itself passes."""
        assert CONFIDENCE_GATE == 0.30
        intent = make_intent(IntentCategory.SMALL_TALK, confidence=0.30, raw_text="hey")
        assert planner.plan(intent) == AnswerDirectly("hey")


class TestDirectAnswers:
    """AskQuestion and SmallTalk answer with the raw text."""

    def test_ask_question(self, planner):
        intent = make_intent(IntentCategory.ASK_QUESTION, raw_text="what time is it?")
        assert planner.plan(intent) == AnswerDirectly(response_text="what time is it?")

    def test_small_talk(self, planner):
        intent = make_intent(IntentCategory.SMALL_TALK, confidence=0.4, raw_text="hello")
        assert planner.plan(intent) == AnswerDirectly(response_text="hello")


class TestOpenApp:
    """Tests for OpenApp planning."""

    def test_target_argument(self, planner):
        """Test the reference classifier's ``target`` key."""
        intent = make_intent(
            IntentCategory.OPEN_APP, {"target": "open spotify"}, raw_text="open spotify"
        )

        assert planner.plan(intent) == ExecuteDeviceActions(
            steps=(OpenAppStep(app_name_hint="open spotify"),),
            summary="Open app open spotify",
        )

    def test_app_name_preferred_over_target(self, planner):
        intent = make_intent(IntentCategory.OPEN_APP, {"appName": "Maps", "target": "x"})
        plan = planner.plan(intent)
        assert plan.steps == (OpenAppStep(app_name_hint="Maps"),)

    def test_package_in_summary(self, planner):
        """Test that the package name wins in the summary."""
        intent = make_intent(
            IntentCategory.OPEN_APP, {"appName": "Spotify", "package": "com.spotify.music"}
        )
        plan = planner.plan(intent)

        assert plan.steps == (
            OpenAppStep(app_name_hint="Spotify", package_name="com.spotify.music"),
        )
        assert plan.summary == "Open app com.spotify.music"

    def test_package_only(self, planner):
        intent = make_intent(IntentCategory.OPEN_APP, {"package": "com.android.camera"})
        plan = planner.plan(intent)
        assert plan.steps == (OpenAppStep(package_name="com.android.camera"),)

    def test_empty_package_is_kept_in_summary(self, planner):
        """Test that only a missing package falls back to the name hint."""
        intent = make_intent(IntentCategory.OPEN_APP, {"package": ""})
        plan = planner.plan(intent)

        assert plan.steps == (OpenAppStep(package_name=""),)
        assert plan.summary == "Open app "

        intent = make_intent(IntentCategory.OPEN_APP, {"appName": "Maps", "package": ""})
        assert planner.plan(intent).summary == "Open app "

    @pytest.mark.parametrize("arguments", [{}, {"query": "spotify"}, {"AppName": "maps"}])
    def test_missing_arguments_is_noop(self, planner, arguments):
        """Test that OpenApp without appName/target/package is a no-op (keys are case-sensitive)."""
        intent = make_intent(IntentCategory.OPEN_APP, arguments, raw_text="open something")
        assert planner.plan(intent) == NO_OP


class TestSendMessage:
    """Tests for SendMessage planning."""

    def test_recipient_and_message(self, planner):
        intent = make_intent(
            IntentCategory.SEND_MESSAGE, {"recipient": "Mom", "message": "on my way"}
        )
        assert planner.plan(intent) == ExecuteDeviceActions(
            steps=(SendMessageStep(recipient_hint="Mom", message="on my way"),),
            summary="Send message to Mom",
        )

    def test_target_and_text_aliases(self, planner):
        intent = make_intent(IntentCategory.SEND_MESSAGE, {"target": "Bob", "text": "hi"})
        plan = planner.plan(intent)
        assert plan.steps == (SendMessageStep(recipient_hint="Bob", message="hi"),)

    @pytest.mark.parametrize(
        "arguments",
        [
            {"text": "message bob hi"},
            {"recipient": "Bob"},
            {"recipient": "   ", "text": "hi"},
            {"recipient": "Bob", "message": ""},
        ],
    )
    def test_missing_or_blank_is_noop(self, planner, arguments):
        intent = make_intent(IntentCategory.SEND_MESSAGE, arguments)
        assert planner.plan(intent) == NO_OP


class TestTranslate:
    """Tests for TranslateText planning."""

    def test_defaults_to_english_and_raw_text(self, planner):
        intent = make_intent(IntentCategory.TRANSLATE_TEXT, raw_text="bonjour")
        assert planner.plan(intent) == ExecuteDeviceActions(
            steps=(ShowTextStep(text="Translate to en:\nbonjour"),),
            summary="Show translation request",
        )

    def test_explicit_text_and_language(self, planner):
        intent = make_intent(
            IntentCategory.TRANSLATE_TEXT, {"text": "good night", "targetLang": "de"}
        )
        plan = planner.plan(intent)
        assert plan.steps == (ShowTextStep(text="Translate to de:\ngood night"),)


class TestControlDevice:
    """Tests for ControlDevice planning."""

    @pytest.mark.parametrize(
        "control,expected",
        [
            ("wifi", SystemControlType.TOGGLE_WIFI),
            ("Turn WiFi off", SystemControlType.TOGGLE_WIFI),
            ("bluetooth", SystemControlType.TOGGLE_BLUETOOTH),
            ("DND", SystemControlType.TOGGLE_DND),
            ("do not disturb", SystemControlType.TOGGLE_DND),
            ("screen brightness", SystemControlType.ADJUST_BRIGHTNESS),
            ("volume", SystemControlType.ADJUST_VOLUME),
        ],
    )
    def test_control_keywords(self, planner, control, expected):
        intent = make_intent(IntentCategory.CONTROL_DEVICE, {"control": control})
        plan = planner.plan(intent)

        assert plan.steps == (SystemControlStep(control_type=expected),)
        assert plan.summary == f"Control system: {expected.value}"

    def test_wifi_wins_over_later_keywords(self, planner):
        intent = make_intent(IntentCategory.CONTROL_DEVICE, {"control": "wifi and volume"})
        assert planner.plan(intent).steps[0].control_type == SystemControlType.TOGGLE_WIFI

    def test_value_is_forwarded(self, planner):
        intent = make_intent(
            IntentCategory.CONTROL_DEVICE, {"control": "volume", "value": "40"}
        )
        assert planner.plan(intent).steps == (
            SystemControlStep(control_type=SystemControlType.ADJUST_VOLUME, value="40"),
        )

    def test_missing_control_is_noop(self, planner):
        """Test a ControlDevice intent without the ``control`` key."""
        intent = make_intent(
            IntentCategory.CONTROL_DEVICE, {"target": "turn on wifi"}, raw_text="turn on wifi"
        )
        assert planner.plan(intent) == NO_OP

    def test_unmatched_control_is_noop(self, planner):
        intent = make_intent(IntentCategory.CONTROL_DEVICE, {"control": "airplane mode"})
        assert planner.plan(intent) == NO_OP


class TestSearchAndWeather:
    """Tests for SearchWeb and GetWeather planning."""

    def test_search_uses_query(self, planner):
        intent = make_intent(IntentCategory.SEARCH_WEB, {"query": "python asyncio"})
        assert planner.plan(intent) == ExecuteDeviceActions(
            steps=(ShowTextStep(text="Search for: python asyncio"),), summary="Search the web"
        )

    def test_search_falls_back_to_raw_text(self, planner):
        intent = make_intent(IntentCategory.SEARCH_WEB, raw_text="best pizza nearby")
        assert planner.plan(intent).steps == (ShowTextStep(text="Search for: best pizza nearby"),)

    def test_weather_default_location(self, planner):
        intent = make_intent(IntentCategory.GET_WEATHER)
        assert planner.plan(intent) == ExecuteDeviceActions(
            steps=(ShowTextStep(text="Get weather for current location"),),
            summary="Get weather",
        )

    def test_weather_location(self, planner):
        intent = make_intent(IntentCategory.GET_WEATHER, {"location": "Lisbon"})
        assert planner.plan(intent).steps == (ShowTextStep(text="Get weather for Lisbon"),)


class TestUnknownAndRouter:
    """Tests for Unknown intents and the router façade."""

    def test_unknown_is_noop(self, planner):
        intent = make_intent(IntentCategory.UNKNOWN, {"target": "x"}, confidence=1.0)
        assert isinstance(planner.plan(intent), NoOp)

    def test_router_delegates_to_planner(self):
        router = SkillRouter(ActionPlanner(confidence_gate=0.9))
        intent = make_intent(IntentCategory.SMALL_TALK, confidence=0.8, raw_text="hi")
        assert router.route(intent) == NO_OP

    def test_router_default_planner(self):
        router = SkillRouter()
        intent = make_intent(IntentCategory.SMALL_TALK, raw_text="hi")
        assert router.route(intent) == AnswerDirectly("hi")


class TestRequiredArguments:
    """Tests for the required-argument contract helpers."""

    def test_table_covers_argument_dependent_categories(self):
        assert set(REQUIRED_ARGUMENTS) == {
            IntentCategory.OPEN_APP,
            IntentCategory.SEND_MESSAGE,
            IntentCategory.CONTROL_DEVICE,
        }

    def test_missing_arguments(self):
        intent = make_intent(IntentCategory.SEND_MESSAGE, {"text": "hi"})
        assert missing_arguments(intent) == [("recipient", "target")]

    def test_no_requirements(self):
        assert missing_arguments(make_intent(IntentCategory.GET_WEATHER)) == []
