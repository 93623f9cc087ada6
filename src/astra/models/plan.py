"""Action plans and the device steps they are made of."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class SystemControlType(str, Enum):
    """System settings a control step can change."""

    TOGGLE_WIFI = "ToggleWifi"
    TOGGLE_BLUETOOTH = "ToggleBluetooth"
    TOGGLE_DND = "ToggleDnd"
    ADJUST_BRIGHTNESS = "AdjustBrightness"
    ADJUST_VOLUME = "AdjustVolume"


@dataclass(frozen=True)
class OpenAppStep:
    """Launch an application by name hint or package."""

    app_name_hint: Optional[str] = None
    package_name: Optional[str] = None


@dataclass(frozen=True)
class SendMessageStep:
    recipient_hint: str
    message: str


@dataclass(frozen=True)
class ShowTextStep:
    text: str


@dataclass(frozen=True)
class NavigateToSettingsStep:
    section_hint: str


@dataclass(frozen=True)
class SystemControlStep:
    control_type: SystemControlType
    value: Optional[str] = None


DeviceActionStep = Union[
    OpenAppStep, SendMessageStep, ShowTextStep, NavigateToSettingsStep, SystemControlStep
]


@dataclass(frozen=True)
class AnswerDirectly:
    """Reply to the user with text; a blank text asks the brain to generate one."""

    response_text: str


@dataclass(frozen=True)
class ExecuteDeviceActions:
    """Ordered device steps to be executed outside the core."""

    steps: Tuple[DeviceActionStep, ...] = field(default_factory=tuple)
    summary: Optional[str] = None

    def __post_init__(self):
        # Accept any sequence but keep the plan immutable.
        object.__setattr__(self, "steps", tuple(self.steps))


@dataclass(frozen=True)
class NoOp:
    """Nothing to do for this intent."""


NO_OP = NoOp()

ActionPlan = Union[AnswerDirectly, ExecuteDeviceActions, NoOp]
