"""Data models for the Astra brain."""

from .intent import ClassifiedIntent, IntentCategory
from .memory import MemoryTurn
from .plan import (
    NO_OP,
    ActionPlan,
    AnswerDirectly,
    DeviceActionStep,
    ExecuteDeviceActions,
    NavigateToSettingsStep,
    NoOp,
    OpenAppStep,
    SendMessageStep,
    ShowTextStep,
    SystemControlStep,
    SystemControlType,
)
from .result import ActionRequired, DirectReply, Ignored, TurnResult, describe_result

__all__ = [
    "ClassifiedIntent",
    "IntentCategory",
    "MemoryTurn",
    "ActionPlan",
    "AnswerDirectly",
    "ExecuteDeviceActions",
    "NoOp",
    "NO_OP",
    "DeviceActionStep",
    "OpenAppStep",
    "SendMessageStep",
    "ShowTextStep",
    "NavigateToSettingsStep",
    "SystemControlStep",
    "SystemControlType",
    "TurnResult",
    "DirectReply",
    "ActionRequired",
    "Ignored",
    "describe_result",
]
