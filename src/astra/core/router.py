"""Skill router that hands intents to the planning strategy."""

from typing import Optional

from ..models.intent import ClassifiedIntent
from ..models.plan import ActionPlan
from .planner import ActionPlanner


class SkillRouter:
    """Routes intents to a planner; kept separate so planning can vary on its own."""

    def __init__(self, planner: Optional[ActionPlanner] = None):
        self.planner = planner or ActionPlanner()

    def route(self, intent: ClassifiedIntent) -> ActionPlan:
        return self.planner.plan(intent)
