"""
Common agent contract.

Every recommendation agent exposes fixed identity fields and a single coroutine,
``analyze(context) -> list[AgentRecommendation]``. Plain functions can be registered
too by wrapping them in a ``FunctionAgent``.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from readiness_bot.service.health_analysis.baselining.baseline_calculator import compute_baseline
from readiness_bot.service.health_analysis.common.constants import BaselineConfig
from readiness_bot.service.health_analysis.common.data_models import (
    ActionKind,
    AgentContext,
    AgentRecommendation,
    DailyMetrics,
    Priority,
    RecommendationAction,
    RecommendationType,
    UserProfile,
    new_recommendation_id,
)
from readiness_bot.service.health_analysis.common.errors import NoMetricsError

AnalyzeFn = Callable[[AgentContext], Union[List[AgentRecommendation], Awaitable[List[AgentRecommendation]]]]


class HealthAgent(ABC):
    id: str
    name: str
    description: str = ""

    @abstractmethod
    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        raise NotImplementedError

    def recommendation(
        self,
        id_prefix: str,
        type: RecommendationType,
        title: str,
        rationale: str,
        priority: Priority,
        actions: Sequence[tuple] = (),
    ) -> AgentRecommendation:
        """Build a recommendation attributed to this agent. ``actions`` holds (label, ActionKind) pairs."""
        return AgentRecommendation(
            id=new_recommendation_id(id_prefix),
            agent=self.name,
            type=type,
            title=title,
            rationale=rationale,
            priority=priority,
            actions=[RecommendationAction(label=label, kind=ActionKind(kind)) for label, kind in actions],
        )


class FunctionAgent(HealthAgent):
    """Adapts a plain or async callable to the agent contract."""

    def __init__(self, id: str, fn: AnalyzeFn, name: Optional[str] = None, description: str = ""):
        self.id = id
        self.name = name or id
        self.description = description
        self._fn = fn

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        result = self._fn(context)
        if inspect.isawaitable(result):
            result = await result
        return result


def build_agent_context(profile: UserProfile, history: Sequence[DailyMetrics]) -> AgentContext:
    """
    Assemble the context for one analysis cycle.

    Args:
        profile: The user's profile.
        history: Full metrics history, oldest first. Today is the last record.

    Returns:
        AgentContext with today, the last 7 days and the baseline over the full history.

    Raises:
        NoMetricsError: If the history is empty.
    """
    if not history:
        raise NoMetricsError()
    history = list(history)
    return AgentContext(
        profile=profile,
        today=history[-1],
        last_7_days=history[-BaselineConfig.RECENT_WINDOW_DAYS :],
        baseline=compute_baseline(history),
        all_metrics=history,
    )
