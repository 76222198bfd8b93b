from typing import List, Optional

from loguru import logger

from readiness_bot.ai_assistant.health_agents.base import build_agent_context
from readiness_bot.ai_assistant.orchestrator import AgentOrchestrator
from readiness_bot.service.health_analysis.common.data_models import (
    AgentContext,
    AgentRecommendation,
    Anomaly,
    BurnoutRisk,
    DailyPlan,
    ReadinessScore,
    SleepOption,
    WhatIfResult,
)
from readiness_bot.service.health_analysis.common.errors import NoMetricsError
from readiness_bot.service.health_analysis.core_metrics.anomalies import detect_anomalies
from readiness_bot.service.health_analysis.core_metrics.burnout_risk import compute_burnout_risk
from readiness_bot.service.health_analysis.core_metrics.daily_plan import generate_daily_plan
from readiness_bot.service.health_analysis.core_metrics.readiness import compute_readiness
from readiness_bot.service.health_analysis.core_metrics.sleep_planner import generate_sleep_options
from readiness_bot.service.health_analysis.core_metrics.what_if import simulate_what_if
from readiness_bot.service.metrics_repository import MetricsRepository


class RecommendationService:
    """
    Loads a user's data from the repository and runs the analysis engine on it.

    This is the only place that ties storage and the engine together; the engine itself
    never touches the repository.
    """

    def __init__(self, repository: MetricsRepository, orchestrator: AgentOrchestrator) -> None:
        self.repository = repository
        self.orchestrator = orchestrator

    def build_context(self, user_id: int) -> AgentContext:
        history = self.repository.load_metrics(user_id)
        if not history:
            raise NoMetricsError(user_id)
        return build_agent_context(self.repository.load_profile(user_id), history)

    def readiness(self, user_id: int) -> ReadinessScore:
        context = self.build_context(user_id)
        return compute_readiness(context.today, context.baseline, context.last_7_days)

    def burnout_risk(self, user_id: int) -> BurnoutRisk:
        context = self.build_context(user_id)
        return compute_burnout_risk(context.last_7_days, context.baseline)

    def anomalies(self, user_id: int) -> List[Anomaly]:
        context = self.build_context(user_id)
        return detect_anomalies(context.today, context.baseline)

    def daily_plan(self, user_id: int) -> DailyPlan:
        context = self.build_context(user_id)
        return generate_daily_plan(context.profile, context.today, context.last_7_days, context.baseline)

    def what_if(self, user_id: int, option_label: str) -> WhatIfResult:
        context = self.build_context(user_id)
        return simulate_what_if(option_label, context.baseline, context.today)

    def sleep_options(
        self, user_id: int, desired_bedtime: float, wake_time: float, early_event_hour: Optional[float] = None
    ) -> List[SleepOption]:
        context = self.build_context(user_id)
        return generate_sleep_options(context.baseline, context.today, desired_bedtime, wake_time, early_event_hour)

    async def recommendations(self, user_id: int) -> List[AgentRecommendation]:
        context = self.build_context(user_id)
        logger.info(f"Running recommendation agents for user {user_id} on {context.today.date}")
        return await self.orchestrator.analyze(context)
