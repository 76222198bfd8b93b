import random
from functools import cached_property
from typing import Optional

from readiness_bot.ai_assistant.health_agents.remote_advisor_agent import RemoteAdvisorAgent
from readiness_bot.ai_assistant.local_trace_exporter import configure_local_tracing
from readiness_bot.ai_assistant.orchestrator import AgentOrchestrator
from readiness_bot.config import BotSettings
from readiness_bot.service.metrics_repository import MetricsRepository
from readiness_bot.service.recommendation_service import RecommendationService
from readiness_bot.utils import get_user_directory


class ServiceFactory:
    def __init__(self, bot_settings: BotSettings):
        self.bot_settings = bot_settings

    @cached_property
    def metrics_repository(self) -> MetricsRepository:
        data_dir = get_user_directory(self.bot_settings.out_dir, self.bot_settings.my_telegram_user_id, "metrics")
        return MetricsRepository(data_dir / "metrics.duckdb")

    @cached_property
    def remote_advisor(self) -> Optional[RemoteAdvisorAgent]:
        remote_settings = self.bot_settings.remote_advisor
        if not remote_settings.enabled:
            return None
        configure_local_tracing(self.bot_settings.out_dir / "log" / "remote_advisor_traces.log")
        return RemoteAdvisorAgent(remote_settings)

    @cached_property
    def orchestrator(self) -> AgentOrchestrator:
        seed = self.bot_settings.fitness_seed
        return AgentOrchestrator.with_default_agents(
            rng=random.Random(seed) if seed is not None else None,
            remote_advisor=self.remote_advisor,
            agent_timeout_s=self.bot_settings.agent_timeout_s,
        )

    @cached_property
    def recommendation_service(self) -> RecommendationService:
        return RecommendationService(self.metrics_repository, self.orchestrator)
