"""
LLM-backed recommendation agent.

Sends the analysis context to a remote model through the ``agents`` SDK and maps the
structured answer onto AgentRecommendations. Any failure of the remote call (missing
API key, timeout, rate limit, quota, malformed output) degrades to a local rule-based
recommendation set, so the orchestrator never sees an exception from this agent.
"""

import asyncio
import datetime as dt
import json
import time
from typing import Any, Dict, List, Optional, Tuple

from agents import Agent, Runner
from loguru import logger
from pydantic import BaseModel, Field

from readiness_bot.ai_assistant.health_agents.base import HealthAgent
from readiness_bot.ai_assistant.model_factory import ModelFactory, ModelProvider
from readiness_bot.service.health_analysis.common.constants import AgentThresholds
from readiness_bot.service.health_analysis.common.data_models import (
    ActionKind,
    AgentContext,
    AgentRecommendation,
    Priority,
    RecommendationType,
)


class RemoteAdvisorConfig(BaseModel):
    enabled: bool = False
    model_provider: ModelProvider = ModelProvider.OPENAI
    model_name: str = "gpt-4.1"
    focus: str = "general health optimization"
    max_recommendations: int = 3
    cache_ttl_s: int = 3600
    timeout_s: float = 30.0
    instructions: str = """
    # Health Recommendation Advisor

    You receive a JSON document with a user's profile, today's metrics, the last 7 days of metrics,
    their personal baseline and precomputed trends, plus a focus area.

    Return at most the requested number of concrete, actionable recommendations for today.
    - Every recommendation needs a short title and a one or two sentence rationale that cites the data.
    - Use priority "high" only for signs of illness, overtraining or burnout.
    - Never give medical diagnoses; suggest consulting a professional when markers look alarming.
    """


class RemoteRecommendation(BaseModel):
    type: RecommendationType = RecommendationType.GENERAL
    title: str
    rationale: str
    priority: Priority = Priority.MEDIUM


class RemoteRecommendations(BaseModel):
    recommendations: List[RemoteRecommendation] = Field(default_factory=list)


def compute_trends(context: AgentContext) -> Dict[str, Any]:
    """Direction and relative change of HRV, sleep and stress over the last 7 days."""
    last_7_days, baseline = context.last_7_days, context.baseline
    avg_hrv = sum(m.hrv for m in last_7_days) / len(last_7_days)
    avg_sleep = sum(m.sleep_hours for m in last_7_days) / len(last_7_days)
    avg_stress = sum(m.stress_score for m in last_7_days) / len(last_7_days)

    def change(value: float, reference: float) -> str:
        return f"{(value - reference) / reference * 100:.1f}" if reference else "0.0"

    return {
        "hrv_trend": "improving" if avg_hrv > baseline.hrv else "declining",
        "sleep_trend": "improving" if avg_sleep > baseline.sleep_hours else "declining",
        "stress_trend": "improving" if avg_stress < baseline.stress_score else "worsening",
        "hrv_change": change(avg_hrv, baseline.hrv),
        "sleep_change": change(avg_sleep, baseline.sleep_hours),
        "stress_change": change(avg_stress, baseline.stress_score),
    }


class RemoteAdvisorAgent(HealthAgent):
    id = "remote-advisor"
    name = "RemoteAdvisorAgent"
    description = "AI-powered recommendations from a remote language model"

    def __init__(self, config: Optional[RemoteAdvisorConfig] = None):
        self.config = config or RemoteAdvisorConfig(enabled=True)
        self._agent: Optional[Agent] = None
        self._cache: Dict[Tuple[dt.date, str], Tuple[float, List[AgentRecommendation]]] = {}

    def _get_agent(self) -> Agent:
        if self._agent is None:
            model = ModelFactory.build_model(self.config.model_provider, model_name=self.config.model_name)
            self._agent = Agent(
                name=self.name,
                instructions=self.config.instructions,
                model=model,
                output_type=RemoteRecommendations,
            )
        return self._agent

    def prepare_payload(self, context: AgentContext) -> Dict[str, Any]:
        profile = context.profile
        return {
            "context": {
                "profile": profile.model_dump(
                    mode="json", include={"name", "age", "goal", "chronotype", "exam_phase"}
                ),
                "today": context.today.model_dump(mode="json"),
                "last_7_days": [m.model_dump(mode="json") for m in context.last_7_days],
                "baseline": context.baseline.model_dump(mode="json"),
                "trends": compute_trends(context),
            },
            "focus": self.config.focus,
            "model": self.config.model_name,
            "max_recommendations": self.config.max_recommendations,
        }

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        logger.info(f"[{self.name}] Starting analysis for {context.today.date}")
        cached = self._get_cached(context)
        if cached is not None:
            logger.info(f"[{self.name}] Returning cached recommendations")
            return cached

        try:
            payload = json.dumps(self.prepare_payload(context))
            result = await asyncio.wait_for(Runner.run(self._get_agent(), input=payload), self.config.timeout_s)
            output = result.final_output
            if not isinstance(output, RemoteRecommendations):
                output = RemoteRecommendations.model_validate(output)
        except Exception as e:
            logger.error(f"[{self.name}] Remote recommendation call failed: {e!r}")
            return self.fallback_recommendations(context)

        recommendations = [
            self.recommendation(self.id, item.type, item.title, item.rationale, item.priority)
            for item in output.recommendations[: self.config.max_recommendations]
        ]
        if not recommendations:
            logger.warning(f"[{self.name}] Remote model returned no recommendations, using fallback")
            return self.fallback_recommendations(context)

        self._store(context, recommendations)
        logger.info(f"[{self.name}] Generated {len(recommendations)} recommendations")
        return recommendations

    def _store(self, context: AgentContext, recommendations: List[AgentRecommendation]) -> None:
        now = time.monotonic()
        expired = [key for key, (stored_at, _) in self._cache.items() if now - stored_at > self.config.cache_ttl_s]
        for key in expired:
            del self._cache[key]
        self._cache[(context.today.date, self.id)] = (now, recommendations)

    def _get_cached(self, context: AgentContext) -> Optional[List[AgentRecommendation]]:
        entry = self._cache.get((context.today.date, self.id))
        if entry is None:
            return None
        stored_at, recommendations = entry
        if time.monotonic() - stored_at > self.config.cache_ttl_s:
            del self._cache[(context.today.date, self.id)]
            return None
        return recommendations

    def fallback_recommendations(self, context: AgentContext) -> List[AgentRecommendation]:
        """Rule-based recommendations used whenever the remote model is unavailable."""
        logger.info(f"[{self.name}] Using fallback recommendations")
        today, baseline = context.today, context.baseline

        if today.hrv < baseline.hrv * AgentThresholds.REMOTE_FALLBACK_HRV_RATIO:
            return [
                self.recommendation(
                    f"{self.id}-fallback",
                    RecommendationType.ALERT,
                    "HRV significantly below baseline",
                    "Your HRV is low, indicating possible overtraining or stress. Consider a rest day.",
                    Priority.HIGH,
                    actions=[("Take Rest Day", ActionKind.ACCEPT), ("Ignore", ActionKind.REJECT)],
                )
            ]
        return [
            self.recommendation(
                f"{self.id}-fallback",
                RecommendationType.GENERAL,
                "Recovery Markers Look Steady",
                "Personalized AI advice is unavailable right now. Your HRV is within range of your baseline, "
                "so keep following today's plan.",
                Priority.LOW,
                actions=[("OK", ActionKind.ACCEPT)],
            )
        ]
