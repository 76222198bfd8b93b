import asyncio
import random

import pytest

from readiness_bot.ai_assistant.health_agents.base import FunctionAgent, HealthAgent
from readiness_bot.ai_assistant.orchestrator import AgentOrchestrator
from readiness_bot.service.health_analysis.common.data_models import (
    AgentRecommendation,
    Priority,
    RecommendationType,
)
from tests import make_context


def make_recommendation(agent: str, title: str) -> AgentRecommendation:
    return AgentRecommendation(
        agent=agent, type=RecommendationType.GENERAL, title=title, rationale="test", priority=Priority.LOW
    )


class SlowAgent(HealthAgent):
    id = "slow"
    name = "SlowAgent"

    def __init__(self, delay_s: float = 0.05):
        self.delay_s = delay_s

    async def analyze(self, context):
        await asyncio.sleep(self.delay_s)
        return [make_recommendation(self.name, "slow")]


def failing_agent(context):
    raise RuntimeError("boom")


@pytest.fixture
def orchestrator():
    orchestrator = AgentOrchestrator()
    orchestrator.register_agent(SlowAgent())
    orchestrator.register_agent(FunctionAgent("failing", failing_agent))
    orchestrator.register_agent(FunctionAgent("fast", lambda context: [make_recommendation("fast", "fast")]))
    return orchestrator


class TestAgentOrchestrator:
    @pytest.mark.asyncio
    async def test_failing_agent_is_skipped_and_order_is_kept(self, orchestrator):
        recommendations = await orchestrator.analyze(make_context())

        assert [r.title for r in recommendations] == ["slow", "fast"]

    @pytest.mark.asyncio
    async def test_async_function_agent(self):
        async def analyze(context):
            return [make_recommendation("async", "async")]

        orchestrator = AgentOrchestrator()
        orchestrator.register_agent(FunctionAgent("async", analyze))

        assert [r.title for r in await orchestrator.analyze(make_context())] == ["async"]

    @pytest.mark.asyncio
    async def test_timeout_counts_as_failure(self, orchestrator):
        orchestrator.agent_timeout_s = 0.01
        orchestrator.register_agent(SlowAgent(delay_s=1))

        recommendations = await orchestrator.analyze(make_context())

        assert [r.title for r in recommendations] == ["fast"]

    @pytest.mark.asyncio
    async def test_agent_cancelling_itself_counts_as_failure(self):
        async def cancelled(context):
            raise asyncio.CancelledError()

        orchestrator = AgentOrchestrator()
        orchestrator.register_agent(FunctionAgent("cancelled", cancelled))
        orchestrator.register_agent(FunctionAgent("ok", lambda context: [make_recommendation("ok", "ok")]))

        assert [r.title for r in await orchestrator.analyze(make_context())] == ["ok"]

    @pytest.mark.asyncio
    async def test_cancelling_the_analysis_propagates(self):
        orchestrator = AgentOrchestrator()
        orchestrator.register_agent(SlowAgent(delay_s=1))
        task = asyncio.create_task(orchestrator.analyze(make_context()))
        await asyncio.sleep(0.01)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_non_list_result_is_ignored(self):
        orchestrator = AgentOrchestrator()
        orchestrator.register_agent(FunctionAgent("broken", lambda context: None))
        orchestrator.register_agent(FunctionAgent("ok", lambda context: [make_recommendation("ok", "ok")]))

        assert [r.title for r in await orchestrator.analyze(make_context())] == ["ok"]

    @pytest.mark.asyncio
    async def test_no_agents(self):
        assert await AgentOrchestrator().analyze(make_context()) == []

    def test_replacing_an_agent_keeps_its_position(self, orchestrator):
        replacement = FunctionAgent("slow", lambda context: [], name="Replacement")

        orchestrator.register_agent(replacement)

        assert [agent.id for agent in orchestrator.agents] == ["slow", "failing", "fast"]
        assert orchestrator.get_agent("slow") is replacement

    def test_unregister(self, orchestrator):
        assert orchestrator.unregister_agent("failing") is True
        assert orchestrator.unregister_agent("failing") is False
        assert [agent.id for agent in orchestrator.agents] == ["slow", "fast"]
        assert orchestrator.get_agent("failing") is None

    def test_default_agents(self):
        orchestrator = AgentOrchestrator.with_default_agents(rng=random.Random(1))

        assert [agent.id for agent in orchestrator.agents] == ["sleep", "burnout-guardian", "fitness-coach", "planner"]

    def test_default_agents_with_remote_advisor(self):
        remote = FunctionAgent("remote-advisor", lambda context: [])

        orchestrator = AgentOrchestrator.with_default_agents(remote_advisor=remote)

        assert orchestrator.agents[-1] is remote

    @pytest.mark.asyncio
    async def test_default_agents_on_a_calm_week(self):
        orchestrator = AgentOrchestrator.with_default_agents(rng=random.Random(1))

        recommendations = await orchestrator.analyze(make_context())

        assert [r.agent for r in recommendations] == ["FitnessCoachAgent", "PlannerAgent"]
        assert len({r.id for r in recommendations}) == len(recommendations)
