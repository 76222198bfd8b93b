import asyncio
import random
from typing import Dict, List, Optional

from loguru import logger

from readiness_bot.ai_assistant.health_agents.base import HealthAgent
from readiness_bot.ai_assistant.health_agents.burnout_guardian_agent import BurnoutGuardianAgent
from readiness_bot.ai_assistant.health_agents.fitness_coach_agent import FitnessCoachAgent
from readiness_bot.ai_assistant.health_agents.planner_agent import PlannerAgent
from readiness_bot.ai_assistant.health_agents.sleep_agent import SleepAgent
from readiness_bot.service.health_analysis.common.data_models import AgentContext, AgentRecommendation


def _is_cancelling() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class AgentOrchestrator:
    """
    Registry of recommendation agents that fans one context out to all of them.

    Agents run concurrently, but their results are merged in registration order. A
    failing agent (exception, timeout or a non-list result) is logged and contributes
    no recommendations; the remaining agents are unaffected.
    """

    def __init__(self, agent_timeout_s: Optional[float] = None):
        """
        Args:
            agent_timeout_s: Optional per-agent time limit. An agent exceeding it counts as failed.
        """
        self._agents: Dict[str, HealthAgent] = {}
        self.agent_timeout_s = agent_timeout_s

    @classmethod
    def with_default_agents(
        cls,
        rng: Optional[random.Random] = None,
        remote_advisor: Optional[HealthAgent] = None,
        agent_timeout_s: Optional[float] = None,
    ) -> "AgentOrchestrator":
        orchestrator = cls(agent_timeout_s=agent_timeout_s)
        orchestrator.register_agent(SleepAgent())
        orchestrator.register_agent(BurnoutGuardianAgent())
        orchestrator.register_agent(FitnessCoachAgent(rng=rng))
        orchestrator.register_agent(PlannerAgent())
        if remote_advisor is not None:
            orchestrator.register_agent(remote_advisor)
        return orchestrator

    @property
    def agents(self) -> List[HealthAgent]:
        return list(self._agents.values())

    def get_agent(self, agent_id: str) -> Optional[HealthAgent]:
        return self._agents.get(agent_id)

    def register_agent(self, agent: HealthAgent) -> None:
        """Register an agent. Re-registering an id replaces the agent but keeps its position."""
        if agent.id in self._agents:
            logger.warning(f"Replacing already registered agent '{agent.id}'")
        self._agents[agent.id] = agent
        logger.info(f"Registered agent '{agent.id}' ({agent.name})")

    def unregister_agent(self, agent_id: str) -> bool:
        """Remove an agent. Returns False if no agent with that id was registered."""
        agent = self._agents.pop(agent_id, None)
        if agent is None:
            logger.warning(f"Cannot unregister unknown agent '{agent_id}'")
            return False
        logger.info(f"Unregistered agent '{agent_id}'")
        return True

    async def _run_agent(self, agent: HealthAgent, context: AgentContext) -> List[AgentRecommendation]:
        if self.agent_timeout_s is None:
            return await agent.analyze(context)
        return await asyncio.wait_for(agent.analyze(context), timeout=self.agent_timeout_s)

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        """
        Run every registered agent against the context.

        Args:
            context: The shared analysis context.

        Returns:
            Concatenated recommendations, grouped by agent in registration order.
        """
        agents = self.agents
        logger.info(f"Running {len(agents)} agents for {context.today.date}")
        results = await asyncio.gather(*(self._run_agent(agent, context) for agent in agents), return_exceptions=True)

        recommendations: List[AgentRecommendation] = []
        for agent, result in zip(agents, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError) and _is_cancelling():
                    raise result
                logger.opt(exception=result).error(f"Agent '{agent.id}' failed: {result!r}")
                continue
            if not isinstance(result, list):
                logger.error(f"Agent '{agent.id}' returned {type(result).__name__} instead of a list, ignoring")
                continue
            logger.debug(f"Agent '{agent.id}' produced {len(result)} recommendations")
            recommendations.extend(result)

        logger.info(f"Agents produced {len(recommendations)} recommendations in total")
        return recommendations
