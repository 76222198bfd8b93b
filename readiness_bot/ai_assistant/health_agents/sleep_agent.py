from typing import List

from readiness_bot.ai_assistant.health_agents.base import HealthAgent
from readiness_bot.service.health_analysis.common.constants import AgentThresholds
from readiness_bot.service.health_analysis.common.data_models import (
    ActionKind,
    AgentContext,
    AgentRecommendation,
    Priority,
    RecommendationType,
)


class SleepAgent(HealthAgent):
    id = "sleep"
    name = "SleepAgent"
    description = "Monitors sleep patterns and provides sleep optimization recommendations"

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        recommendations = []
        last_7_days = context.last_7_days
        if not last_7_days:
            return recommendations

        # Expected sleep over the days present; fewer than 7 for a new user
        sleep_debt = context.baseline.sleep_hours * len(last_7_days) - sum(m.sleep_hours for m in last_7_days)
        if sleep_debt > AgentThresholds.SLEEP_DEBT_HOURS:
            recommendations.append(
                self.recommendation(
                    "sleep",
                    RecommendationType.SLEEP,
                    "Sleep Debt Detected",
                    f"You're {sleep_debt:.1f}hrs behind on sleep this week. "
                    "This affects recovery and performance.",
                    Priority.HIGH,
                    actions=[("Set Early Bedtime", ActionKind.ACCEPT), ("Remind Me Later", ActionKind.SNOOZE)],
                )
            )

        avg_sleep_efficiency = sum(m.sleep_efficiency for m in last_7_days) / len(last_7_days)
        if avg_sleep_efficiency < AgentThresholds.SLEEP_EFFICIENCY_MIN:
            recommendations.append(
                self.recommendation(
                    "sleep-efficiency",
                    RecommendationType.SLEEP,
                    "Poor Sleep Quality",
                    f"Your average sleep efficiency is {avg_sleep_efficiency:.0f}%. "
                    "Try improving your sleep hygiene.",
                    Priority.MEDIUM,
                    actions=[("View Tips", ActionKind.ACCEPT), ("Dismiss", ActionKind.REJECT)],
                )
            )

        return recommendations
