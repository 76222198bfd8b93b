from typing import List

from readiness_bot.ai_assistant.health_agents.base import HealthAgent
from readiness_bot.service.health_analysis.common.constants import PlanThresholds
from readiness_bot.service.health_analysis.common.data_models import (
    ActionKind,
    AgentContext,
    AgentRecommendation,
    Priority,
    RecommendationType,
    TrainingIntensity,
)
from readiness_bot.service.health_analysis.core_metrics.daily_plan import generate_daily_plan

_PLAN_PRIORITY = {
    TrainingIntensity.REST: Priority.HIGH,
    TrainingIntensity.LIGHT: Priority.MEDIUM,
}


class PlannerAgent(HealthAgent):
    id = "planner"
    name = "PlannerAgent"
    description = "Turns readiness and the user's goals into a plan for the day"

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        plan = generate_daily_plan(context.profile, context.today, context.last_7_days, context.baseline)
        recommendations = [
            self.recommendation(
                "plan",
                RecommendationType.PLANNING,
                f"Today's Plan: {plan.training_intensity.value}",
                f"Readiness {plan.readiness.score}/100. Priorities: " + "; ".join(plan.priorities),
                _PLAN_PRIORITY.get(plan.training_intensity, Priority.LOW),
                actions=[("Accept Plan", ActionKind.ACCEPT), ("Adjust", ActionKind.REJECT)],
            )
        ]

        if context.profile.exam_phase and plan.readiness.score < PlanThresholds.LIGHT_READINESS:
            recommendations.append(
                self.recommendation(
                    "plan-exam",
                    RecommendationType.PLANNING,
                    "Protect Your Study Blocks",
                    "Recovery is low during exam prep. Keep study sessions to 50-minute blocks "
                    "with short breaks and skip late-night cramming.",
                    Priority.MEDIUM,
                    actions=[("Plan Breaks", ActionKind.ACCEPT), ("Later", ActionKind.SNOOZE)],
                )
            )

        return recommendations
