import random
from typing import List, Optional

from readiness_bot.ai_assistant.health_agents.base import HealthAgent
from readiness_bot.service.health_analysis.common.constants import AgentThresholds
from readiness_bot.service.health_analysis.common.data_models import (
    ActionKind,
    AgentContext,
    AgentRecommendation,
    BurnoutLevel,
    Priority,
    RecommendationType,
    TrainingIntensity,
)
from readiness_bot.service.health_analysis.core_metrics.burnout_risk import compute_burnout_risk
from readiness_bot.service.health_analysis.core_metrics.readiness import compute_readiness

QUALITY_SESSION_INTENSITIES = (TrainingIntensity.HIIT, TrainingIntensity.STRENGTH)


class FitnessCoachAgent(HealthAgent):
    """
    Training recommendations based on readiness and recovery status.

    The quality-session intensity is picked at random between HIIT and Strength, so the
    suggestion varies from day to day. Pass a seeded ``random.Random`` for repeatable output.
    """

    id = "fitness-coach"
    name = "FitnessCoachAgent"
    description = "Provides training recommendations based on readiness and recovery status"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        today, baseline = context.today, context.baseline
        recommendations = []

        readiness = compute_readiness(today, baseline, context.last_7_days)
        burnout = compute_burnout_risk(context.last_7_days, baseline)

        if burnout.level == BurnoutLevel.RED or readiness.score < AgentThresholds.REST_DAY_READINESS:
            recommendations.append(
                self.recommendation(
                    "fitness",
                    RecommendationType.TRAINING,
                    "Recovery Day Recommended",
                    "Your body needs rest. Light walking or stretching only today.",
                    Priority.HIGH,
                    actions=[("Accept Rest Day", ActionKind.ACCEPT), ("Light Activity", ActionKind.SNOOZE)],
                )
            )
        elif (
            readiness.score >= AgentThresholds.QUALITY_SESSION_READINESS
            and today.training_load < AgentThresholds.QUALITY_SESSION_MAX_LOAD
        ):
            intensity = self.rng.choice(QUALITY_SESSION_INTENSITIES)
            recommendations.append(
                self.recommendation(
                    "fitness",
                    RecommendationType.TRAINING,
                    f"{intensity.value} Session Today",
                    "You're well-recovered. Great day for a quality session.",
                    Priority.MEDIUM,
                    actions=[("Start Workout", ActionKind.ACCEPT), ("Do Later", ActionKind.SNOOZE)],
                )
            )

        return recommendations
