from typing import List

from readiness_bot.ai_assistant.health_agents.base import HealthAgent
from readiness_bot.service.health_analysis.common.constants import AgentThresholds
from readiness_bot.service.health_analysis.common.data_models import (
    ActionKind,
    AgentContext,
    AgentRecommendation,
    BurnoutLevel,
    Priority,
    RecommendationType,
)
from readiness_bot.service.health_analysis.core_metrics.anomalies import detect_anomalies
from readiness_bot.service.health_analysis.core_metrics.burnout_risk import compute_burnout_risk


class BurnoutGuardianAgent(HealthAgent):
    id = "burnout-guardian"
    name = "BurnoutGuardianAgent"
    description = "Monitors for signs of burnout and overtraining, provides preventive interventions"

    async def analyze(self, context: AgentContext) -> List[AgentRecommendation]:
        today, baseline = context.today, context.baseline
        recommendations = []

        burnout = compute_burnout_risk(context.last_7_days, baseline)
        if burnout.level in (BurnoutLevel.YELLOW, BurnoutLevel.RED):
            recommendations.append(
                self.recommendation(
                    "burnout",
                    RecommendationType.STRESS,
                    f"Burnout Risk: {burnout.level.value}",
                    ". ".join(burnout.rationale),
                    Priority.HIGH,
                    actions=[("View Actions", ActionKind.ACCEPT), ("Dismiss", ActionKind.REJECT)],
                )
            )

        if today.stress_score > AgentThresholds.STRESS_ALERT:
            recommendations.append(
                self.recommendation(
                    "stress",
                    RecommendationType.STRESS,
                    "Stress Relief Needed",
                    "Your stress is elevated. Try a 5-min breathing exercise.",
                    Priority.MEDIUM,
                    actions=[("Start Breathing", ActionKind.ACCEPT), ("Later", ActionKind.SNOOZE)],
                )
            )

        for anomaly in detect_anomalies(today, baseline):
            recommendations.append(
                self.recommendation(
                    "anomaly",
                    RecommendationType.ALERT,
                    f"Alert: {anomaly.metric}",
                    f"{anomaly.deviation}. {anomaly.cause}. Suggestion: {anomaly.suggestion}",
                    Priority.HIGH,
                )
            )

        return recommendations
