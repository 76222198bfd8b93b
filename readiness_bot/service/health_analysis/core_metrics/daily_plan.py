"""
Daily plan module.

Turns readiness, burnout risk and the user profile into today's training intensity,
a short list of priorities and tonight's sleep target.
"""

from typing import Sequence

from loguru import logger

from readiness_bot.service.health_analysis.common.constants import AgentThresholds, PlanThresholds
from readiness_bot.service.health_analysis.common.data_models import (
    Baseline,
    BurnoutLevel,
    BurnoutRisk,
    DailyMetrics,
    DailyPlan,
    Goal,
    ReadinessScore,
    TrainingIntensity,
    UserProfile,
)
from readiness_bot.service.health_analysis.core_metrics.burnout_risk import compute_burnout_risk
from readiness_bot.service.health_analysis.core_metrics.readiness import POSITIVE_NOTES, compute_readiness


def choose_training_intensity(
    profile: UserProfile, readiness: ReadinessScore, burnout: BurnoutRisk
) -> TrainingIntensity:
    if burnout.level == BurnoutLevel.RED or readiness.score < AgentThresholds.REST_DAY_READINESS:
        return TrainingIntensity.REST
    if readiness.score < PlanThresholds.LIGHT_READINESS:
        return TrainingIntensity.LIGHT
    if readiness.score < PlanThresholds.MODERATE_READINESS:
        return TrainingIntensity.MODERATE
    if profile.goal == Goal.LOSE_FAT:
        return TrainingIntensity.HIIT
    return TrainingIntensity.STRENGTH


def sleep_target_hours(profile: UserProfile, baseline: Baseline, readiness: ReadinessScore) -> float:
    target = max(profile.baseline_sleep_need, baseline.sleep_hours)
    if readiness.score < PlanThresholds.LIGHT_READINESS:
        target += PlanThresholds.EXTRA_SLEEP_HOURS
    return round(target, 2)


def generate_daily_plan(
    profile: UserProfile, today: DailyMetrics, last_7_days: Sequence[DailyMetrics], baseline: Baseline
) -> DailyPlan:
    """
    Build today's plan.

    Args:
        profile: User profile (goal and exam phase shape the plan).
        today: Today's metrics.
        last_7_days: The recent window, used for the burnout assessment.
        baseline: The user's baseline.

    Returns:
        DailyPlan with intensity, up to three priorities and the sleep target.
    """
    readiness = compute_readiness(today, baseline, last_7_days)
    burnout = compute_burnout_risk(last_7_days, baseline)

    intensity = choose_training_intensity(profile, readiness, burnout)
    target = sleep_target_hours(profile, baseline, readiness)

    priorities = []
    concerns = [reason for reason in readiness.explanation if reason not in POSITIVE_NOTES]
    if concerns:
        priorities.append(concerns[0])
    if profile.exam_phase:
        priorities.append("Protect deep-work blocks for exam prep")
    priorities.append(f"Hit your {target:g}h sleep target tonight")
    if today.stress_score > PlanThresholds.HIGH_STRESS:
        priorities.append("Keep stress low: schedule a 5-min breathing break")
    if len(priorities) < PlanThresholds.MAX_PRIORITIES:
        priorities.append("Stay consistent with your routine")

    plan = DailyPlan(
        training_intensity=intensity,
        priorities=priorities[: PlanThresholds.MAX_PRIORITIES],
        sleep_target_hours=target,
        readiness=readiness,
    )
    logger.debug(f"Daily plan for {today.date}: {plan.training_intensity.value}, {plan.priorities}")
    return plan
