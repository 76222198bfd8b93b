"""
Burnout risk module.

This module scores the most recent week of metrics against the baseline. Each warning
sign adds an independent penalty to a risk score, which is then mapped to a
Green/Yellow/Red level together with the rationale and suggested actions.
"""

from typing import Callable, Sequence

from loguru import logger

from readiness_bot.service.health_analysis.common.constants import BurnoutThresholds
from readiness_bot.service.health_analysis.common.data_models import Baseline, BurnoutLevel, BurnoutRisk, DailyMetrics


def _average(window: Sequence[DailyMetrics], getter: Callable[[DailyMetrics], float]) -> float:
    return sum(getter(m) for m in window) / len(window)


def risk_level(risk_score: int) -> BurnoutLevel:
    """Map an additive risk score to its level."""
    if risk_score >= BurnoutThresholds.RED_LEVEL:
        return BurnoutLevel.RED
    if risk_score >= BurnoutThresholds.YELLOW_LEVEL:
        return BurnoutLevel.YELLOW
    return BurnoutLevel.GREEN


def compute_burnout_risk(last_7_days: Sequence[DailyMetrics], baseline: Baseline) -> BurnoutRisk:
    """
    Assess burnout risk from recent trends.

    HRV and resting HR are averaged over the last 3 days of the window, sleep efficiency,
    stress, mood and energy over the whole window. Shorter windows are averaged over
    whatever days exist; an empty window is reported as stable.

    Args:
        last_7_days: The 7 most recent days, oldest first.
        baseline: The user's baseline.

    Returns:
        BurnoutRisk with level, rationale, actions and the underlying risk score.
    """
    t = BurnoutThresholds
    rationale = []
    actions = []
    risk_score = 0

    window = list(last_7_days)
    if window:
        trend_window = window[-t.TREND_WINDOW_DAYS :]

        avg_hrv = _average(trend_window, lambda m: m.hrv)
        if avg_hrv < baseline.hrv * t.HRV_DECLINE_RATIO:
            risk_score += t.HRV_DECLINE_PENALTY
            rationale.append("HRV has been declining for 3+ days")
            actions.append("Prioritize sleep and reduce training intensity")

        avg_rhr = _average(trend_window, lambda m: m.resting_hr)
        if avg_rhr > baseline.resting_hr * t.RHR_ELEVATED_RATIO:
            risk_score += t.RHR_ELEVATED_PENALTY
            rationale.append("Resting heart rate elevated above baseline")
            actions.append("Take an extra rest day and monitor for illness")

        avg_sleep_efficiency = _average(window, lambda m: m.sleep_efficiency)
        if avg_sleep_efficiency < baseline.sleep_efficiency * t.SLEEP_EFFICIENCY_RATIO:
            risk_score += t.SLEEP_EFFICIENCY_PENALTY
            rationale.append("Sleep efficiency has been poor")
            actions.append("Focus on sleep hygiene: consistent bedtime, cool dark room")

        avg_stress = _average(window, lambda m: m.stress_score)
        avg_mood = _average(window, lambda m: m.mood_score)
        avg_energy = _average(window, lambda m: m.energy_score)
        if avg_stress > t.STRESS_HIGH and (avg_mood < t.MOOD_ENERGY_LOW or avg_energy < t.MOOD_ENERGY_LOW):
            risk_score += t.STRESS_MOOD_PENALTY
            rationale.append("High stress combined with low mood and energy")
            actions.append("Schedule mental health break, practice mindfulness, talk to someone")
    else:
        logger.warning("Burnout risk requested for an empty window")

    level = risk_level(risk_score)
    if level == BurnoutLevel.RED:
        actions.append("Consider consulting a healthcare professional")
    elif level == BurnoutLevel.GREEN:
        rationale.append("All key recovery markers are stable")
        actions.append("Keep up your current balance of training and recovery")

    logger.debug(f"Burnout risk score {risk_score} over {len(window)} days -> {level.value}")
    return BurnoutRisk(level=level, rationale=rationale, actions=actions, risk_score=risk_score)
