"""
Readiness score module.

This module combines today's metrics with the user's baseline into a 0-100 readiness
score. Every rule is an independent deduction from a starting score of 100 and adds
a human-readable explanation.
"""

from typing import Sequence

from loguru import logger

from readiness_bot.service.health_analysis.baselining.baseline_calculator import percent_delta, safe_reference
from readiness_bot.service.health_analysis.common.constants import BaselineConfig, ReadinessThresholds
from readiness_bot.service.health_analysis.common.data_models import Baseline, DailyMetrics, ReadinessScore

GOOD_SLEEP_NOTE = "Good sleep quality"
GOOD_RECOVERY_NOTE = "HRV above baseline - good recovery"
# Explanations that come without a deduction
POSITIVE_NOTES = frozenset({GOOD_SLEEP_NOTE, GOOD_RECOVERY_NOTE})


def sleep_quality_factor(today: DailyMetrics, baseline: Baseline) -> float:
    """Sleep duration relative to baseline, weighted by sleep efficiency (100 = baseline sleep at 100%)."""
    reference = safe_reference(baseline.sleep_hours, BaselineConfig.DEFAULT_SLEEP_HOURS)
    return (today.sleep_hours / reference) * today.sleep_efficiency


def compute_readiness(
    today: DailyMetrics, baseline: Baseline, last_7_days: Sequence[DailyMetrics]
) -> ReadinessScore:
    """
    Compute today's readiness score.

    Args:
        today: Today's metrics.
        baseline: The user's baseline.
        last_7_days: Recent window. Accepted for interface stability; no rule reads it yet.

    Returns:
        ReadinessScore clamped to [0, 100] with the ordered explanations.
    """
    t = ReadinessThresholds
    score = t.START_SCORE
    explanation = []

    sleep_factor = sleep_quality_factor(today, baseline)
    if sleep_factor < t.SLEEP_FACTOR_POOR:
        score -= t.SLEEP_POOR_DEDUCTION
        explanation.append("Poor sleep quality impacting recovery")
    elif sleep_factor < t.SLEEP_FACTOR_FAIR:
        score -= t.SLEEP_FAIR_DEDUCTION
        explanation.append("Sleep could be better")
    else:
        explanation.append(GOOD_SLEEP_NOTE)

    hrv_delta = percent_delta(today.hrv, baseline.hrv, BaselineConfig.DEFAULT_HRV)
    if hrv_delta < t.HRV_DROP_SEVERE_PCT:
        score -= t.HRV_SEVERE_DEDUCTION
        explanation.append("HRV significantly below baseline - high stress or fatigue")
    elif hrv_delta < t.HRV_DROP_MILD_PCT:
        score -= t.HRV_MILD_DEDUCTION
        explanation.append("HRV slightly below baseline")
    elif hrv_delta > t.HRV_RISE_PCT:
        explanation.append(GOOD_RECOVERY_NOTE)

    rhr_delta = percent_delta(today.resting_hr, baseline.resting_hr, BaselineConfig.DEFAULT_RESTING_HR)
    if rhr_delta > t.RHR_RISE_SEVERE_PCT:
        score -= t.RHR_SEVERE_DEDUCTION
        explanation.append("Elevated resting heart rate - possible overtraining or illness")
    elif rhr_delta > t.RHR_RISE_MILD_PCT:
        score -= t.RHR_MILD_DEDUCTION
        explanation.append("Slightly elevated resting heart rate")

    if today.training_load > t.TRAINING_LOAD_HIGH:
        score -= t.TRAINING_LOAD_DEDUCTION
        explanation.append("High training load - need recovery")

    if today.mood_score <= t.LOW_MOOD_OR_ENERGY or today.energy_score <= t.LOW_MOOD_OR_ENERGY:
        score -= t.LOW_MOOD_DEDUCTION
        explanation.append("Low mood or energy levels")

    if today.stress_score > t.STRESS_HIGH:
        score -= t.STRESS_DEDUCTION
        explanation.append("High stress levels")

    score = max(t.MIN_SCORE, min(t.MAX_SCORE, score))
    logger.debug(
        f"Readiness for {today.date}: {score} "
        f"(sleep factor {sleep_factor:.1f}, HRV {hrv_delta:+.1f}%, RHR {rhr_delta:+.1f}%)"
    )
    return ReadinessScore(score=score, explanation=explanation)
