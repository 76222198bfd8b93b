"""
Anomaly detection module.

Flags today's values that deviate sharply from the baseline, each with a likely cause
and a remediation suggestion. Checks always run in the same order: resting heart rate,
HRV, sleep efficiency.
"""

from typing import List

from loguru import logger

from readiness_bot.service.health_analysis.baselining.baseline_calculator import percent_delta
from readiness_bot.service.health_analysis.common.constants import AnomalyThresholds, BaselineConfig
from readiness_bot.service.health_analysis.common.data_models import Anomaly, Baseline, DailyMetrics


def detect_anomalies(today: DailyMetrics, baseline: Baseline) -> List[Anomaly]:
    """
    Detect single-day anomalies.

    Args:
        today: Today's metrics.
        baseline: The user's baseline.

    Returns:
        Zero to three anomalies, in detection order.
    """
    anomalies = []

    rhr_delta = percent_delta(today.resting_hr, baseline.resting_hr, BaselineConfig.DEFAULT_RESTING_HR)
    if rhr_delta > AnomalyThresholds.RESTING_HR_RISE_PCT:
        anomalies.append(
            Anomaly(
                metric="Resting Heart Rate",
                deviation=f"{rhr_delta:.1f}% above baseline",
                cause="Possible overtraining, stress, or early illness",
                suggestion="Rest today, hydrate, monitor body temperature",
            )
        )

    hrv_delta = percent_delta(today.hrv, baseline.hrv, BaselineConfig.DEFAULT_HRV)
    if hrv_delta < AnomalyThresholds.HRV_DROP_PCT:
        anomalies.append(
            Anomaly(
                metric="Heart Rate Variability",
                deviation=f"{abs(hrv_delta):.1f}% below baseline",
                cause="High stress, insufficient recovery, or poor sleep",
                suggestion="Switch to light activity (e.g., 20min walk), prioritize sleep tonight",
            )
        )

    sleep_efficiency_delta = percent_delta(
        today.sleep_efficiency, baseline.sleep_efficiency, BaselineConfig.DEFAULT_SLEEP_EFFICIENCY
    )
    if sleep_efficiency_delta < AnomalyThresholds.SLEEP_EFFICIENCY_DROP_PCT:
        anomalies.append(
            Anomaly(
                metric="Sleep Efficiency",
                deviation=f"{abs(sleep_efficiency_delta):.1f}% below baseline",
                cause="Stress, caffeine late in day, or environment issues",
                suggestion="Review sleep hygiene: avoid screens 1hr before bed, cool room, consistent schedule",
            )
        )

    if anomalies:
        logger.info(f"Detected {len(anomalies)} anomalies for {today.date}: {[a.metric for a in anomalies]}")
    return anomalies
