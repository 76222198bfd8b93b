"""
Baseline calculator for daily health metrics.

This module provides functionality for calculating personal baselines from the stored
daily metrics history, allowing for meaningful comparison of today's metrics against
a user's typical values.
"""

from typing import Optional, Sequence

from loguru import logger

from readiness_bot.service.health_analysis.common.constants import BaselineConfig
from readiness_bot.service.health_analysis.common.data_models import Baseline, DailyMetrics

BASELINE_FIELDS = ("hrv", "resting_hr", "sleep_hours", "sleep_efficiency", "stress_score")


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def compute_baseline(history: Sequence[DailyMetrics], lookback_days: Optional[int] = None) -> Baseline:
    """
    Calculate the rolling baseline from a metrics history.

    Args:
        history: Daily metrics ordered oldest to newest. Any length, including zero.
        lookback_days: Number of most recent days to average. Defaults to 14.

    Returns:
        Baseline holding the unweighted mean of each baseline field over the window,
        or the fixed default baseline when the history is empty.
    """
    lookback_days = lookback_days or BaselineConfig.LOOKBACK_DAYS

    if not history:
        logger.debug("Empty metrics history, using default baseline")
        return Baseline.default()

    window = list(history)[-lookback_days:]
    baseline = Baseline(**{field: _mean([getattr(m, field) for m in window]) for field in BASELINE_FIELDS})
    logger.debug(f"Computed baseline over {len(window)} days: {baseline}")
    return baseline


def safe_reference(value: float, default: float) -> float:
    """Return a usable (positive) baseline value, falling back to the default one."""
    if value is None or value <= 0:
        logger.warning(f"Invalid baseline reference {value}, falling back to {default}")
        return default
    return value


def percent_delta(current: float, reference: float, default_reference: float) -> float:
    """
    Relative change of a metric against its baseline, in percent.

    Args:
        current: Today's value.
        reference: Baseline value.
        default_reference: Value used instead of a zero or negative baseline.

    Returns:
        (current - reference) / reference * 100
    """
    reference = safe_reference(reference, default_reference)
    return (current - reference) / reference * 100
