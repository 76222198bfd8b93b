"""
Sleep negotiator module.

Proposes bedtime/wake time options for tonight: the user's preferred window, the window
that is optimal for recovery, a compromise between the two and, when something is
scheduled early tomorrow, a window that fits around it. Times are decimal hours
(22.5 == 22:30).
"""

from typing import List, Optional

from readiness_bot.service.health_analysis.common.constants import PlanThresholds
from readiness_bot.service.health_analysis.common.data_models import Baseline, DailyMetrics, SleepOption, SleepVerdict

_VERDICT_ORDER = {SleepVerdict.IDEAL: 0, SleepVerdict.ACCEPTABLE: 1, SleepVerdict.RISKY: 2}


def format_clock(hours: float) -> str:
    """Format decimal hours as HH:MM, wrapping around midnight."""
    total_minutes = round(hours * 60) % (24 * 60)
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def _sleep_duration(bedtime: float, wake_time: float) -> float:
    duration = wake_time - bedtime
    # A bedtime before midnight (e.g. 23.0) with a morning wake time (7.0)
    if duration <= 0:
        duration += 24
    return duration


def readiness_impact(sleep_hours: float, baseline: Baseline, sleep_debt: float, high_stress: bool) -> int:
    """Expected readiness change from sleeping the given number of hours."""
    sleep_diff = sleep_hours - baseline.sleep_hours
    impact = sleep_diff * PlanThresholds.SLEEP_IMPACT_PER_HOUR
    if sleep_debt > PlanThresholds.SLEEP_DEBT_HOURS and sleep_diff > 0:
        impact += PlanThresholds.DEBT_PAYBACK_BONUS
    if high_stress and sleep_diff > PlanThresholds.EXTRA_SLEEP_HOURS:
        impact += PlanThresholds.STRESS_RECOVERY_BONUS
    return round(impact)


def generate_sleep_options(
    baseline: Baseline,
    today: DailyMetrics,
    desired_bedtime: float,
    wake_time: float,
    early_event_hour: Optional[float] = None,
) -> List[SleepOption]:
    """
    Generate bedtime options for tonight, best first.

    Args:
        baseline: The user's baseline.
        today: Today's metrics.
        desired_bedtime: Preferred bedtime in decimal hours.
        wake_time: Planned wake time in decimal hours.
        early_event_hour: Start hour of tomorrow's earliest morning commitment, if any.

    Returns:
        Options sorted ideal, acceptable, risky.
    """
    sleep_debt = baseline.sleep_hours * 7 - 7 * today.sleep_hours
    high_stress = today.stress_score > PlanThresholds.HIGH_STRESS
    low_recovery = today.hrv < baseline.hrv * PlanThresholds.LOW_RECOVERY_HRV_RATIO

    options = []

    desired_sleep = _sleep_duration(desired_bedtime, wake_time)
    options.append(
        SleepOption(
            bedtime=format_clock(desired_bedtime),
            wake_time=format_clock(wake_time),
            sleep_hours=round(desired_sleep, 2),
            readiness_impact=readiness_impact(desired_sleep, baseline, sleep_debt, high_stress),
            recovery_impact=round((desired_sleep - baseline.sleep_hours) * 10),
            reasoning=f"Based on your preference of {format_clock(desired_bedtime)} bedtime",
            recommendation=SleepVerdict.ACCEPTABLE if desired_sleep >= baseline.sleep_hours else SleepVerdict.RISKY,
        )
    )

    optimal_sleep = baseline.sleep_hours
    if sleep_debt > PlanThresholds.SLEEP_DEBT_HOURS:
        optimal_sleep += PlanThresholds.EXTRA_SLEEP_HOURS
    if high_stress:
        optimal_sleep += PlanThresholds.EXTRA_SLEEP_HOURS
    optimal_bedtime = wake_time - optimal_sleep

    if sleep_debt > PlanThresholds.SLEEP_DEBT_HOURS:
        reasoning = f"Extra sleep recommended to pay back {sleep_debt:.1f}h sleep debt"
    elif high_stress or low_recovery:
        reasoning = "Extra recovery needed due to high stress or low HRV"
    else:
        reasoning = "Optimal for maintaining baseline recovery"
    options.append(
        SleepOption(
            bedtime=format_clock(optimal_bedtime),
            wake_time=format_clock(wake_time),
            sleep_hours=round(optimal_sleep, 2),
            readiness_impact=readiness_impact(optimal_sleep, baseline, sleep_debt, high_stress),
            recovery_impact=round((optimal_sleep - baseline.sleep_hours) * 15),
            reasoning=reasoning,
            recommendation=SleepVerdict.IDEAL,
        )
    )

    # Compare bedtimes on the same clock as the wake time
    desired_bedtime_abs = wake_time - desired_sleep
    if abs(desired_bedtime_abs - optimal_bedtime) > PlanThresholds.COMPROMISE_GAP_HOURS:
        compromise_bedtime = (desired_bedtime_abs + optimal_bedtime) / 2
        compromise_sleep = wake_time - compromise_bedtime
        options.append(
            SleepOption(
                bedtime=format_clock(compromise_bedtime),
                wake_time=format_clock(wake_time),
                sleep_hours=round(compromise_sleep, 2),
                readiness_impact=readiness_impact(compromise_sleep, baseline, sleep_debt, high_stress),
                recovery_impact=round((compromise_sleep - baseline.sleep_hours) * 12),
                reasoning="A middle ground between your preference and optimal recovery",
                recommendation=SleepVerdict.ACCEPTABLE,
            )
        )

    if early_event_hour is not None:
        suggested_wake = early_event_hour - 1
        options.append(
            SleepOption(
                bedtime=format_clock(suggested_wake - baseline.sleep_hours),
                wake_time=format_clock(suggested_wake),
                sleep_hours=round(baseline.sleep_hours, 2),
                readiness_impact=0,
                recovery_impact=0,
                reasoning=f"Early event tomorrow at {format_clock(early_event_hour)}",
                recommendation=SleepVerdict.ACCEPTABLE,
            )
        )

    return sorted(options, key=lambda option: _VERDICT_ORDER[option.recommendation])
