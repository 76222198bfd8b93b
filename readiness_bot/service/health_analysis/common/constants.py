"""
Constants for the health analysis engine.

This module defines constants used throughout the engine, including:
- Default baseline values and window sizes
- Readiness deductions and their thresholds
- Burnout risk penalty weights and level cut-offs
- Anomaly detection thresholds
- Agent-level thresholds
"""


class BaselineConfig:
    """Configuration for baseline calculations."""

    LOOKBACK_DAYS = 14  # Number of most recent days averaged into the baseline
    RECENT_WINDOW_DAYS = 7  # Size of the "last 7 days" window handed to the scorers

    DEFAULT_HRV = 60.0
    DEFAULT_RESTING_HR = 60.0
    DEFAULT_SLEEP_HOURS = 7.5
    DEFAULT_SLEEP_EFFICIENCY = 85.0
    DEFAULT_STRESS_SCORE = 50.0


class MetricBounds:
    """Valid ranges used to clamp incoming daily metrics."""

    SLEEP_HOURS = (0.0, 24.0)
    PERCENT = (0.0, 100.0)
    MIN_HEART_VALUE = 1.0  # HRV and resting HR must stay strictly positive
    SUBJECTIVE_SCORE = (1, 5)  # Mood and energy


class ReadinessThresholds:
    """Thresholds and deductions for the daily readiness score."""

    START_SCORE = 100
    MIN_SCORE = 0
    MAX_SCORE = 100

    SLEEP_FACTOR_POOR = 70  # Below: poor sleep
    SLEEP_FACTOR_FAIR = 85  # Below: sleep could be better
    SLEEP_POOR_DEDUCTION = 20
    SLEEP_FAIR_DEDUCTION = 10

    HRV_DROP_SEVERE_PCT = -15
    HRV_DROP_MILD_PCT = -5
    HRV_RISE_PCT = 5
    HRV_SEVERE_DEDUCTION = 25
    HRV_MILD_DEDUCTION = 10

    RHR_RISE_SEVERE_PCT = 10
    RHR_RISE_MILD_PCT = 5
    RHR_SEVERE_DEDUCTION = 20
    RHR_MILD_DEDUCTION = 10

    TRAINING_LOAD_HIGH = 80
    TRAINING_LOAD_DEDUCTION = 15

    LOW_MOOD_OR_ENERGY = 2  # At or below
    LOW_MOOD_DEDUCTION = 15

    STRESS_HIGH = 75
    STRESS_DEDUCTION = 10


class BurnoutThresholds:
    """Penalty weights and cut-offs for the burnout risk assessment."""

    TREND_WINDOW_DAYS = 3  # HRV and RHR are averaged over the last 3 days

    HRV_DECLINE_RATIO = 0.85
    HRV_DECLINE_PENALTY = 30

    RHR_ELEVATED_RATIO = 1.1
    RHR_ELEVATED_PENALTY = 25

    SLEEP_EFFICIENCY_RATIO = 0.9
    SLEEP_EFFICIENCY_PENALTY = 20

    STRESS_HIGH = 70
    MOOD_ENERGY_LOW = 3
    STRESS_MOOD_PENALTY = 25

    RED_LEVEL = 50
    YELLOW_LEVEL = 25


class AnomalyThresholds:
    """Single-day deviation thresholds (percent relative to baseline)."""

    RESTING_HR_RISE_PCT = 10
    HRV_DROP_PCT = -15
    SLEEP_EFFICIENCY_DROP_PCT = -10


class AgentThresholds:
    """Thresholds used by the built-in recommendation agents."""

    SLEEP_DEBT_HOURS = 3
    SLEEP_EFFICIENCY_MIN = 80

    STRESS_ALERT = 70

    REST_DAY_READINESS = 40
    QUALITY_SESSION_READINESS = 80
    QUALITY_SESSION_MAX_LOAD = 60

    REMOTE_FALLBACK_HRV_RATIO = 0.9


class PlanThresholds:
    """Thresholds for the daily plan and the sleep negotiator."""

    LIGHT_READINESS = 60
    MODERATE_READINESS = 80
    EXTRA_SLEEP_HOURS = 0.5
    MAX_PRIORITIES = 3

    SLEEP_DEBT_HOURS = 2
    HIGH_STRESS = 70
    LOW_RECOVERY_HRV_RATIO = 0.9
    COMPROMISE_GAP_HOURS = 0.5

    SLEEP_IMPACT_PER_HOUR = 8
    DEBT_PAYBACK_BONUS = 5
    STRESS_RECOVERY_BONUS = 5
