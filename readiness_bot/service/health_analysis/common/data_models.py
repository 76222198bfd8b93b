"""
Data models for the health analysis engine.

This module provides Pydantic models for:
- Daily metrics records and the user profile (engine inputs)
- Baseline, readiness, burnout risk and anomaly outputs
- What-if simulation, daily plan and sleep option outputs
- Agent recommendations and the shared agent context
"""

import datetime as dt
import math
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from readiness_bot.service.health_analysis.common.constants import BaselineConfig, MetricBounds


def _clamp(value: float, low: float, high: float, fallback: float) -> float:
    """Clamp a value into [low, high], replacing NaN/inf with a fallback."""
    if value is None or math.isnan(value) or math.isinf(value):
        return fallback
    return max(low, min(high, value))


# Engine inputs


class DailyMetrics(BaseModel):
    """One day of physiological and subjective metrics."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    sleep_hours: float  # Hours slept
    sleep_efficiency: float  # Time asleep / time in bed (%)
    hrv: float  # Nightly HRV (ms)
    resting_hr: float  # Resting heart rate (bpm)
    steps: int = 0
    workout_minutes: int = 0
    training_load: float = 0  # 0-100 scale
    stress_score: float = 0  # 0-100 scale
    mood_score: int = 3  # 1-5
    energy_score: int = 3  # 1-5

    @field_validator("sleep_hours")
    @classmethod
    def _clamp_sleep_hours(cls, value: float) -> float:
        return _clamp(value, *MetricBounds.SLEEP_HOURS, fallback=BaselineConfig.DEFAULT_SLEEP_HOURS)

    @field_validator("sleep_efficiency")
    @classmethod
    def _clamp_sleep_efficiency(cls, value: float) -> float:
        return _clamp(value, *MetricBounds.PERCENT, fallback=BaselineConfig.DEFAULT_SLEEP_EFFICIENCY)

    @field_validator("hrv")
    @classmethod
    def _clamp_hrv(cls, value: float) -> float:
        return _clamp(value, MetricBounds.MIN_HEART_VALUE, math.inf, fallback=BaselineConfig.DEFAULT_HRV)

    @field_validator("resting_hr")
    @classmethod
    def _clamp_resting_hr(cls, value: float) -> float:
        return _clamp(value, MetricBounds.MIN_HEART_VALUE, math.inf, fallback=BaselineConfig.DEFAULT_RESTING_HR)

    @field_validator("steps", "workout_minutes")
    @classmethod
    def _clamp_counts(cls, value: int) -> int:
        return max(0, value)

    @field_validator("training_load")
    @classmethod
    def _clamp_training_load(cls, value: float) -> float:
        return _clamp(value, *MetricBounds.PERCENT, fallback=0.0)

    @field_validator("stress_score")
    @classmethod
    def _clamp_stress_score(cls, value: float) -> float:
        return _clamp(value, *MetricBounds.PERCENT, fallback=BaselineConfig.DEFAULT_STRESS_SCORE)

    @field_validator("mood_score", "energy_score")
    @classmethod
    def _clamp_subjective_score(cls, value: int) -> int:
        low, high = MetricBounds.SUBJECTIVE_SCORE
        return max(low, min(high, value))


class Goal(str, Enum):
    LOSE_FAT = "lose_fat"
    BUILD_MUSCLE = "build_muscle"
    MAINTAIN = "maintain"


class Chronotype(str, Enum):
    EARLY = "early"
    NORMAL = "normal"
    NIGHT = "night"


class UserProfile(BaseModel):
    """User configuration collected during onboarding."""

    name: str = ""
    age: Optional[int] = None
    goal: Goal = Goal.MAINTAIN
    chronotype: Chronotype = Chronotype.NORMAL
    training_frequency: int = 3  # Sessions per week
    baseline_sleep_need: float = 8.0  # Hours
    exam_phase: bool = False
    onboarding_complete: bool = False

    @classmethod
    def default(cls) -> "UserProfile":
        return cls()


# Baseline and scores


class Baseline(BaseModel):
    """Rolling reference values for a user's "normal"."""

    hrv: float
    resting_hr: float
    sleep_hours: float
    sleep_efficiency: float
    stress_score: float

    @classmethod
    def default(cls) -> "Baseline":
        """Baseline used when there is no history at all."""
        return cls(
            hrv=BaselineConfig.DEFAULT_HRV,
            resting_hr=BaselineConfig.DEFAULT_RESTING_HR,
            sleep_hours=BaselineConfig.DEFAULT_SLEEP_HOURS,
            sleep_efficiency=BaselineConfig.DEFAULT_SLEEP_EFFICIENCY,
            stress_score=BaselineConfig.DEFAULT_STRESS_SCORE,
        )


class ReadinessScore(BaseModel):
    """Daily readiness score (0-100) with ordered reasons."""

    score: int
    explanation: List[str] = Field(default_factory=list)


class BurnoutLevel(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


class BurnoutRisk(BaseModel):
    """Three-tier burnout classification over the recent window."""

    level: BurnoutLevel
    rationale: List[str] = Field(default_factory=list)
    actions: List[str] = Field(default_factory=list)
    risk_score: int = 0  # Additive sum of the triggered penalties


class Anomaly(BaseModel):
    """A single-day deviation from baseline."""

    metric: str
    deviation: str
    cause: str
    suggestion: str


class WhatIfResult(BaseModel):
    """Predicted impact of an activity choice on tomorrow."""

    readiness_delta: float
    sleep_delta: float
    recovery_delta: float
    explanation: str


class TrainingIntensity(str, Enum):
    REST = "Rest"
    LIGHT = "Light"
    MODERATE = "Moderate"
    HIIT = "HIIT"
    STRENGTH = "Strength"


class DailyPlan(BaseModel):
    """Training intensity, priorities and sleep target for today."""

    training_intensity: TrainingIntensity
    priorities: List[str] = Field(default_factory=list)
    sleep_target_hours: float
    readiness: ReadinessScore


class SleepVerdict(str, Enum):
    IDEAL = "ideal"
    ACCEPTABLE = "acceptable"
    RISKY = "risky"


class SleepOption(BaseModel):
    """One bedtime/wake time proposal from the sleep negotiator."""

    bedtime: str  # HH:MM
    wake_time: str  # HH:MM
    sleep_hours: float
    readiness_impact: int
    recovery_impact: int
    reasoning: str
    recommendation: SleepVerdict


# Agent recommendations


class RecommendationType(str, Enum):
    SLEEP = "sleep"
    TRAINING = "training"
    STRESS = "stress"
    ALERT = "alert"
    PLANNING = "planning"
    NUTRITION = "nutrition"
    GENERAL = "general"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionKind(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    SNOOZE = "snooze"


class RecommendationAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    kind: ActionKind


def new_recommendation_id(prefix: str = "rec") -> str:
    """Return a collision-safe recommendation id such as ``sleep-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class AgentRecommendation(BaseModel):
    """A recommendation produced by one agent; immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_recommendation_id)
    created_at: dt.datetime = Field(default_factory=_utcnow)
    agent: str
    type: RecommendationType
    title: str
    rationale: str
    priority: Priority = Priority.MEDIUM
    actions: List[RecommendationAction] = Field(default_factory=list)


class AgentContext(BaseModel):
    """Everything an agent needs for one analysis cycle."""

    profile: UserProfile
    today: DailyMetrics
    last_7_days: List[DailyMetrics]
    baseline: Baseline
    all_metrics: List[DailyMetrics]
