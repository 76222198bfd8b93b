"""Shared builders for test data."""

import datetime as dt

from readiness_bot.service.health_analysis.common.data_models import (
    AgentContext,
    Baseline,
    DailyMetrics,
    UserProfile,
)

TEST_USER_ID = 12345
END_DATE = dt.date(2025, 5, 14)


def make_day(offset: int = 0, **overrides) -> DailyMetrics:
    """A day that sits exactly on the default baseline; ``offset`` counts days back from END_DATE."""
    values = dict(
        date=END_DATE - dt.timedelta(days=offset),
        sleep_hours=7.5,
        sleep_efficiency=85.0,
        hrv=60.0,
        resting_hr=60.0,
        steps=8000,
        workout_minutes=30,
        training_load=50,
        stress_score=50,
        mood_score=3,
        energy_score=3,
    )
    values.update(overrides)
    return DailyMetrics(**values)


def make_week(days: int = 7, **overrides) -> list[DailyMetrics]:
    """``days`` identical days ending on END_DATE, oldest first."""
    return [make_day(offset, **overrides) for offset in range(days - 1, -1, -1)]


def make_context(
    today: DailyMetrics | None = None,
    last_7_days: list[DailyMetrics] | None = None,
    baseline: Baseline | None = None,
    profile: UserProfile | None = None,
) -> AgentContext:
    last_7_days = last_7_days if last_7_days is not None else make_week()
    today = today or (last_7_days[-1] if last_7_days else make_day())
    return AgentContext(
        profile=profile or UserProfile.default(),
        today=today,
        last_7_days=last_7_days,
        baseline=baseline or Baseline.default(),
        all_metrics=last_7_days,
    )


